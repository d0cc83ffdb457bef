"""
Monte Carlo Tree Search (MCTS) implementation for Prophecies.

This package provides an MCTS bot that plays Prophecies without any
training, opening book or lookahead table. Each playout works by:

1. Selection: Starting from the root state, pick actions with a UCB score
   while the reached state has statistics in the tree.
2. Expansion: Add statistics for the first unknown state.
3. Simulation: Play uniformly random legal moves until the board is full.
4. Backpropagation: Credit each walked action with +1, 0 or -1 for the
   player who was to move when it was taken.

The tree is keyed by game state and survives between moves; it is pruned
whenever the bot is told about a new position.
"""

from prophecies_ai.mcts.node import ActionScores
from prophecies_ai.mcts.agent import MCTSBot, MCTSBotFactory
from prophecies_ai.mcts.search import (
    Tree,
    SearchInvariantError,
    playout,
    mcts_search,
    select_path,
    expand_node,
    simulate_game,
    compute_reward,
    backpropagate,
    prune_tree,
    select_best_action,
)
from prophecies_ai.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    playouts=2048,     # Playouts per move decision
    time_limit=None,   # Optional time limit in seconds (None = no limit)
    seed=None          # OS entropy
)

__all__ = [
    'MCTSBot',
    'MCTSBotFactory',
    'ActionScores',
    'MCTSConfig',
    'Tree',
    'SearchInvariantError',
    'playout',
    'mcts_search',
    'select_path',
    'expand_node',
    'simulate_game',
    'compute_reward',
    'backpropagate',
    'prune_tree',
    'select_best_action',
    'DEFAULT_CONFIG'
]
