"""
Monte Carlo Tree Search (MCTS) algorithm for Prophecies.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Walk the tree with the UCB policy while states are known
2. Expansion: Add statistics for the first unknown state reached
3. Simulation: Play uniformly random moves until the board is full
4. Backpropagation: Credit every walked (state, action) pair with the result

The tree is a dictionary keyed by game state, owned by the caller and passed
in explicitly. It persists across moves and is pruned with ``prune_tree``.
"""
from __future__ import annotations
import logging
import random
import time
from typing import Any, Dict, List, Optional, Tuple

from prophecies_ai.core.game import GameState, IllegalMoveError
from prophecies_ai.core.actions import Action
from prophecies_ai.mcts.node import ActionScores

logger = logging.getLogger(__name__)

Tree = Dict[GameState, ActionScores]
Path = List[Tuple[GameState, Action]]


class SearchInvariantError(AssertionError):
    """The search reached a state its own bookkeeping says is impossible."""


def _apply(state: GameState, action: Action) -> None:
    # Actions reaching here were enumerated as legal for this exact state
    try:
        state.apply_action(action)
    except IllegalMoveError as exc:
        raise SearchInvariantError(f"Search generated an illegal move: {exc}") from exc


def select_path(root: GameState, tree: Tree, rng: random.Random) -> Tuple[GameState, Path]:
    """
    Walk down the tree using the selection policy.

    Stops at the first state without statistics, or at a known state with
    no available actions (a full board).

    Args:
        root: State to start from
        tree: Search tree
        rng: Random source for tie-breaking

    Returns:
        Tuple of (state reached, walked (state, action) pairs)
    """
    path: Path = []
    node = root.clone()

    while True:
        tally = tree.get(node)
        if tally is None or not tally.available_actions:
            break
        action = tally.choose_action(tally.available_actions, rng)
        path.append((node.clone(), action))
        _apply(node, action)

    return node, path


def expand_node(node: GameState, tree: Tree) -> ActionScores:
    """
    Ensure the tree has statistics for a state.

    Args:
        node: State to add
        tree: Search tree

    Returns:
        The (possibly pre-existing) statistics entry
    """
    tally = tree.get(node)
    if tally is None:
        tally = ActionScores(node)
        tree[node.clone()] = tally
    return tally


def simulate_game(node: GameState, path: Path, rng: random.Random) -> int:
    """
    Play uniformly random legal moves until the board is full.

    ``node`` is advanced in place and every move is appended to ``path``.

    Args:
        node: State to roll out from (mutated)
        path: Walked (state, action) pairs to extend
        rng: Random source

    Returns:
        Number of moves played
    """
    steps = 0
    while True:
        available = node.get_legal_actions()
        if not available:
            break
        action = rng.choice(available)
        path.append((node.clone(), action))
        _apply(node, action)
        steps += 1

    if not node.is_finished():
        raise SearchInvariantError("Rollout stopped on an unfinished board")
    return steps


def compute_reward(player: int, scores: List[int]) -> float:
    """
    Reward of a final score for one player.

    Args:
        player: Player the reward is for
        scores: Final scores indexed by player

    Returns:
        1.0 for a win, 0.0 for a draw, -1.0 for a loss
    """
    mine, theirs = scores[player], scores[1 - player]
    if mine > theirs:
        return 1.0
    if mine == theirs:
        return 0.0
    return -1.0


def backpropagate(path: Path, scores: List[int], tree: Tree) -> int:
    """
    Credit the walked path with a playout result.

    Pairs are visited root first. Each gets the reward for the player to
    move in its own state. Propagation stops at the first state that has
    no tree entry.

    Args:
        path: Walked (state, action) pairs
        scores: Final scores of the playout
        tree: Search tree

    Returns:
        Number of entries updated
    """
    updated = 0
    for state, action in path:
        tally = tree.get(state)
        if tally is None:
            break
        tally.mark_visit(action, compute_reward(state.active_player, scores))
        updated += 1
    return updated


def playout(root: GameState, tree: Tree, rng: random.Random) -> int:
    """
    Run one selection, expansion, simulation and backpropagation cycle.

    Does nothing when the root is already finished.

    Args:
        root: State to search from
        tree: Search tree (updated in place)
        rng: Random source

    Returns:
        Number of moves in the playout
    """
    if root.is_finished():
        return 0

    # 1. Selection
    node, path = select_path(root, tree, rng)

    # 2. Expansion
    expand_node(node, tree)

    # 3. Simulation
    simulate_game(node, path, rng)

    # 4. Backpropagation
    backpropagate(path, node.get_scores(), tree)

    if path[0][0] != root or root not in tree:
        raise SearchInvariantError("Playout did not start from the root")
    return len(path)


def mcts_search(
    root: GameState,
    tree: Tree,
    rng: random.Random,
    playouts: int,
    time_limit: Optional[float] = None
) -> Dict[str, Any]:
    """
    Run playouts until the budget or the time limit is used up.

    The time limit is only checked between playouts, so the tree is always
    left consistent.

    Args:
        root: State to search from
        tree: Search tree (updated in place)
        rng: Random source
        playouts: Maximum number of playouts
        time_limit: Optional time limit in seconds

    Returns:
        Search statistics
    """
    stats: Dict[str, Any] = {
        "playouts": 0,
        "max_depth": 0,
        "total_steps": 0,
        "stopped_early": False,
    }

    start_time = time.time()
    for _ in range(playouts):
        if time_limit is not None and time.time() - start_time > time_limit:
            stats["stopped_early"] = True
            break
        if root.is_finished():
            break

        steps = playout(root, tree, rng)
        stats["playouts"] += 1
        stats["total_steps"] += steps
        stats["max_depth"] = max(stats["max_depth"], steps)

    stats["time_elapsed"] = time.time() - start_time
    stats["playouts_per_second"] = stats["playouts"] / max(0.001, stats["time_elapsed"])
    stats["average_steps"] = stats["total_steps"] / max(1, stats["playouts"])
    stats["tree_size"] = len(tree)

    logger.debug(
        "Search: %d playouts in %.3fs (%.1f/s), tree size %d",
        stats["playouts"], stats["time_elapsed"], stats["playouts_per_second"], stats["tree_size"]
    )
    return stats


def prune_tree(tree: Tree, state: GameState) -> int:
    """
    Drop entries for states the game can no longer reach.

    Empty cells only ever decrease, so entries with more empty cells than
    ``state`` are behind it and removed. Entries with as many or fewer
    empty cells are kept, since their statistics may still be reused.

    Args:
        tree: Search tree (updated in place)
        state: New root state

    Returns:
        Number of entries removed
    """
    empty = state.empty_cells()
    stale = [node for node in tree if node.empty_cells() > empty]
    for node in stale:
        del tree[node]

    if stale:
        logger.debug("Pruned %d of %d tree entries", len(stale), len(stale) + len(tree))
    return len(stale)


def select_best_action(tally: ActionScores) -> Optional[Tuple[Action, Tuple[int, float]]]:
    """
    Pick the visited action with the best average reward.

    Ties go to the action that comes first in enumeration order (lowest
    row, then column, then cross-out before ascending guesses).

    Args:
        tally: Statistics of the state to choose from

    Returns:
        Tuple of (action, (visits, reward)), or None if nothing was visited
    """
    visited = [(action, stats) for action, stats in tally.visits.items() if stats[0] > 0]
    if not visited:
        return None

    return min(
        visited,
        key=lambda item: (-(item[1][1] / item[1][0]), item[0].sort_key())
    )


def get_principal_variation(root: GameState, tree: Tree, max_depth: int = 10) -> List[Tuple[Action, float]]:
    """
    Follow the best action from state to state through the tree.

    This is useful for analysis and debugging.

    Args:
        root: State to start from
        tree: Search tree
        max_depth: Maximum number of moves to follow

    Returns:
        List of (action, average reward) pairs
    """
    result = []
    current = root.clone()

    while len(result) < max_depth:
        tally = tree.get(current)
        if tally is None:
            break
        best = select_best_action(tally)
        if best is None:
            break
        action, (visits, reward) = best
        result.append((action, reward / visits))
        _apply(current, action)

    return result


def get_action_statistics(root: GameState, tree: Tree) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all visited actions from the root.

    Args:
        root: State to report on
        tree: Search tree

    Returns:
        Dictionary mapping action strings to statistics
    """
    tally = tree.get(root)
    if tally is None:
        return {}

    total_visits = tally.total_visits()
    result = {}
    for action in sorted(tally.visits, key=Action.sort_key):
        visits, reward = tally.get_visit(action)
        result[str(action)] = {
            "visits": visits,
            "reward": reward,
            "value": reward / max(1, visits),
            "ucb": tally.ucb_score(action, total_visits),
        }
    return result
