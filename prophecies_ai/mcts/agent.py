"""
Monte Carlo Tree Search bot for Prophecies.

This module provides the MCTSBot class, which keeps one search tree alive
for a whole game. The host tells the bot about every real move with
``update``; the bot prunes the tree and keeps the statistics that can still
be reused, then recommends moves after running its playout budget.
"""
import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from prophecies_ai.core.game import GameState
from prophecies_ai.core.actions import Action
from prophecies_ai.mcts.config import MCTSConfig
from prophecies_ai.mcts.search import (
    Tree, mcts_search, playout, prune_tree, select_best_action,
    get_action_statistics, get_principal_variation
)

logger = logging.getLogger(__name__)


class MCTSBot:
    """
    Monte Carlo Tree Search player for Prophecies.

    The bot owns its tree and current root state. Nothing else holds on to
    tree entries between playouts.
    """

    def __init__(
        self,
        root: GameState,
        me: int,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None,
        name: str = "MCTS Bot"
    ):
        """
        Initialize an MCTS bot.

        Args:
            root: Current game state
            me: ID of the player the bot plays as
            config: MCTS configuration parameters
            rng: Random source (defaults to OS entropy, or a seeded
                generator when the config has a seed)
            name: Name of the bot
        """
        self.root = root
        self.me = me
        self.config = config or MCTSConfig()
        self.name = name

        if rng is None:
            if self.config.seed is not None:
                rng = random.Random(self.config.seed)
            else:
                rng = random.SystemRandom()
        self.rng = rng

        self.tree: Tree = {}

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

    def update(self, state: GameState) -> None:
        """
        Tell the bot about the new game state.

        Call exactly once per real move, whoever made it.

        Args:
            state: State after the move
        """
        removed = prune_tree(self.tree, state)
        self.root = state
        logger.debug("%s: new root with %d empty cells, %d entries pruned",
                     self.name, state.empty_cells(), removed)

    def playout(self) -> None:
        """Run a single playout from the current root."""
        playout(self.root, self.tree, self.rng)

    def search(self, playouts: Optional[int] = None, time_limit: Optional[float] = None) -> Dict[str, Any]:
        """
        Run several playouts from the current root.

        Args:
            playouts: Number of playouts (defaults to the configured budget)
            time_limit: Optional time limit in seconds (defaults to the
                configured limit)

        Returns:
            Search statistics
        """
        if playouts is None:
            playouts = self.config.playouts
        if time_limit is None:
            time_limit = self.config.time_limit

        self.last_stats = mcts_search(self.root, self.tree, self.rng, playouts, time_limit)
        return self.last_stats

    def get_best_action(self) -> Optional[Tuple[Action, Tuple[int, float]]]:
        """
        Get the root action with the best average reward.

        No playouts are run here.

        Returns:
            Tuple of (action, (visits, reward)), or None if the game is over
            or the root has not been searched
        """
        if self.root.is_finished():
            return None
        tally = self.tree.get(self.root)
        if tally is None:
            return None
        return select_best_action(tally)

    def select_action(self) -> Optional[Tuple[Action, Tuple[int, float]]]:
        """
        Search with the full budget, then recommend a move.

        Returns:
            Tuple of (action, (visits, reward)), or None if the game is over
        """
        if self.root.is_finished():
            return None

        self.search()
        best = self.get_best_action()
        if best is not None:
            action, (visits, reward) = best
            logger.info("%s selected: %s (%d visits, %.3f value)",
                        self.name, action, visits, reward / visits)
        return best

    @property
    def tree_size(self) -> int:
        return len(self.tree)

    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all visited root actions.

        Returns:
            Dictionary mapping action strings to statistics
        """
        return get_action_statistics(self.root, self.tree)

    def get_principal_variation(self, max_depth: int = 10) -> List[Tuple[Action, float]]:
        """
        Get the line of best actions from the root.

        Returns:
            List of (action, value) pairs
        """
        return get_principal_variation(self.root, self.tree, max_depth)

    def reset(self, root: Optional[GameState] = None) -> None:
        """Forget the whole tree, optionally starting from a new root."""
        self.tree = {}
        self.last_stats = {}
        if root is not None:
            self.root = root

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.playouts} playouts, player {self.me})"


class MCTSBotFactory:
    """
    Factory for creating MCTS bots with different strengths.
    """

    @staticmethod
    def create_fast(root: GameState, me: int) -> MCTSBot:
        return MCTSBot(root, me, config=MCTSConfig.fast(), name="Fast MCTS")

    @staticmethod
    def create_standard(root: GameState, me: int) -> MCTSBot:
        return MCTSBot(root, me, config=MCTSConfig.default(), name="Standard MCTS")

    @staticmethod
    def create_strong(root: GameState, me: int) -> MCTSBot:
        return MCTSBot(root, me, config=MCTSConfig.deep(), name="Strong MCTS")

    @staticmethod
    def create_custom(
        root: GameState,
        me: int,
        playouts: int = 2048,
        time_limit: Optional[float] = None,
        seed: Optional[int] = None,
        name: str = "Custom MCTS"
    ) -> MCTSBot:
        """
        Create a custom MCTS bot.

        Args:
            root: Current game state
            me: ID of the player the bot plays as
            playouts: Playouts per move
            time_limit: Optional time limit in seconds
            seed: Optional seed for reproducible play
            name: Name of the bot

        Returns:
            MCTSBot
        """
        config = MCTSConfig(playouts=playouts, time_limit=time_limit, seed=seed)
        return MCTSBot(root, me, config=config, name=name)
