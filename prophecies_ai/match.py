"""
Host-facing game of Prophecies against the MCTS bot.

Match bundles the current game state with the bot that searches it. A host
(terminal front end, web page, test) constructs a Match, feeds it moves by
coordinates and guess number, and asks it for the bot's recommendation.
Every accepted move advances the bot's root, which prunes its tree.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from prophecies_ai.core.game import GameState
from prophecies_ai.core.actions import Action, action_from_guess
from prophecies_ai.core.constants import BOT_PLAYER, CROSS_OUT_GUESS, DEFAULT_ROWS, DEFAULT_COLS
from prophecies_ai.mcts.agent import MCTSBot
from prophecies_ai.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)


class CellView(NamedTuple):
    """
    Cell contents as seen by a host.

    Empty is (None, None), crossed out is (None, 0) and a guess is
    (player, number).
    """
    player: Optional[int]
    guess: Optional[int]


@dataclass(frozen=True)
class SearchEdge:
    """A recommended action with the statistics behind it."""
    action: Action
    visits: int
    score: float

    @property
    def win_probability(self) -> float:
        """Estimated chance that the player to move wins by playing this action."""
        return (1.0 + self.score / self.visits) / 2.0


class Match:
    """
    One game of Prophecies with an MCTS bot attached.
    """

    def __init__(
        self,
        nrows: int = DEFAULT_ROWS,
        ncols: int = DEFAULT_COLS,
        bot_player: int = BOT_PLAYER,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize a new game.

        Args:
            nrows: Number of rows
            ncols: Number of columns
            bot_player: ID of the player the bot plays as
            config: MCTS configuration for the bot
            rng: Optional random source for the bot
        """
        if bot_player not in (0, 1):
            raise ValueError("bot_player must be 0 or 1")

        self.bot = MCTSBot(GameState.new(nrows, ncols), bot_player, config=config, rng=rng)

    @property
    def state(self) -> GameState:
        return self.bot.root

    @property
    def bot_player(self) -> int:
        return self.bot.me

    def is_finished(self) -> bool:
        return self.state.is_finished()

    def get_scores(self) -> List[int]:
        return self.state.get_scores()

    def get_active_player(self) -> int:
        return self.state.active_player

    def get_cell(self, row: int, col: int) -> CellView:
        """
        Get the contents of a cell.

        Args:
            row: Row of the cell
            col: Column of the cell

        Returns:
            CellView of the cell

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        state = self.state
        if not (0 <= row < state.nrows and 0 <= col < state.ncols):
            raise IndexError(f"Cannot access {row}, {col}")

        cell = state.get_cell(row, col)
        if cell.is_crossed_out:
            return CellView(None, CROSS_OUT_GUESS)
        if cell.is_guess:
            return CellView(cell.player, cell.number)
        return CellView(None, None)

    def place(self, row: int, col: int, guess: int) -> None:
        """
        Play a move for the active player.

        Args:
            row: Target row
            col: Target column
            guess: 0 to cross the cell out, otherwise the guessed number

        Raises:
            IllegalMoveError: If the move breaks the rules
        """
        state = self.state.clone()
        state.apply_action(action_from_guess(state, row, col, guess))
        self.bot.update(state)

    def playout(self) -> None:
        """Run one playout, e.g. while waiting for the human."""
        self.bot.playout()

    def ponder(self, time_limit: float) -> int:
        """
        Search for a slice of time without committing to a move.

        Args:
            time_limit: Time to spend in seconds

        Returns:
            Number of playouts run
        """
        if self.is_finished():
            return 0
        stats = self.bot.search(playouts=self.bot.config.playouts, time_limit=time_limit)
        logger.debug("Pondered %d playouts in %.3fs", stats["playouts"], stats["time_elapsed"])
        return stats["playouts"]

    def get_best_action(self) -> Optional[SearchEdge]:
        """
        Run the bot's playout budget and return its recommendation.

        Returns:
            SearchEdge for the recommended action, or None if the game is over
        """
        best = self.bot.select_action()
        if best is None:
            return None
        action, (visits, score) = best
        return SearchEdge(action=action, visits=visits, score=score)

    def play_bot_move(self) -> Optional[SearchEdge]:
        """
        Let the bot choose a move and play it.

        Returns:
            The edge that was played, or None if the game is over
        """
        edge = self.get_best_action()
        if edge is not None:
            self.place(edge.action.row, edge.action.col, edge.action.guess)
        return edge

    def winner(self) -> Optional[int]:
        return self.state.winner()

    def __str__(self) -> str:
        return str(self.state)
