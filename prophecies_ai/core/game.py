"""
Game state and rules for Prophecies.

This module defines the core game mechanics, including:
- GameState: a grid of cells plus whose turn it is
- Move legality, placement and the automatic cross-out cascade
- Scoring of completed rows and columns
- IllegalMoveError, the only error a caller is expected to handle

Two players alternate placing either a cross-out or a numbered guess into an
empty cell. A guess may not repeat a number already guessed in the same row
or column. Once a line is full, each guess equal to the number of guesses in
that line scores that many points for its owner.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import random

from prophecies_ai.core.actions import Action, get_legal_actions
from prophecies_ai.core.cells import Cell, EMPTY, CROSSED_OUT
from prophecies_ai.core.constants import IllegalMoveReason, NUM_PLAYERS


class IllegalMoveError(ValueError):
    """
    Raised when a placement breaks the rules.

    Carries a snapshot of the board the move was attempted on, the target
    coordinates, the proposed cell and the reason it was rejected.
    """

    def __init__(self, state: GameState, row: int, col: int, cell: Cell, reason: IllegalMoveReason):
        self.state = state
        self.row = row
        self.col = col
        self.cell = cell
        self.reason = reason
        super().__init__(f"Cannot perform {cell!r} at ({row}, {col}): {reason.message}")


@dataclass(eq=True)
class GameState:
    """
    Complete representation of a Prophecies position.

    Cells are stored row-major in a flat list. Equality and hashing cover
    the dimensions, every cell and the active player, so identical positions
    reached through different move orders compare equal. A state used as a
    dictionary key must not be mutated afterwards; mutate a ``clone()``.
    """
    nrows: int
    ncols: int
    board: List[Cell] = field(default_factory=list)
    active_player: int = 0

    def __post_init__(self):
        if not self.board:
            self.board = [EMPTY] * (self.nrows * self.ncols)
        if len(self.board) != self.nrows * self.ncols:
            raise ValueError("Board size must match nrows * ncols")

    @classmethod
    def new(cls, nrows: int, ncols: int) -> GameState:
        """
        Create an empty board with player 0 to move.

        Args:
            nrows: Number of rows
            ncols: Number of columns

        Returns:
            Initial GameState
        """
        if nrows <= 0 or ncols <= 0:
            raise ValueError("Grid dimensions must be positive")
        return cls(nrows=nrows, ncols=ncols)

    def __hash__(self) -> int:
        return hash((self.nrows, self.ncols, self.active_player, tuple(self.board)))

    @property
    def max_guess(self) -> int:
        """Largest number a guess may take."""
        return max(self.nrows, self.ncols)

    def clone(self) -> GameState:
        """Create an independent copy of the state."""
        return GameState(
            nrows=self.nrows,
            ncols=self.ncols,
            board=list(self.board),
            active_player=self.active_player,
        )

    def get_cell(self, row: int, col: int) -> Cell:
        return self.board[row * self.ncols + col]

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        self.board[row * self.ncols + col] = cell

    def is_finished(self) -> bool:
        """Check whether every cell has been filled."""
        return all(not cell.is_empty for cell in self.board)

    def empty_cells(self) -> int:
        return sum(1 for cell in self.board if cell.is_empty)

    def get_scores(self) -> List[int]:
        """
        Score every completed row and column.

        In a full line with ``n`` guesses, each guess equal to ``n`` earns
        ``n`` points for its owner. Rows and columns are scored
        independently, so one guess can score twice.

        Returns:
            Scores indexed by player ID
        """
        scores = [0] * NUM_PLAYERS
        lines = [
            [self.get_cell(row, col) for col in range(self.ncols)]
            for row in range(self.nrows)
        ]
        lines.extend(
            [self.get_cell(row, col) for row in range(self.nrows)]
            for col in range(self.ncols)
        )
        for line in lines:
            if any(cell.is_empty for cell in line):
                continue
            num_guesses = sum(1 for cell in line if cell.is_guess)
            for cell in line:
                if cell.is_guess and cell.number == num_guesses:
                    scores[cell.player] += num_guesses
        return scores

    def winner(self) -> Optional[int]:
        """
        Get the winning player.

        Returns:
            ID of the winner, or None if the game is unfinished or drawn
        """
        if not self.is_finished():
            return None
        scores = self.get_scores()
        if scores[0] > scores[1]:
            return 0
        if scores[1] > scores[0]:
            return 1
        return None

    def illegal_reason(self, row: int, col: int, cell: Cell) -> Optional[IllegalMoveReason]:
        """
        Find the first rule a placement would break.

        Args:
            row: Target row
            col: Target column
            cell: Cell to place

        Returns:
            Reason the move is illegal, or None if it is legal
        """
        if row < 0 or row >= self.nrows:
            return IllegalMoveReason.ROW_OUT_OF_BOUNDS
        if col < 0 or col >= self.ncols:
            return IllegalMoveReason.COLUMN_OUT_OF_BOUNDS
        if not self.get_cell(row, col).is_empty:
            return IllegalMoveReason.CELL_OCCUPIED
        if cell.is_empty:
            return IllegalMoveReason.ERASE
        if cell.is_crossed_out:
            return None

        if cell.player != self.active_player:
            return IllegalMoveReason.WRONG_PLAYER
        if cell.number < 1:
            return IllegalMoveReason.GUESS_ZERO
        if cell.number > self.max_guess:
            return IllegalMoveReason.GUESS_TOO_LARGE

        # Same number already guessed in this row or column
        for other_col in range(self.ncols):
            other = self.get_cell(row, other_col)
            if other.is_guess and other.number == cell.number:
                return IllegalMoveReason.DUPLICATE_GUESS
        for other_row in range(self.nrows):
            other = self.get_cell(other_row, col)
            if other.is_guess and other.number == cell.number:
                return IllegalMoveReason.DUPLICATE_GUESS

        return None

    def is_legal_move(self, row: int, col: int, cell: Cell) -> bool:
        return self.illegal_reason(row, col, cell) is None

    def get_legal_actions(self) -> List[Action]:
        """
        Get all legal actions for the active player.

        Returns:
            List of legal actions
        """
        return get_legal_actions(self)

    def place(self, row: int, col: int, cell: Cell) -> None:
        """
        Place a cell and pass the turn.

        After a guess, every empty cell sharing its row or column in which
        the next player could no longer legally guess anything is crossed
        out automatically.

        Args:
            row: Target row
            col: Target column
            cell: Cell to place

        Raises:
            IllegalMoveError: If the move breaks the rules; the state is
                left unchanged
        """
        reason = self.illegal_reason(row, col, cell)
        if reason is not None:
            raise IllegalMoveError(self.clone(), row, col, cell, reason)

        self.set_cell(row, col, cell)
        self.active_player = 1 - self.active_player

        if cell.is_guess:
            self._cross_out_dead_cells(row, col)

    def apply_action(self, action: Action) -> None:
        """Place an action's cell at its position."""
        self.place(action.row, action.col, action.cell)

    def _cross_out_dead_cells(self, row: int, col: int) -> None:
        """Cross out cells in the given row and column with no legal guess left."""
        for other_row in range(self.nrows):
            for other_col in range(self.ncols):
                if other_row != row and other_col != col:
                    continue
                if not self.get_cell(other_row, other_col).is_empty:
                    continue
                if not any(
                    self.is_legal_move(other_row, other_col, Cell.guess(self.active_player, number))
                    for number in range(1, self.max_guess + 1)
                ):
                    self.set_cell(other_row, other_col, CROSSED_OUT)

    def __str__(self) -> str:
        lines = []
        for row in range(self.nrows):
            cells = "".join(f"{self.get_cell(row, col)}|" for col in range(self.ncols))
            lines.append(f"|{cells}")

        scores = self.get_scores()
        lines.append(f"Scores: {scores[0]}, {scores[1]}")
        if self.is_finished():
            winner = self.winner()
            lines.append("Draw!" if winner is None else f"Player {winner} wins.")
        else:
            lines.append(f"Player {self.active_player} to move.")
        return "\n".join(lines)


def simulate_random_game(
    nrows: int,
    ncols: int,
    rng: Optional[random.Random] = None
) -> Tuple[GameState, List[int]]:
    """
    Play a game of uniformly random legal moves.

    Args:
        nrows: Number of rows
        ncols: Number of columns
        rng: Random source (a fresh unseeded generator if omitted)

    Returns:
        Tuple of (final game state, scores)
    """
    rng = rng or random.Random()
    state = GameState.new(nrows, ncols)

    while True:
        actions = state.get_legal_actions()
        if not actions:
            break
        state.apply_action(rng.choice(actions))

    return state, state.get_scores()
