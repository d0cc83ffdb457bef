"""
Grid cells for the Prophecies game.

A cell is either empty, crossed out, or holds one player's numbered guess.
Cells are immutable values: two cells are the same cell exactly when their
contents match, which is what lets whole boards act as search-tree keys.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from prophecies_ai.core.constants import CellKind, CROSSED_OUT_SYMBOL


@dataclass(frozen=True)
class Cell:
    """
    Contents of a single grid cell.

    Use the module-level ``EMPTY`` and ``CROSSED_OUT`` instances and
    ``Cell.guess(player, number)`` rather than calling the constructor.
    """
    kind: CellKind
    player: Optional[int] = None
    number: int = 0

    @classmethod
    def guess(cls, player: int, number: int) -> Cell:
        """
        Create a guess cell.

        Args:
            player: ID of the player writing the guess
            number: The guessed number

        Returns:
            Cell holding the guess
        """
        return cls(CellKind.GUESS, player, number)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_crossed_out(self) -> bool:
        return self.kind is CellKind.CROSSED_OUT

    @property
    def is_guess(self) -> bool:
        return self.kind is CellKind.GUESS

    def sort_key(self) -> Tuple[int, int]:
        """Order cross-outs before guesses, and guesses by number."""
        if self.is_guess:
            return (1, self.number)
        return (0, 0)

    def __str__(self) -> str:
        if self.is_empty:
            return "   "
        if self.is_crossed_out:
            return f" {CROSSED_OUT_SYMBOL} "
        return f"{self.player} {self.number}"

    def __repr__(self) -> str:
        if self.is_guess:
            return f"Guess({self.player}, {self.number})"
        if self.is_crossed_out:
            return "CrossedOut"
        return "Empty"


EMPTY = Cell(CellKind.EMPTY)
CROSSED_OUT = Cell(CellKind.CROSSED_OUT)
