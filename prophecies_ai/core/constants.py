"""
Constants for the Prophecies game.

This module defines the game constants used throughout the Prophecies
implementation, including cell kinds, player ids, default grid sizes,
search budgets and the fixed set of reasons a move can be rejected.
"""
from enum import Enum, auto
from typing import Dict, Final, List


class CellKind(Enum):
    """Enum representing what a grid cell holds."""
    EMPTY = auto()
    CROSSED_OUT = auto()
    GUESS = auto()


# Players
NUM_PLAYERS: Final[int] = 2
PLAYERS: Final[List[int]] = [0, 1]

# Default seats for a human-vs-bot game
HUMAN_PLAYER: Final[int] = 0
BOT_PLAYER: Final[int] = 1

# Default grid size
DEFAULT_ROWS: Final[int] = 4
DEFAULT_COLS: Final[int] = 4

# Guess number written by the host to request a cross-out
CROSS_OUT_GUESS: Final[int] = 0

# Symbols for terminal display
CROSSED_OUT_SYMBOL: Final[str] = "X"
PLAYER_COLORS: Final[Dict[int, str]] = {
    0: "red",
    1: "cyan",
}

# AI and simulation settings
DEFAULT_PLAYOUTS: Final[int] = 2048
FAST_PLAYOUTS: Final[int] = 256
DEEP_PLAYOUTS: Final[int] = 8192


class IllegalMoveReason(Enum):
    """Why a placement was rejected. The value is the human-readable message."""
    ROW_OUT_OF_BOUNDS = "Row is out of bounds"
    COLUMN_OUT_OF_BOUNDS = "Column is out of bounds"
    CELL_OCCUPIED = "Cannot place on a non-empty square"
    ERASE = "Cannot erase a square"
    WRONG_PLAYER = "Cannot place a guess for your opponent"
    GUESS_ZERO = "Cannot guess 0"
    GUESS_TOO_LARGE = "Guess cannot be larger than both the grid's width and height"
    DUPLICATE_GUESS = "Only one of each guess value per row/column"

    @property
    def message(self) -> str:
        return self.value
