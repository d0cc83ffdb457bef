"""
Prophecies AI Core Package

This package contains the core game logic for Prophecies, including:
- Cell values and the game state grid
- Move legality, placement and automatic cross-outs
- Scoring
- Player actions and the legal-action enumerator
- Constants and enums

All core components can be imported directly from this package.
"""

# Game and game state
from prophecies_ai.core.game import GameState, IllegalMoveError, simulate_random_game

# Cells
from prophecies_ai.core.cells import Cell, EMPTY, CROSSED_OUT

# Actions
from prophecies_ai.core.actions import Action, get_legal_actions, action_from_guess

# Constants
from prophecies_ai.core.constants import (
    CellKind, IllegalMoveReason,
    NUM_PLAYERS, HUMAN_PLAYER, BOT_PLAYER,
    DEFAULT_ROWS, DEFAULT_COLS, DEFAULT_PLAYOUTS
)

__all__ = [
    # Game
    'GameState', 'IllegalMoveError', 'simulate_random_game',

    # Cells
    'Cell', 'EMPTY', 'CROSSED_OUT',

    # Actions
    'Action', 'get_legal_actions', 'action_from_guess',

    # Constants
    'CellKind', 'IllegalMoveReason',
    'NUM_PLAYERS', 'HUMAN_PLAYER', 'BOT_PLAYER',
    'DEFAULT_ROWS', 'DEFAULT_COLS', 'DEFAULT_PLAYOUTS'
]
