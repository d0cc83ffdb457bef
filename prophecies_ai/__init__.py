"""
Prophecies AI - a rules engine and MCTS bot for the grid game Prophecies.

This package provides a complete implementation of the Prophecies rules,
along with a Monte Carlo Tree Search bot that keeps its search tree alive
across the moves of a game.
"""

__version__ = "0.1.0"
__author__ = "Prophecies AI Team"

# Make key components available at package level
from prophecies_ai.core.game import GameState, IllegalMoveError
from prophecies_ai.core.cells import Cell, EMPTY, CROSSED_OUT
from prophecies_ai.core.actions import Action
from prophecies_ai.mcts.agent import MCTSBot
from prophecies_ai.mcts.config import MCTSConfig
from prophecies_ai.match import Match, CellView, SearchEdge

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))

# Default configuration
DEFAULT_CONFIG = {
    "nrows": 4,
    "ncols": 4,
    "bot_player": 1,
    "playouts": 2048
}
