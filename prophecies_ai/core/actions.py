"""
Actions for the Prophecies game.

A move in Prophecies is always a placement: the active player either crosses
out an empty cell or writes one of their guesses into it. This module
defines the Action value type, the legal-action enumerator shared by the
rules engine and the search, and helpers for encoding actions for a host.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List

from prophecies_ai.core.cells import Cell, CROSSED_OUT
from prophecies_ai.core.constants import CROSS_OUT_GUESS, CellKind

if TYPE_CHECKING:
    from prophecies_ai.core.game import GameState


@dataclass(frozen=True)
class Action:
    """
    Placement of a cell at a grid position.

    ``cell`` is either ``CROSSED_OUT`` or a guess belonging to the player
    who is active on the board the action was generated from.
    """
    row: int
    col: int
    cell: Cell

    @property
    def guess(self) -> int:
        """Host encoding of the placed cell: 0 for a cross-out, else the number."""
        if self.cell.is_crossed_out:
            return CROSS_OUT_GUESS
        if self.cell.is_guess:
            return self.cell.number
        raise AssertionError("An action never places an empty cell")

    def sort_key(self):
        """Row-major position first, then cross-out before ascending guesses."""
        return (self.row, self.col) + self.cell.sort_key()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "row": self.row,
            "col": self.col,
            "kind": self.cell.kind.name,
            "player": self.cell.player,
            "number": self.cell.number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        """Create from dictionary representation."""
        kind = CellKind[data["kind"]]
        if kind is CellKind.CROSSED_OUT:
            cell = CROSSED_OUT
        elif kind is CellKind.GUESS:
            cell = Cell.guess(data["player"], data["number"])
        else:
            raise ValueError("An action cannot place an empty cell")
        return cls(row=data["row"], col=data["col"], cell=cell)

    def __str__(self) -> str:
        if self.cell.is_crossed_out:
            return f"Cross out ({self.row}, {self.col})"
        return f"Player {self.cell.player} guesses {self.cell.number} at ({self.row}, {self.col})"


def get_legal_actions(game_state: GameState) -> List[Action]:
    """
    Get all legal actions for the active player.

    Empty cells are visited in row-major order. For each one the cross-out
    comes first, followed by every legal guess in ascending order.

    Args:
        game_state: Current state of the game

    Returns:
        List of legal actions (empty once the board is full)
    """
    actions = []
    player = game_state.active_player
    max_guess = game_state.max_guess

    for row in range(game_state.nrows):
        for col in range(game_state.ncols):
            if not game_state.get_cell(row, col).is_empty:
                continue
            candidates = [CROSSED_OUT]
            candidates.extend(Cell.guess(player, number) for number in range(1, max_guess + 1))
            for cell in candidates:
                if game_state.is_legal_move(row, col, cell):
                    actions.append(Action(row, col, cell))

    return actions


def action_from_guess(game_state: GameState, row: int, col: int, guess: int) -> Action:
    """
    Build an action from the host encoding.

    A guess of 0 requests a cross-out; any other value is a guess for the
    active player. Legality is not checked here.

    Args:
        game_state: State the action will be applied to
        row: Target row
        col: Target column
        guess: 0 for a cross-out, otherwise the guessed number

    Returns:
        Action object
    """
    if guess == CROSS_OUT_GUESS:
        return Action(row, col, CROSSED_OUT)
    return Action(row, col, Cell.guess(game_state.active_player, guess))
