#!/usr/bin/env python
"""
Tests for the Prophecies rules engine.

Covers move legality, placement, the automatic cross-out cascade, scoring
and the legal-action enumerator.
"""
import random

import pytest

from prophecies_ai.core.game import GameState, IllegalMoveError, simulate_random_game
from prophecies_ai.core.cells import Cell, EMPTY, CROSSED_OUT
from prophecies_ai.core.actions import Action, get_legal_actions, action_from_guess
from prophecies_ai.core.constants import IllegalMoveReason


def make_state(rows, active_player=0):
    """Build a state from rows of cells; None is empty, 'X' crossed out, (p, n) a guess."""
    board = []
    for row in rows:
        for value in row:
            if value is None:
                board.append(EMPTY)
            elif value == "X":
                board.append(CROSSED_OUT)
            else:
                board.append(Cell.guess(*value))
    return GameState(nrows=len(rows), ncols=len(rows[0]), board=board, active_player=active_player)


def transpose(state):
    board = [state.get_cell(row, col) for col in range(state.ncols) for row in range(state.nrows)]
    return GameState(nrows=state.ncols, ncols=state.nrows, board=board,
                     active_player=state.active_player)


def random_states(count, seed=0):
    """Yield states from random partial games on assorted grid sizes."""
    rng = random.Random(seed)
    for _ in range(count):
        state = GameState.new(rng.randint(1, 4), rng.randint(1, 4))
        for _ in range(rng.randint(0, state.nrows * state.ncols)):
            actions = state.get_legal_actions()
            if not actions:
                break
            state.apply_action(rng.choice(actions))
        yield state


class TestGameState:

    def test_new_board_is_empty(self):
        state = GameState.new(3, 4)
        assert state.active_player == 0
        assert state.empty_cells() == 12
        assert not state.is_finished()
        assert state.max_guess == 4
        assert state.get_scores() == [0, 0]

    @pytest.mark.parametrize("nrows,ncols", [(0, 3), (3, 0), (-1, 2)])
    def test_new_rejects_bad_dimensions(self, nrows, ncols):
        with pytest.raises(ValueError):
            GameState.new(nrows, ncols)

    def test_equal_positions_hash_equal(self):
        a = GameState.new(2, 2)
        a.place(0, 0, CROSSED_OUT)
        a.place(1, 1, CROSSED_OUT)
        b = GameState.new(2, 2)
        b.place(1, 1, CROSSED_OUT)
        b.place(0, 0, CROSSED_OUT)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_active_player_is_part_of_identity(self):
        a = GameState.new(2, 2)
        b = GameState.new(2, 2)
        b.active_player = 1
        assert a != b

    def test_clone_is_independent(self):
        state = GameState.new(2, 2)
        copy = state.clone()
        copy.place(0, 0, CROSSED_OUT)
        assert state.get_cell(0, 0) == EMPTY
        assert state.active_player == 0

    def test_str_shows_turn_and_result(self):
        state = GameState.new(1, 1)
        assert str(state).endswith("Player 0 to move.")
        state.place(0, 0, Cell.guess(0, 1))
        assert "Scores: 2, 0" in str(state)
        assert str(state).endswith("Player 0 wins.")


class TestLegality:

    @pytest.mark.parametrize("row,col,cell,reason", [
        (2, 0, CROSSED_OUT, IllegalMoveReason.ROW_OUT_OF_BOUNDS),
        (-1, 0, CROSSED_OUT, IllegalMoveReason.ROW_OUT_OF_BOUNDS),
        (0, 2, CROSSED_OUT, IllegalMoveReason.COLUMN_OUT_OF_BOUNDS),
        (0, 0, EMPTY, IllegalMoveReason.ERASE),
        (0, 0, Cell.guess(1, 1), IllegalMoveReason.WRONG_PLAYER),
        (0, 0, Cell.guess(0, 0), IllegalMoveReason.GUESS_ZERO),
        (0, 0, Cell.guess(0, 3), IllegalMoveReason.GUESS_TOO_LARGE),
    ])
    def test_reasons_on_empty_board(self, row, col, cell, reason):
        state = GameState.new(2, 2)
        assert state.illegal_reason(row, col, cell) is reason
        assert not state.is_legal_move(row, col, cell)

    def test_occupied_cell(self):
        state = make_state([["X", None], [None, None]])
        assert state.illegal_reason(0, 0, CROSSED_OUT) is IllegalMoveReason.CELL_OCCUPIED

    def test_duplicate_in_row_and_column(self):
        state = make_state([[(0, 1), None], [None, None]], active_player=1)
        assert state.illegal_reason(0, 1, Cell.guess(1, 1)) is IllegalMoveReason.DUPLICATE_GUESS
        assert state.illegal_reason(1, 0, Cell.guess(1, 1)) is IllegalMoveReason.DUPLICATE_GUESS
        assert state.is_legal_move(1, 1, Cell.guess(1, 1))
        assert state.is_legal_move(0, 1, Cell.guess(1, 2))

    def test_cross_out_is_always_legal_on_empty_cell(self):
        state = make_state([[(0, 1), None], [None, (1, 2)]])
        assert state.is_legal_move(0, 1, CROSSED_OUT)
        assert state.is_legal_move(1, 0, CROSSED_OUT)

    def test_non_square_grid_uses_larger_dimension(self):
        state = GameState.new(1, 3)
        assert state.is_legal_move(0, 0, Cell.guess(0, 3))
        assert state.illegal_reason(0, 0, Cell.guess(0, 4)) is IllegalMoveReason.GUESS_TOO_LARGE


class TestPlacement:

    def test_place_flips_player_for_both_moves(self):
        state = GameState.new(3, 3)
        state.place(0, 0, CROSSED_OUT)
        assert state.active_player == 1
        state.place(1, 1, Cell.guess(1, 2))
        assert state.active_player == 0

    def test_failed_place_leaves_state_unchanged(self):
        for state in random_states(40, seed=1):
            before = state.clone()
            for row in range(-1, state.nrows + 1):
                for col in range(-1, state.ncols + 1):
                    for cell in [EMPTY, CROSSED_OUT, Cell.guess(1 - state.active_player, 1),
                                 Cell.guess(state.active_player, 0),
                                 Cell.guess(state.active_player, state.max_guess + 1)]:
                        if state.is_legal_move(row, col, cell):
                            continue
                        with pytest.raises(IllegalMoveError):
                            state.place(row, col, cell)
                        assert state == before

    def test_error_carries_details(self):
        state = make_state([[(0, 1), None], [None, None]], active_player=1)
        with pytest.raises(IllegalMoveError) as excinfo:
            state.place(0, 1, Cell.guess(1, 1))
        error = excinfo.value
        assert error.reason is IllegalMoveReason.DUPLICATE_GUESS
        assert (error.row, error.col) == (0, 1)
        assert error.cell == Cell.guess(1, 1)
        assert error.state == state
        assert error.state is not state
        assert "Only one of each guess value per row/column" in str(error)
        assert isinstance(error, ValueError)

    def test_two_by_two_scenario(self):
        state = GameState.new(2, 2)
        state.place(0, 0, Cell.guess(0, 1))

        assert not state.is_legal_move(0, 1, Cell.guess(1, 1))
        assert not state.is_legal_move(1, 0, Cell.guess(1, 1))
        state.place(1, 1, Cell.guess(1, 1))

        # 2 is still available in both remaining cells
        assert state.get_cell(0, 1) == EMPTY
        assert state.get_cell(1, 0) == EMPTY
        assert state.active_player == 0

    def test_cascade_crosses_out_dead_cells(self):
        state = GameState.new(2, 2)
        state.place(0, 0, Cell.guess(0, 1))
        state.place(1, 1, Cell.guess(1, 2))

        # (0, 1) sees 1 in its row and 2 in its column, (1, 0) the reverse
        assert state.get_cell(0, 1) == CROSSED_OUT
        assert state.get_cell(1, 0) == CROSSED_OUT
        assert state.is_finished()
        assert state.get_scores() == [2, 0]

    def test_cascade_only_touches_row_and_column_of_move(self):
        state = make_state([
            [None, None, None],
            [None, (1, 1), None],
            [None, None, None],
        ])
        state.place(0, 0, Cell.guess(0, 2))
        # (1, 0) is blocked for 1 and 2 by the guesses, 3 is still free
        assert state.get_cell(1, 0) == EMPTY
        assert state.empty_cells() == 7

    def test_cascade_uses_next_player(self):
        state = make_state([[None, None]])
        state.place(0, 0, Cell.guess(0, 2))
        # Player 1 can still guess 1 in the remaining cell
        assert state.get_cell(0, 1) == EMPTY
        state.place(0, 1, Cell.guess(1, 1))
        assert state.is_finished()

    def test_cross_out_does_not_cascade(self):
        state = make_state([[(0, 1), None], [None, (1, 2)]])
        state.place(0, 1, CROSSED_OUT)
        assert state.get_cell(1, 0) == EMPTY

    def test_uniqueness_holds_after_random_games(self):
        for state in random_states(60, seed=2):
            for row in range(state.nrows):
                numbers = [state.get_cell(row, col).number for col in range(state.ncols)
                           if state.get_cell(row, col).is_guess]
                assert len(numbers) == len(set(numbers))
            for col in range(state.ncols):
                numbers = [state.get_cell(row, col).number for row in range(state.nrows)
                           if state.get_cell(row, col).is_guess]
                assert len(numbers) == len(set(numbers))


class TestScoring:

    def test_partial_lines_score_nothing(self):
        state = make_state([[(0, 1), None], [None, None]])
        assert state.get_scores() == [0, 0]

    def test_full_row_scores_matching_guesses(self):
        state = make_state([
            [(0, 2), (1, 1), "X"],
            [None, None, None],
            [None, None, None],
        ])
        # Two guesses in the row; only the 2 matches
        assert state.get_scores() == [2, 0]

    def test_crossed_out_cells_do_not_count(self):
        state = make_state([["X", "X", (1, 1)]])
        # Row: one guess equal to 1. Column 2: one guess equal to 1.
        # Columns 0 and 1 are full with no guesses.
        assert state.get_scores() == [0, 2]

    def test_cell_scores_in_row_and_column(self):
        state = make_state([[(0, 1)]])
        assert state.get_scores() == [2, 0]

    def test_scores_are_repeatable(self):
        state, scores = simulate_random_game(3, 3, random.Random(7))
        assert state.is_finished()
        assert state.get_scores() == scores
        assert state.get_scores() == state.get_scores()

    def test_transposed_board_has_same_scores(self):
        rng = random.Random(3)
        for _ in range(30):
            state, scores = simulate_random_game(rng.randint(1, 4), rng.randint(1, 4), rng)
            assert transpose(state).get_scores() == scores

    def test_winner(self):
        assert make_state([[(0, 1)]]).winner() == 0
        assert make_state([["X"]]).winner() is None
        assert GameState.new(1, 1).winner() is None


class TestActions:

    def test_one_by_one_has_two_actions(self):
        actions = get_legal_actions(GameState.new(1, 1))
        assert actions == [
            Action(0, 0, CROSSED_OUT),
            Action(0, 0, Cell.guess(0, 1)),
        ]

    def test_enumeration_order(self):
        actions = get_legal_actions(GameState.new(1, 2))
        assert actions == [
            Action(0, 0, CROSSED_OUT),
            Action(0, 0, Cell.guess(0, 1)),
            Action(0, 0, Cell.guess(0, 2)),
            Action(0, 1, CROSSED_OUT),
            Action(0, 1, Cell.guess(0, 1)),
            Action(0, 1, Cell.guess(0, 2)),
        ]
        assert actions == sorted(actions, key=Action.sort_key)

    def test_guesses_belong_to_active_player(self):
        state = GameState.new(2, 2)
        state.place(0, 0, CROSSED_OUT)
        for action in state.get_legal_actions():
            assert action.cell.is_crossed_out or action.cell.player == 1

    def test_finished_board_has_no_actions(self):
        state, _ = simulate_random_game(2, 3, random.Random(4))
        assert get_legal_actions(state) == []

    def test_enumerated_actions_always_place(self):
        for state in random_states(40, seed=5):
            for action in state.get_legal_actions():
                assert state.is_legal_move(action.row, action.col, action.cell)
                state.clone().apply_action(action)

    def test_enumerator_matches_legality_predicate(self):
        for state in random_states(30, seed=6):
            expected = [
                Action(row, col, cell)
                for row in range(state.nrows)
                for col in range(state.ncols)
                for cell in [CROSSED_OUT] + [Cell.guess(state.active_player, n)
                                             for n in range(1, state.max_guess + 1)]
                if state.is_legal_move(row, col, cell)
            ]
            assert state.get_legal_actions() == expected

    def test_host_encoding(self):
        state = GameState.new(2, 2)
        assert action_from_guess(state, 1, 0, 0) == Action(1, 0, CROSSED_OUT)
        assert action_from_guess(state, 1, 0, 2) == Action(1, 0, Cell.guess(0, 2))
        assert Action(1, 0, CROSSED_OUT).guess == 0
        assert Action(1, 0, Cell.guess(0, 2)).guess == 2

    def test_dict_conversion(self):
        action = Action(2, 1, Cell.guess(1, 3))
        assert Action.from_dict(action.to_dict()) == action
        with pytest.raises(ValueError):
            Action.from_dict({"row": 0, "col": 0, "kind": "EMPTY", "player": None, "number": 0})
