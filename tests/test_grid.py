"""Tests for GridState: gravity, legality, winners and cloning."""

import random

import pytest

from conftest import grid_from_text
from gridfour.core.grid import GridState
from gridfour.errors import ColumnFullError, InvalidColumnError, InvalidGridError


def assert_gravity(g: GridState) -> None:
    for c in range(g.cols):
        h = g.height(c)
        assert 0 <= h <= g.rows
        for r in range(g.rows):
            filled = g.cell(r, c) != 0
            assert filled == (r >= g.rows - h)


class TestApplyMove:

    def test_token_lands_on_bottom_row(self, empty_grid):
        assert empty_grid.apply_move(3, 1) is True
        assert empty_grid.cell(5, 3) == 1
        assert empty_grid.height(3) == 1

    def test_tokens_stack(self, empty_grid):
        empty_grid.apply_move(0, 1)
        empty_grid.apply_move(0, 2)
        assert empty_grid.cell(5, 0) == 1
        assert empty_grid.cell(4, 0) == 2

    def test_each_move_appends_snapshot(self, empty_grid):
        empty_grid.apply_move(0, 1)
        empty_grid.apply_move(1, 2)
        assert len(empty_grid.history) == 2
        assert empty_grid.history[0][5][0] == 1
        assert empty_grid.history[0][5][1] == 0
        assert empty_grid.history[1] == empty_grid.snapshot()

    def test_full_column_returns_false_and_changes_nothing(self, empty_grid):
        for i in range(6):
            assert empty_grid.apply_move(0, 1 + i % 2)
        before = empty_grid.snapshot()
        history_len = len(empty_grid.history)

        assert empty_grid.apply_move(0, 1) is False
        assert empty_grid.snapshot() == before
        assert len(empty_grid.history) == history_len
        assert empty_grid.height(0) == 6

    @pytest.mark.parametrize("col", [-1, 7, 100])
    def test_out_of_range_column_raises(self, empty_grid, col):
        with pytest.raises(InvalidColumnError):
            empty_grid.apply_move(col, 1)
        assert empty_grid.move_count == 0
        assert empty_grid.history == ()

    def test_invalid_column_is_a_value_error(self, empty_grid):
        with pytest.raises(ValueError):
            empty_grid.apply_move(-1, 1)

    def test_bad_player_rejected(self, empty_grid):
        with pytest.raises(ValueError):
            empty_grid.apply_move(0, 3)

    def test_drop_raises_on_full_column(self, empty_grid):
        for _ in range(6):
            empty_grid.drop(2, 1)
        with pytest.raises(ColumnFullError):
            empty_grid.drop(2, 2)

    @pytest.mark.parametrize("seed", range(8))
    def test_random_legal_sequences_keep_gravity(self, seed):
        rng = random.Random(seed)
        g = GridState()
        player = 1
        while not g.is_full():
            col = rng.choice(g.valid_moves())
            assert g.apply_move(col, player)
            assert_gravity(g)
            player = 3 - player
        assert g.move_count == 42
        assert len(g.history) == 42
        assert g.valid_moves() == []


class TestLegality:

    def test_empty_grid_all_columns_legal(self, empty_grid):
        assert empty_grid.valid_moves() == list(range(7))
        assert all(empty_grid.is_legal_move(c) for c in range(7))

    @pytest.mark.parametrize("col", [-1, 7])
    def test_out_of_range_is_illegal(self, empty_grid, col):
        assert empty_grid.is_legal_move(col) is False

    def test_full_column_is_illegal(self, empty_grid):
        for _ in range(6):
            empty_grid.apply_move(4, 2)
        assert empty_grid.is_legal_move(4) is False
        assert 4 not in empty_grid.valid_moves()


class TestCheckWinner:

    def test_empty_grid_has_no_winner(self, empty_grid):
        assert empty_grid.check_winner() is None

    @pytest.mark.parametrize("player", [1, 2])
    def test_horizontal_four(self, empty_grid, player):
        for c in range(4):
            empty_grid.apply_move(c, player)
        assert empty_grid.check_winner() == player

    def test_three_is_not_a_win(self, empty_grid):
        for c in range(3):
            empty_grid.apply_move(c, 1)
        assert empty_grid.check_winner() is None

    def test_vertical_four(self, empty_grid):
        for _ in range(4):
            empty_grid.apply_move(6, 2)
        assert empty_grid.check_winner() == 2

    def test_diagonal_down_right(self):
        g = grid_from_text(
            ".......",
            ".......",
            "X......",
            "OX.....",
            "OOX....",
            "OOOX...",
        )
        assert g.check_winner() == 1

    def test_diagonal_up_right(self):
        g = grid_from_text(
            ".......",
            ".......",
            "......O",
            ".....OX",
            "....OXX",
            "...OXXX",
        )
        assert g.check_winner() == 2

    def test_relabelling_players_swaps_result(self):
        rows = [
            ".......",
            ".......",
            "...X...",
            "..XO...",
            ".XOO...",
            "XOOX...",
        ]
        g = grid_from_text(*rows)
        swapped = grid_from_text(*[r.replace("X", "x").replace("O", "X").replace("x", "O") for r in rows])
        assert g.check_winner() == 1
        assert swapped.check_winner() == 2

    def test_winning_cells_cover_the_line(self, empty_grid):
        for c in range(1, 5):
            empty_grid.apply_move(c, 1)
        assert empty_grid.winning_cells() == {(5, 1), (5, 2), (5, 3), (5, 4)}

    def test_no_winning_cells_without_winner(self, draw_rows):
        g = GridState.from_rows(draw_rows)
        assert g.check_winner() is None
        assert g.winning_cells() == set()


class TestCanWinImmediately:

    def test_detects_completion_at_the_end(self, empty_grid):
        for c in range(3):
            empty_grid.apply_move(c, 1)
        assert empty_grid.can_win_immediately(3, 1) is True
        assert empty_grid.can_win_immediately(3, 2) is False

    def test_detects_completion_in_the_middle(self):
        g = grid_from_text(
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "XX.X...",
        )
        assert g.can_win_immediately(2, 1) is True

    def test_respects_gravity(self):
        # Player 2 needs (4, 3) but column 3 is empty, so the token lands on row 5.
        g = grid_from_text(
            ".......",
            ".......",
            ".......",
            ".......",
            "OOO....",
            "XXX....",
        )
        assert g.can_win_immediately(3, 2) is False
        assert g.can_win_immediately(3, 1) is True

    def test_full_or_out_of_range_column_is_false(self, empty_grid):
        for _ in range(6):
            empty_grid.apply_move(0, 1)
        assert empty_grid.can_win_immediately(0, 1) is False
        assert empty_grid.can_win_immediately(-1, 1) is False
        assert empty_grid.can_win_immediately(7, 1) is False

    def test_never_mutates_state(self):
        g = grid_from_text(
            ".......",
            ".......",
            "...X...",
            "..XO...",
            ".XOO...",
            "XOOX.O.",
        )
        g.apply_move(6, 1)
        before = g.clone()
        for _ in range(3):
            for c in range(-1, 8):
                for p in (1, 2):
                    g.can_win_immediately(c, p)
        assert g == before
        assert g.history == before.history


class TestFromRowsAndClone:

    def test_from_rows_computes_heights(self):
        g = grid_from_text(
            ".......",
            ".......",
            ".......",
            ".......",
            "O......",
            "XX.....",
        )
        assert g.height(0) == 2
        assert g.height(1) == 1
        assert g.height(2) == 0
        assert g.move_count == 3
        assert g.history == ()

    def test_from_rows_rejects_floating_tokens(self):
        with pytest.raises(InvalidGridError):
            grid_from_text(
                ".......",
                ".......",
                ".......",
                ".......",
                "X......",
                ".......",
            )

    def test_from_rows_rejects_bad_values_and_shapes(self):
        with pytest.raises(InvalidGridError):
            GridState.from_rows([[0] * 7] * 5 + [[0, 0, 0, 3, 0, 0, 0]])
        with pytest.raises(InvalidGridError):
            GridState.from_rows([[0] * 7] * 5 + [[0] * 6])

    def test_clone_is_independent(self, empty_grid):
        empty_grid.apply_move(0, 1)
        copy = empty_grid.clone()
        copy.apply_move(0, 2)
        copy.apply_move(1, 1)

        assert empty_grid.height(0) == 1
        assert empty_grid.cell(4, 0) == 0
        assert len(empty_grid.history) == 1
        assert len(copy.history) == 3

    def test_clone_without_history(self, empty_grid):
        empty_grid.apply_move(0, 1)
        copy = empty_grid.clone(with_history=False)
        assert copy.history == ()
        assert copy.snapshot() == empty_grid.snapshot()
