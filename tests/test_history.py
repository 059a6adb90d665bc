"""Tests for the saved-history text format."""

import pytest

from gridfour.core.grid import GridState
from gridfour.errors import HistoryFormatError
from gridfour.io.history import (
    format_history,
    grid_from_history,
    load_history,
    parse_history,
    save_history,
)


def _played(columns):
    g = GridState()
    player = 1
    for c in columns:
        assert g.apply_move(c, player)
        player = 3 - player
    return g


EMPTY_BLOCK = "\n".join(["0,0,0,0,0,0,0"] * 6)


class TestFormat:

    def test_block_layout(self):
        g = _played([3])
        text = format_history(g.history)
        lines = text.split("\n")
        assert lines[:6] == ["0,0,0,0,0,0,0"] * 5 + ["0,0,0,1,0,0,0"]
        assert lines[6] == ""
        assert not any(line.endswith(",") for line in lines)

    def test_blocks_separated_by_one_blank_line(self):
        g = _played([0, 1])
        blocks = format_history(g.history).rstrip("\n").split("\n\n")
        assert len(blocks) == 2
        assert all(len(b.split("\n")) == 6 for b in blocks)

    def test_empty_history(self):
        assert format_history([]) == ""
        assert parse_history("") == []


class TestParse:

    def test_round_trip(self):
        g = _played([3, 3, 2, 4, 1, 0, 6, 6, 6])
        assert parse_history(format_history(g.history)) == list(g.history)

    def test_missing_final_blank_line_is_accepted(self):
        assert parse_history(EMPTY_BLOCK) == [tuple((0,) * 7 for _ in range(6))]

    def test_windows_line_endings(self):
        text = format_history(_played([2]).history).replace("\n", "\r\n")
        assert len(parse_history(text)) == 1

    def test_short_block_rejected(self):
        text = "\n".join(["0,0,0,0,0,0,0"] * 5) + "\n\n"
        with pytest.raises(HistoryFormatError):
            parse_history(text)

    def test_long_block_rejected(self):
        text = "\n".join(["0,0,0,0,0,0,0"] * 7) + "\n\n"
        with pytest.raises(HistoryFormatError):
            parse_history(text)

    def test_wrong_value_count_rejected(self):
        text = EMPTY_BLOCK.replace("0,0,0,0,0,0,0", "0,0,0,0,0,0", 1)
        with pytest.raises(HistoryFormatError):
            parse_history(text)

    def test_trailing_comma_rejected(self):
        text = EMPTY_BLOCK.replace("0,0,0,0,0,0,0", "0,0,0,0,0,0,0,", 1)
        with pytest.raises(HistoryFormatError):
            parse_history(text)

    @pytest.mark.parametrize("bad", ["x", "3", "-1"])
    def test_bad_values_rejected(self, bad):
        text = EMPTY_BLOCK.replace("0,0,0,0,0,0,0", f"{bad},0,0,0,0,0,0", 1)
        with pytest.raises(HistoryFormatError):
            parse_history(text)


class TestFiles:

    def test_save_then_load(self, tmp_path):
        g = _played([3, 4, 3, 4, 3, 4, 3])
        path = save_history(tmp_path / "games" / "g1.txt", g.history)
        assert path.exists()
        assert load_history(path) == list(g.history)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_history(tmp_path / "nope.txt")

    def test_grid_from_history_resumes_position(self):
        g = _played([0, 1, 2])
        resumed = grid_from_history(list(g.history))
        assert resumed.snapshot() == g.snapshot()
        assert resumed.history == g.history
        assert resumed.move_count == 3

    def test_grid_from_empty_history(self):
        assert grid_from_history([]).move_count == 0
