"""Shared pytest fixtures and helpers for gridfour tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest

from gridfour.core.grid import GridState
from gridfour.types import Move, Player

# Full 6x7 grid with no four-in-a-row anywhere: rows alternate A/B with B = 3 - A.
ROW_A = [1, 1, 2, 2, 1, 1, 2]
ROW_B = [2, 2, 1, 1, 2, 2, 1]
DRAW_ROWS = [ROW_A, ROW_B, ROW_A, ROW_B, ROW_A, ROW_B]


def grid_from_text(*lines: str) -> GridState:
    """Build a grid from strings such as '...X...' (X = 1, O = 2), top row first."""
    table = {".": 0, "X": 1, "O": 2}
    return GridState.from_rows([[table[ch] for ch in line] for line in lines])


@dataclass
class ScriptedStrategy:
    """Plays a fixed list of columns in order."""
    columns: List[int]
    name: str = "Scripted"
    player: Player = 1
    calls: int = field(default=0, init=False)

    def choose_move(self, state: GridState) -> Move:
        col = self.columns[self.calls]
        self.calls += 1
        return Move(col)


@pytest.fixture
def empty_grid() -> GridState:
    return GridState()


@pytest.fixture
def draw_rows() -> List[List[int]]:
    return [row[:] for row in DRAW_ROWS]
