# src/gridfour/types.py

from __future__ import annotations
from typing import Literal, NewType, Tuple

EMPTY = 0
PLAYER1 = 1
PLAYER2 = 2

Player = Literal[1, 2]
Cell = int                      # EMPTY, PLAYER1 or PLAYER2
Move = NewType("Move", int)     # column index 0..COLS-1
Coord = Tuple[int, int]         # (row, col), row 0 is the top
Snapshot = Tuple[Tuple[int, ...], ...]


def other(player: Player) -> Player:
    # Two-player numbering only.
    return 3 - player  # type: ignore[return-value]
