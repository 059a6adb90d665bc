"""Connect-style grid game engine, strategies and alpha-beta search."""

from gridfour.core.grid import GridState
from gridfour.errors import (
    ColumnFullError,
    EmptyMoveSetError,
    GridFourError,
    HistoryFormatError,
    InvalidColumnError,
    InvalidGridError,
    QuitGame,
)
from gridfour.types import EMPTY, PLAYER1, PLAYER2, Move, Player, other

__all__ = [
    "EMPTY",
    "PLAYER1",
    "PLAYER2",
    "ColumnFullError",
    "EmptyMoveSetError",
    "GridFourError",
    "GridState",
    "HistoryFormatError",
    "InvalidColumnError",
    "InvalidGridError",
    "Move",
    "Player",
    "QuitGame",
    "other",
]
