# src/gridfour/errors.py

from __future__ import annotations


class GridFourError(Exception):
    """Base class for every error raised by gridfour."""


class InvalidColumnError(GridFourError, ValueError):
    """Column index outside the grid."""


class ColumnFullError(GridFourError, ValueError):
    """Column already holds a token in every row."""


class EmptyMoveSetError(GridFourError, ValueError):
    """A move was requested but no column is playable."""


class InvalidGridError(GridFourError, ValueError):
    """An explicit grid has the wrong shape, bad values or floating tokens."""


class HistoryFormatError(GridFourError, ValueError):
    """Saved history text does not match the snapshot format."""


class QuitGame(GridFourError):
    """The human player asked to leave the game."""
