# src/gridfour/core/grid.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from gridfour.config import ROWS, COLS
from gridfour.core.rules import find_winner, line_through, winning_cells
from gridfour.errors import ColumnFullError, InvalidColumnError, InvalidGridError
from gridfour.types import EMPTY, PLAYER1, PLAYER2, Coord, Move, Player, Snapshot

_CELL_VALUES = (EMPTY, PLAYER1, PLAYER2)


def _check_player(player: int) -> None:
    if player not in (PLAYER1, PLAYER2):
        raise ValueError(f"Player must be {PLAYER1} or {PLAYER2}, got {player!r}.")


@dataclass(slots=True)
class GridState:
    """
    Token grid with gravity-drop moves.

    Row 0 is the top row, row `rows - 1` the bottom. `heights[c]` is the
    number of tokens in column c. Every successful move appends an immutable
    snapshot of the whole grid to `snapshots`.
    """
    rows: int = ROWS
    cols: int = COLS
    grid: List[List[int]] = field(default_factory=list)
    heights: List[int] = field(default_factory=list)
    snapshots: List[Snapshot] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[EMPTY for _ in range(self.cols)] for _ in range(self.rows)]
        self._validate()
        self._recompute_heights()

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]]) -> "GridState":
        """Build a grid from an explicit top-to-bottom matrix. History starts empty."""
        grid = [list(row) for row in rows]
        if not grid or not grid[0]:
            raise InvalidGridError("Grid must have at least one row and one column.")
        return cls(rows=len(grid), cols=len(grid[0]), grid=grid)

    def _validate(self) -> None:
        if len(self.grid) != self.rows:
            raise InvalidGridError(f"Expected {self.rows} rows, got {len(self.grid)}.")
        for r, row in enumerate(self.grid):
            if len(row) != self.cols:
                raise InvalidGridError(f"Row {r}: expected {self.cols} cells, got {len(row)}.")
            for v in row:
                if v not in _CELL_VALUES:
                    raise InvalidGridError(f"Row {r}: unknown cell value {v!r}.")

        # No floating tokens: once a column has an empty cell (bottom-up), the rest is empty.
        for c in range(self.cols):
            seen_empty = False
            for r in range(self.rows - 1, -1, -1):
                if self.grid[r][c] == EMPTY:
                    seen_empty = True
                elif seen_empty:
                    raise InvalidGridError(f"Floating token at row {r}, column {c}.")

    def _recompute_heights(self) -> None:
        self.heights = [
            sum(1 for r in range(self.rows) if self.grid[r][c] != EMPTY)
            for c in range(self.cols)
        ]

    # ------------------------------------------------------------------
    # Queries

    def cell(self, row: int, col: int) -> int:
        return self.grid[row][col]

    def height(self, column: int) -> int:
        return self.heights[column]

    @property
    def move_count(self) -> int:
        return sum(self.heights)

    @property
    def history(self) -> Tuple[Snapshot, ...]:
        return tuple(self.snapshots)

    def is_legal_move(self, column: int) -> bool:
        if column < 0 or column >= self.cols:
            return False
        return self.heights[column] < self.rows

    def valid_moves(self) -> List[Move]:
        return [Move(c) for c in range(self.cols) if self.heights[c] < self.rows]

    def is_full(self) -> bool:
        return all(h >= self.rows for h in self.heights)

    def snapshot(self) -> Snapshot:
        return tuple(tuple(row) for row in self.grid)

    def check_winner(self) -> Optional[Player]:
        return find_winner(self.grid)

    def winning_cells(self) -> Set[Coord]:
        return winning_cells(self.grid)

    def can_win_immediately(self, column: int, player: Player) -> bool:
        """
        Would dropping `player` into `column` complete a line through that cell?
        The grid is restored before returning; no snapshot is recorded.
        """
        if not self.is_legal_move(column):
            return False
        r = self.rows - 1 - self.heights[column]
        self.grid[r][column] = player
        try:
            return line_through(self.grid, r, column, player)
        finally:
            self.grid[r][column] = EMPTY

    # ------------------------------------------------------------------
    # Mutation

    def drop(self, col: int, player: Player) -> int:
        """Place a token and return its row. Raises on a bad or full column."""
        c = int(col)
        if c < 0 or c >= self.cols:
            raise InvalidColumnError(f"Column {c} out of range 0..{self.cols - 1}.")
        _check_player(player)
        if self.heights[c] >= self.rows:
            raise ColumnFullError(f"Column {c} is full.")

        r = self.rows - 1 - self.heights[c]
        self.grid[r][c] = player
        self.heights[c] += 1
        self.snapshots.append(self.snapshot())
        return r

    def apply_move(self, column: int, player: Player) -> bool:
        """
        Drop a token for `player`. Returns False, leaving the grid untouched,
        when the column is full; raises InvalidColumnError when it is off the grid.
        """
        try:
            self.drop(column, player)
        except ColumnFullError:
            return False
        return True

    def clone(self, with_history: bool = True) -> "GridState":
        g = GridState.__new__(GridState)
        g.rows = self.rows
        g.cols = self.cols
        g.grid = [row[:] for row in self.grid]
        g.heights = self.heights[:]
        # Snapshots are immutable tuples, so copying the list is enough.
        g.snapshots = self.snapshots[:] if with_history else []
        return g
