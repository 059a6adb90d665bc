from __future__ import annotations
from typing import List, Optional, Sequence, Set, Tuple

from gridfour.config import CONNECT_N
from gridfour.types import EMPTY, Coord, Player

Grid = Sequence[Sequence[int]]

# →, ↓, ↘, ↗ as (d_row, d_col); row 0 is the top of the grid.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (-1, 1))


def _inside(grid: Grid, r: int, c: int) -> bool:
    return 0 <= r < len(grid) and 0 <= c < len(grid[0])


def run_from(grid: Grid, r: int, c: int, dr: int, dc: int, player: int, n: int = CONNECT_N) -> bool:
    """True if `n` cells starting at (r, c) and stepping (dr, dc) all belong to `player`."""
    for _ in range(n):
        if not _inside(grid, r, c) or grid[r][c] != player:
            return False
        r += dr
        c += dc
    return True


def _count(grid: Grid, r: int, c: int, dr: int, dc: int, player: int) -> int:
    n = 0
    r += dr
    c += dc
    while _inside(grid, r, c) and grid[r][c] == player:
        n += 1
        r += dr
        c += dc
    return n


def line_through(grid: Grid, r: int, c: int, player: int, n: int = CONNECT_N) -> bool:
    """
    True if a run of `n` for `player` passes through (r, c).
    The cell itself is assumed to hold `player`.
    """
    for dr, dc in DIRECTIONS:
        if 1 + _count(grid, r, c, dr, dc, player) + _count(grid, r, c, -dr, -dc, player) >= n:
            return True
    return False


def winner_with_line(grid: Grid) -> Optional[Tuple[Player, List[Coord]]]:
    for r in range(len(grid)):
        for c in range(len(grid[0])):
            p = grid[r][c]
            if p == EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                if run_from(grid, r, c, dr, dc, p):
                    return p, [(r + i * dr, c + i * dc) for i in range(CONNECT_N)]  # type: ignore[return-value]
    return None


def find_winner(grid: Grid) -> Optional[Player]:
    res = winner_with_line(grid)
    return res[0] if res else None


def winning_cells(grid: Grid) -> Set[Coord]:
    cells: Set[Coord] = set()
    for r in range(len(grid)):
        for c in range(len(grid[0])):
            p = grid[r][c]
            if p == EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                if run_from(grid, r, c, dr, dc, p):
                    cells.update((r + i * dr, c + i * dc) for i in range(CONNECT_N))
    return cells
