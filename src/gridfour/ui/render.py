from __future__ import annotations
from typing import Iterable, List, Optional, Set

from gridfour.config import CLEAR_SCREEN, USE_COLOR
from gridfour.types import EMPTY, PLAYER1, Cell, Coord, Snapshot
from gridfour.core.grid import GridState
from gridfour.ui.colors import c, BOLD, DIM, FG_CYAN, FG_GRAY, FG_RED, FG_YELLOW, REVERSE

SYMBOLS = {EMPTY: "·", 1: "X", 2: "O"}


def _piece(cell: Cell, color: bool | None) -> str:
    if cell == EMPTY:
        return c(SYMBOLS[EMPTY], FG_GRAY, color)
    if cell == PLAYER1:
        return c(SYMBOLS[cell], FG_RED, color)
    return c(SYMBOLS[cell], FG_YELLOW, color)


def clear_screen() -> None:
    if CLEAR_SCREEN:
        print("\033[2J\033[H", end="")


def format_rows(
    rows: Snapshot,
    highlight: Optional[Iterable[Coord]] = None,
    *,
    color: bool | None = None,
) -> List[str]:
    hl: Set[Coord] = set(highlight) if highlight else set()
    on = USE_COLOR if color is None else color
    cols = len(rows[0]) if rows else 0

    lines = [c("   " + " ".join(str(i + 1) for i in range(cols)), DIM, color)]
    for r, row in enumerate(rows):
        parts = []
        for cidx, cell in enumerate(row):
            p = _piece(cell, color)
            if (r, cidx) in hl:
                # reverse video, or a plain marker when colour is off
                p = c(p, REVERSE, color) if on else "*"
            parts.append(p)
        lines.append(" | " + " ".join(parts) + " |")
    lines.append(c("   " + "—" * (2 * cols - 1), DIM, color))
    return lines


def format_grid(grid: GridState, status: str = "", highlight: Optional[Iterable[Coord]] = None, *, color: bool | None = None) -> str:
    lines = [c("CONNECT 4", BOLD, color)]
    lines.append(c(status, FG_CYAN, color) if status else "")
    lines.extend(format_rows(grid.snapshot(), highlight, color=color))
    return "\n".join(lines)


def render(grid: GridState, status: str = "", highlight: Optional[Iterable[Coord]] = None) -> None:
    clear_screen()
    print(format_grid(grid, status, highlight))
    print(c(f"   Enter 1-{grid.cols} to drop. Enter q to quit.", DIM))


def render_history(snapshots: Iterable[Snapshot]) -> None:
    """Print every snapshot of a game in order, one board per move."""
    for i, snap in enumerate(snapshots, start=1):
        print(c(f"Move {i}", BOLD))
        print("\n".join(format_rows(snap)))
        print()
