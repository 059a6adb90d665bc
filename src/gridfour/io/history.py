# src/gridfour/io/history.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from gridfour.config import ROWS, COLS
from gridfour.core.grid import GridState
from gridfour.errors import HistoryFormatError, InvalidGridError
from gridfour.types import EMPTY, PLAYER1, PLAYER2, Snapshot

logger = logging.getLogger(__name__)


def format_snapshot(snapshot: Snapshot) -> str:
    return "\n".join(",".join(str(v) for v in row) for row in snapshot)


def format_history(snapshots: Iterable[Snapshot]) -> str:
    """One block of comma-separated rows per snapshot, each followed by a blank line."""
    return "".join(format_snapshot(s) + "\n\n" for s in snapshots)


def _parse_row(line: str, cols: int, lineno: int) -> tuple[int, ...]:
    parts = line.split(",")
    if len(parts) != cols:
        raise HistoryFormatError(f"Line {lineno}: expected {cols} values, got {len(parts)}.")
    out = []
    for p in parts:
        try:
            v = int(p.strip())
        except ValueError:
            raise HistoryFormatError(f"Line {lineno}: {p!r} is not an integer.") from None
        if v not in (EMPTY, PLAYER1, PLAYER2):
            raise HistoryFormatError(f"Line {lineno}: cell value {v} out of range.")
        out.append(v)
    return tuple(out)


def parse_history(text: str, rows: int = ROWS, cols: int = COLS) -> List[Snapshot]:
    snapshots: List[Snapshot] = []
    block: List[tuple[int, ...]] = []
    block_start = 1

    lines = text.splitlines()
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            if block:
                if len(block) != rows:
                    raise HistoryFormatError(
                        f"Snapshot starting at line {block_start}: expected {rows} lines, got {len(block)}."
                    )
                snapshots.append(tuple(block))
                block = []
            continue
        if not block:
            block_start = lineno
        if len(block) == rows:
            raise HistoryFormatError(
                f"Snapshot starting at line {block_start}: more than {rows} lines."
            )
        block.append(_parse_row(line, cols, lineno))

    if block:
        if len(block) != rows:
            raise HistoryFormatError(
                f"Snapshot starting at line {block_start}: expected {rows} lines, got {len(block)}."
            )
        snapshots.append(tuple(block))

    return snapshots


def save_history(path: str | Path, snapshots: Sequence[Snapshot]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(format_history(snapshots), encoding="utf-8")
    logger.info("Saved %d snapshots to %s", len(snapshots), p)
    return p


def load_history(path: str | Path, rows: int = ROWS, cols: int = COLS) -> List[Snapshot]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"History file not found: {p}")
    snapshots = parse_history(p.read_text(encoding="utf-8"), rows, cols)
    logger.info("Loaded %d snapshots from %s", len(snapshots), p)
    return snapshots


def grid_from_history(snapshots: Sequence[Snapshot], rows: int = ROWS, cols: int = COLS) -> GridState:
    """GridState positioned at the last snapshot, carrying the whole history."""
    if snapshots:
        try:
            g = GridState.from_rows(snapshots[-1])
        except InvalidGridError as e:
            raise HistoryFormatError(f"Last snapshot is not a valid grid: {e}") from e
    else:
        g = GridState(rows, cols)
    g.snapshots = list(snapshots)
    return g
