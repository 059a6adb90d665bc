from __future__ import annotations
from typing import Optional

from gridfour.errors import InvalidColumnError
from gridfour.types import Move

QUIT_WORDS = frozenset({"q", "quit", "exit"})


def parse_move(raw: str, cols: int) -> Optional[Move]:
    """Turn 1-based keyboard input into a column index; None means quit."""
    s = raw.strip().lower()
    if s in QUIT_WORDS:
        return None
    try:
        shown = int(s)
    except ValueError:
        raise ValueError(f"Invalid input {raw.strip()!r}. Enter 1-{cols} or q.") from None
    if not 1 <= shown <= cols:
        raise InvalidColumnError(f"Column must be between 1 and {cols}.")
    return Move(shown - 1)
