from __future__ import annotations
from typing import List, Protocol

from gridfour.core.grid import GridState
from gridfour.errors import EmptyMoveSetError
from gridfour.types import Move, Player


class MoveStrategy(Protocol):
    name: str
    player: Player

    def choose_move(self, state: GridState) -> Move:
        ...


def legal_columns(state: GridState) -> List[Move]:
    moves = state.valid_moves()
    if not moves:
        raise EmptyMoveSetError("No valid moves.")
    return moves
