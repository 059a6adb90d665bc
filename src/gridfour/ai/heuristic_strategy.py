from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from gridfour.ai.base import legal_columns
from gridfour.core.grid import GridState
from gridfour.types import Move, Player, other


def first_winning_column(state: GridState, moves: List[Move], player: Player) -> Optional[Move]:
    for c in moves:
        if state.can_win_immediately(c, player):
            return c
    return None


@dataclass
class HeuristicStrategy:
    """
    One-ply tactical strategy:
      1) play the first column that wins now
      2) otherwise block the first column where the opponent would win now
      3) otherwise a uniformly random legal column
    """
    name: str = "Heuristic"
    player: Player = 1
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)
    last_info: dict = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def choose_move(self, state: GridState) -> Move:
        moves = legal_columns(state)

        m = first_winning_column(state, moves, self.player)
        if m is not None:
            self.last_info = {"reason": "win", "move_col": int(m)}
            return m

        m = first_winning_column(state, moves, other(self.player))
        if m is not None:
            self.last_info = {"reason": "block", "move_col": int(m)}
            return m

        choice = self.rng.choice(moves)
        self.last_info = {"reason": "random", "move_col": int(choice)}
        return choice
