from __future__ import annotations

import random
from dataclasses import dataclass, field

from gridfour.ai.base import legal_columns
from gridfour.core.grid import GridState
from gridfour.types import Move, Player


@dataclass
class RandomStrategy:
    name: str = "Random"
    player: Player = 1
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def choose_move(self, state: GridState) -> Move:
        return self.rng.choice(legal_columns(state))
