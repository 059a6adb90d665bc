from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from gridfour.core.grid import GridState
from gridfour.types import PLAYER1, Player


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    PLAYER1_WIN = "player1_win"
    PLAYER2_WIN = "player2_win"
    DRAW = "draw"

    @property
    def finished(self) -> bool:
        return self is not GameStatus.IN_PROGRESS

    @classmethod
    def won_by(cls, player: Player) -> "GameStatus":
        return cls.PLAYER1_WIN if player == PLAYER1 else cls.PLAYER2_WIN


@dataclass(slots=True)
class GameResult:
    status: GameStatus
    grid: GridState
    winner: Optional[Player] = None
    moves: int = 0
    invalid_attempts: int = 0
    time_ms: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})
