from __future__ import annotations

from dataclasses import dataclass, field

from gridfour.ai.search import AdversarialSearchEngine
from gridfour.config import SEARCH_DEPTH, SEARCH_EXECUTOR
from gridfour.core.grid import GridState
from gridfour.types import Move, Player


@dataclass
class SearchStrategy:
    name: str = "Minimax"
    player: Player = 1
    depth: int = SEARCH_DEPTH
    executor: str = SEARCH_EXECUTOR
    max_workers: int | None = None
    last_info: dict = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        # Fail fast on a bad configuration instead of on the first move.
        AdversarialSearchEngine(self.player, self.depth, self.executor, self.max_workers)

    def choose_move(self, state: GridState) -> Move:
        # Built per move so a re-bound player id is always honoured.
        engine = AdversarialSearchEngine(self.player, self.depth, self.executor, self.max_workers)
        move = engine.search(state)
        self.last_info = engine.last_info
        return move
