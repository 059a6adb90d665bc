from __future__ import annotations

from typing import Callable, Dict

from gridfour.ai.base import MoveStrategy
from gridfour.ai.heuristic_strategy import HeuristicStrategy
from gridfour.ai.random_strategy import RandomStrategy
from gridfour.ai.search_strategy import SearchStrategy
from gridfour.config import SEARCH_DEPTH, SEARCH_EXECUTOR
from gridfour.types import Player

STRATEGY_KINDS = ("random", "heuristic", "search", "human")


def make_strategy(
    kind: str,
    player: Player = 1,
    *,
    depth: int = SEARCH_DEPTH,
    seed: int | None = None,
    executor: str = SEARCH_EXECUTOR,
    input_fn: Callable[[str], str] = input,
) -> MoveStrategy:
    k = kind.strip().lower()
    if k == "random":
        return RandomStrategy(player=player, seed=seed)
    if k == "heuristic":
        return HeuristicStrategy(player=player, seed=seed)
    if k == "search":
        return SearchStrategy(name=f"Minimax (d{depth})", player=player, depth=depth, executor=executor)
    if k == "human":
        from gridfour.ui.human import HumanStrategy

        return HumanStrategy(player=player, input_fn=input_fn)
    raise ValueError(f"Unknown strategy {kind!r}; expected one of {STRATEGY_KINDS}.")


# Shown in the CLI help.
DESCRIPTIONS: Dict[str, str] = {
    "random": "uniformly random legal column",
    "heuristic": "win now, else block, else random",
    "search": "alpha-beta minimax at a fixed depth",
    "human": "read columns from the keyboard",
}
