from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from gridfour.ai.base import MoveStrategy
from gridfour.game.controller import play_game
from gridfour.game.state import GameStatus
from gridfour.types import PLAYER1

logger = logging.getLogger(__name__)

# Factories must be picklable when games run in worker processes
# (use functools.partial, not lambda).
StrategyFactory = Callable[[], MoveStrategy]
ProgressFn = Callable[[int, int, "TournamentSummary"], None]


@dataclass(slots=True)
class GameRecord:
    game: int
    player1: str
    player2: str
    winner: str          # name of the winning strategy, "" on a draw
    status: str
    moves: int
    time_ms_p1: int
    time_ms_p2: int


@dataclass
class TournamentSummary:
    name_a: str
    name_b: str
    games: int = 0
    wins_a: int = 0
    wins_b: int = 0
    draws: int = 0
    records: List[GameRecord] = field(default_factory=list)

    def add(self, rec: GameRecord) -> None:
        self.games += 1
        self.records.append(rec)
        if rec.winner == "":
            self.draws += 1
        elif rec.winner == self.name_a:
            self.wins_a += 1
        else:
            self.wins_b += 1


def seed_strategy(strategy: MoveStrategy, seed: int) -> None:
    rng = getattr(strategy, "rng", None)
    if rng is not None:
        rng.seed(seed)


def play_one(
    game: int,
    make_a: StrategyFactory,
    make_b: StrategyFactory,
    a_first: bool,
    seed: int,
    name_a: str,
    name_b: str,
) -> GameRecord:
    a = make_a()
    b = make_b()
    seed_strategy(a, seed + 101)
    seed_strategy(b, seed + 202)

    p1, p2 = (a, b) if a_first else (b, a)
    n1, n2 = (name_a, name_b) if a_first else (name_b, name_a)
    res = play_game(p1, p2)

    if res.status is GameStatus.DRAW:
        winner = ""
    else:
        winner = n1 if res.winner == PLAYER1 else n2

    return GameRecord(
        game=game,
        player1=n1,
        player2=n2,
        winner=winner,
        status=res.status.value,
        moves=res.moves,
        time_ms_p1=res.time_ms[1],
        time_ms_p2=res.time_ms[2],
    )


def _play_batch(args: Tuple[Sequence[Tuple[int, bool, int]], StrategyFactory, StrategyFactory, str, str]) -> List[GameRecord]:
    items, make_a, make_b, name_a, name_b = args
    return [play_one(g, make_a, make_b, a_first, seed, name_a, name_b) for (g, a_first, seed) in items]


def chunked(lst, size: int) -> Iterator[list]:
    for i in range(0, len(lst), size):
        yield lst[i : i + size]


def run_tournament(
    make_a: StrategyFactory,
    make_b: StrategyFactory,
    games: int,
    *,
    seed: int = 1234,
    swap_sides: bool = False,
    max_workers: Optional[int] = None,
    batch_size: int = 4,
    name_a: Optional[str] = None,
    name_b: Optional[str] = None,
    progress: Optional[ProgressFn] = None,
) -> TournamentSummary:
    """
    Play `games` games between fresh strategies from `make_a` and `make_b`.
    `make_a` plays first unless `swap_sides` alternates the seats.
    With `max_workers` the games run in a process pool.
    """
    if games < 0:
        raise ValueError("games must be >= 0")

    name_a = name_a or getattr(make_a(), "name", "A")
    name_b = name_b or getattr(make_b(), "name", "B")
    if name_a == name_b:
        name_a, name_b = f"{name_a} #1", f"{name_b} #2"

    summary = TournamentSummary(name_a=name_a, name_b=name_b)
    plan = [(g, (not swap_sides) or g % 2 == 0, seed + g) for g in range(games)]

    def collect(rec: GameRecord) -> None:
        summary.add(rec)
        if progress is not None:
            progress(summary.games, games, summary)

    if max_workers is None or max_workers <= 1:
        for (g, a_first, s) in plan:
            collect(play_one(g, make_a, make_b, a_first, s, name_a, name_b))
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                pool.submit(_play_batch, (batch, make_a, make_b, name_a, name_b))
                for batch in chunked(plan, max(1, batch_size))
            ]
            for fut in as_completed(futures):
                for rec in fut.result():
                    collect(rec)
        summary.records.sort(key=lambda r: r.game)

    logger.info(
        "Tournament %s vs %s: %d-%d, %d draws over %d games",
        name_a, name_b, summary.wins_a, summary.wins_b, summary.draws, summary.games,
    )
    return summary
