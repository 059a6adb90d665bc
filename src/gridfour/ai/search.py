from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Tuple

from gridfour.ai.base import legal_columns
from gridfour.config import SEARCH_DEPTH, SEARCH_EXECUTOR, SEARCH_MAX_WORKERS
from gridfour.core.grid import GridState
from gridfour.types import Move, Player, other

logger = logging.getLogger(__name__)

EXECUTORS = ("thread", "process", "serial")

WIN = 1
LOSS = -1
NEUTRAL = 0


def _score_winner(winner: Optional[Player], me: Player) -> int:
    if winner == me:
        return WIN
    if winner is not None:
        return LOSS
    return NEUTRAL


def evaluate(state: GridState, me: Player) -> int:
    """
    Terminal-only evaluation: +1 if `me` has won, -1 if the opponent has,
    0 otherwise. Depth-exhausted positions score 0 whatever the material.
    """
    return _score_winner(state.check_winner(), me)


def minimax(
    state: GridState,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    me: Player,
    stats: List[int],
) -> float:
    """Alpha-beta minimax over private clones of `state`; stats[0] counts visited nodes."""
    stats[0] += 1

    winner = state.check_winner()
    if depth == 0 or winner is not None:
        return _score_winner(winner, me)

    moves = state.valid_moves()
    if not moves:
        return NEUTRAL

    if maximizing:
        best = -inf
        for c in moves:
            child = state.clone(with_history=False)
            child.apply_move(c, me)
            best = max(best, minimax(child, depth - 1, alpha, beta, False, me, stats))
            alpha = max(alpha, best)
            if beta <= alpha:
                break
        return best

    opp = other(me)
    best = inf
    for c in moves:
        child = state.clone(with_history=False)
        child.apply_move(c, opp)
        best = min(best, minimax(child, depth - 1, alpha, beta, True, me, stats))
        beta = min(beta, best)
        if beta <= alpha:
            break
    return best


def score_root_move(root: GridState, column: int, me: Player, depth: int) -> Tuple[int, float, int]:
    """
    Score one root column. `root` must be a copy owned by the caller's task;
    it is mutated. Module-level so process pools can pickle it.
    """
    root.apply_move(column, me)
    stats = [0]
    score = minimax(root, depth, -inf, inf, False, me, stats)
    return column, score, stats[0]


class _BestMove:
    """Best (score, column) pair shared by the root tasks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.score: float = -inf
        self.column: Optional[int] = None
        self.scores: Dict[int, float] = {}
        self.nodes = 0

    def offer(self, column: int, score: float, nodes: int) -> None:
        with self._lock:
            self.scores[column] = score
            self.nodes += nodes
            # Strict improvement, or an equal score from a lower column:
            # the result is the lowest column with the maximum score.
            if (
                self.column is None
                or score > self.score
                or (score == self.score and column < self.column)
            ):
                self.score = score
                self.column = column


@dataclass
class AdversarialSearchEngine:
    """
    Fixed-depth minimax with alpha-beta pruning, parallel at the root.

    `depth` is the number of plies searched below each root move, so depth 1
    already sees the opponent's immediate reply.
    """
    player: Player
    depth: int = SEARCH_DEPTH
    executor: str = SEARCH_EXECUTOR
    max_workers: int | None = None
    last_info: dict = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {self.depth}.")
        if self.executor not in EXECUTORS:
            raise ValueError(f"Unknown executor {self.executor!r}; expected one of {EXECUTORS}.")

    def _pool(self, n_tasks: int) -> Executor:
        workers = max(1, min(self.max_workers or SEARCH_MAX_WORKERS, n_tasks))
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gridfour-search")

    def search(self, state: GridState) -> Move:
        moves = legal_columns(state)
        start = time.perf_counter()
        best = _BestMove()

        if self.executor == "serial":
            for c in moves:
                best.offer(*score_root_move(state.clone(with_history=False), c, self.player, self.depth))
        else:
            with self._pool(len(moves)) as pool:
                # Clones are taken here, on the caller's thread; tasks only see their own copy.
                futures = [
                    pool.submit(score_root_move, state.clone(with_history=False), c, self.player, self.depth)
                    for c in moves
                ]
                for fut in as_completed(futures):
                    best.offer(*fut.result())

        assert best.column is not None
        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": self.depth,
            "nodes": best.nodes,
            "eval": best.score,
            "scores": dict(sorted(best.scores.items())),
            "move_col": best.column,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        logger.debug(
            "player %d depth %d -> column %d (eval %s, %d nodes, %.1f ms) scores=%s",
            self.player, self.depth, best.column, best.score, best.nodes,
            elapsed * 1000, self.last_info["scores"],
        )
        return Move(best.column)
