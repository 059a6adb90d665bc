from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from gridfour.ai.base import MoveStrategy
from gridfour.config import MAX_INVALID_ATTEMPTS
from gridfour.core.grid import GridState
from gridfour.errors import EmptyMoveSetError, InvalidColumnError
from gridfour.game.state import GameResult, GameStatus
from gridfour.types import PLAYER1, PLAYER2, Player, other

logger = logging.getLogger(__name__)

UpdateFn = Callable[[GridState, str], None]


def _agent_name(strategy: MoveStrategy, fallback: str) -> str:
    name = getattr(strategy, "name", None)
    if not name:
        return fallback
    return str(name)


def _choice_status(strategy: MoveStrategy, player: Player, column: int) -> str:
    name = _agent_name(strategy, f"Player {player}")
    info = getattr(strategy, "last_info", None)
    if info and "nodes" in info:
        return (
            f"{name} chose {column + 1} | "
            f"d={info.get('depth')} | "
            f"nodes={info.get('nodes')} | "
            f"eval={info.get('eval')} | "
            f"{info.get('time_ms')}ms"
        )
    return f"{name} chose {column + 1}"


def play_game(
    strategy1: MoveStrategy,
    strategy2: MoveStrategy,
    *,
    grid: Optional[GridState] = None,
    first: Player = PLAYER1,
    on_update: Optional[UpdateFn] = None,
    max_invalid: int = MAX_INVALID_ATTEMPTS,
) -> GameResult:
    """
    Run one game to completion.

    Only successful moves advance the turn and count towards the draw
    ceiling; a rejected column makes the same side choose again.
    """
    strategy1.player = PLAYER1
    strategy2.player = PLAYER2
    strategies = {PLAYER1: strategy1, PLAYER2: strategy2}

    g = grid if grid is not None else GridState()
    ceiling = g.rows * g.cols
    current: Player = first
    result = GameResult(status=GameStatus.IN_PROGRESS, grid=g)
    invalid_streak = 0

    def notify(message: str) -> None:
        if on_update is not None:
            on_update(g, message)

    # A starting grid may already be decided.
    w = g.check_winner()
    if w is not None:
        result.status, result.winner = GameStatus.won_by(w), w
        return result

    notify(f"Player {current} starts.")

    while g.move_count < ceiling:
        strategy = strategies[current]
        t0 = time.perf_counter()
        try:
            column = strategy.choose_move(g)
        except EmptyMoveSetError:
            logger.info("Player %d has no legal move; declaring a draw", current)
            break
        finally:
            result.time_ms[current] += int((time.perf_counter() - t0) * 1000)

        try:
            placed = g.apply_move(column, current)
        except InvalidColumnError as e:
            placed = False
            reason = str(e)
        else:
            reason = f"Column {int(column) + 1} is full."

        if not placed:
            result.invalid_attempts += 1
            invalid_streak += 1
            logger.info("Player %d: rejected column %s (%s)", current, column, reason)
            if invalid_streak >= max_invalid:
                raise InvalidColumnError(
                    f"Player {current} gave {invalid_streak} invalid columns in a row."
                )
            notify(f"{reason} Player {current}, try again.")
            continue

        invalid_streak = 0
        result.moves += 1
        w = g.check_winner()
        if w is not None:
            result.status, result.winner = GameStatus.won_by(w), w
            logger.info("Player %d wins after %d moves", w, result.moves)
            notify(f"Player {w} wins!")
            return result

        notify(_choice_status(strategy, current, int(column)) + f" | Next: Player {other(current)}")
        current = other(current)

    result.status = GameStatus.DRAW
    logger.info("Draw after %d moves", result.moves)
    notify("Draw game.")
    return result
