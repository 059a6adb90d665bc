from __future__ import annotations

import argparse
import logging
import sys
import time
from datetime import datetime
from functools import partial
from pathlib import Path

from gridfour.ai.factory import DESCRIPTIONS, STRATEGY_KINDS, make_strategy
from gridfour.config import LOG_LEVEL, RESULTS_DIR, SEARCH_DEPTH, SEARCH_EXECUTOR
from gridfour.errors import GridFourError, QuitGame
from gridfour.game.controller import play_game
from gridfour.game.state import GameStatus
from gridfour.game.tournament import TournamentSummary, run_tournament
from gridfour.io.history import load_history, save_history
from gridfour.io.results import write_results_csv
from gridfour.ui.render import render, render_history

logger = logging.getLogger("gridfour")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _add_common(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--log-level", type=str, default=LOG_LEVEL, help="DEBUG, INFO, WARNING or ERROR")
    ap.add_argument("--depth", type=int, default=SEARCH_DEPTH, help="Search depth for 'search' players")
    ap.add_argument("--executor", choices=("thread", "process", "serial"), default=SEARCH_EXECUTOR,
                    help="How the search spreads root moves")
    ap.add_argument("--seed", type=int, default=None, help="Seed for random/heuristic players")


def build_argparser() -> argparse.ArgumentParser:
    kinds = ", ".join(f"{k} ({v})" for k, v in DESCRIPTIONS.items())
    ap = argparse.ArgumentParser(prog="gridfour", description="Four-in-a-row on a 6x7 grid.")
    sub = ap.add_subparsers(dest="cmd")

    play = sub.add_parser("play", help="Play one game", description=f"Players: {kinds}")
    play.add_argument("--p1", choices=STRATEGY_KINDS, default="human")
    play.add_argument("--p2", choices=STRATEGY_KINDS, default="search")
    play.add_argument("--save", type=str, default=None, help="Write the move history to this file")
    play.add_argument("--no-render", action="store_true", help="Only print the result")
    _add_common(play)

    tour = sub.add_parser("tournament", help="Play many games between two AI players")
    tour.add_argument("--p1", choices=STRATEGY_KINDS[:-1], default="search")
    tour.add_argument("--p2", choices=STRATEGY_KINDS[:-1], default="random")
    tour.add_argument("--games", type=int, default=100)
    tour.add_argument("--swap-sides", action="store_true", help="Alternate who moves first")
    tour.add_argument("--workers", type=int, default=None, help="Play games in this many processes")
    tour.add_argument("--csv", type=str, default=None,
                      help=f"Results CSV (default: {RESULTS_DIR}/tournament_<timestamp>.csv)")
    tour.add_argument("--no-csv", action="store_true")
    _add_common(tour)

    rep = sub.add_parser("replay", help="Print every board of a saved game")
    rep.add_argument("file", type=str)
    rep.add_argument("--log-level", type=str, default=LOG_LEVEL)

    return ap


def _cmd_play(args: argparse.Namespace) -> int:
    p1 = make_strategy(args.p1, 1, depth=args.depth, seed=args.seed, executor=args.executor)
    p2 = make_strategy(args.p2, 2, depth=args.depth, seed=args.seed, executor=args.executor)
    header = f"X: {p1.name} | O: {p2.name}"

    def on_update(grid, message: str) -> None:
        if args.no_render:
            return
        hl = grid.winning_cells() if grid.check_winner() is not None else None
        render(grid, f"{header}\n{message}", highlight=hl)

    try:
        result = play_game(p1, p2, on_update=on_update)
    except QuitGame as e:
        print(str(e))
        return 1

    if result.status is GameStatus.DRAW:
        print(f"Draw after {result.moves} moves.")
    else:
        winner = p1 if result.winner == 1 else p2
        print(f"Player {result.winner} ({winner.name}) wins after {result.moves} moves.")

    if args.save:
        path = save_history(args.save, result.grid.history)
        print(f"History saved to {path}")
    return 0


def _progress(done: int, total: int, s: TournamentSummary) -> None:
    pct = done * 100 // max(1, total)
    bar = "|" * (pct // 2)
    sys.stdout.write(f"\r[{bar:<50}] {pct}% {s.wins_a} - {s.wins_b}")
    sys.stdout.flush()


def _cmd_tournament(args: argparse.Namespace) -> int:
    make_a = partial(make_strategy, args.p1, 1, depth=args.depth, seed=args.seed, executor=args.executor)
    make_b = partial(make_strategy, args.p2, 2, depth=args.depth, seed=args.seed, executor=args.executor)

    start = time.perf_counter()
    s = run_tournament(
        make_a,
        make_b,
        args.games,
        seed=args.seed if args.seed is not None else 1234,
        swap_sides=args.swap_sides,
        max_workers=args.workers,
        progress=_progress,
    )
    print()
    print(f"{s.name_a} wins: {s.wins_a}")
    print(f"{s.name_b} wins: {s.wins_b}")
    print(f"Draws: {s.draws}")
    print(f"Elapsed: {time.perf_counter() - start:.1f}s")

    if not args.no_csv:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = Path(args.csv) if args.csv else Path(RESULTS_DIR) / f"tournament_{stamp}.csv"
        write_results_csv(path, s.records)
        print(f"Results written to {path}")
    return 0


def _cmd_replay(args: argparse.Namespace) -> int:
    snapshots = load_history(args.file)
    render_history(snapshots)
    print(f"{len(snapshots)} moves.")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    if args.cmd is None:
        ap.print_help()
        return 2

    _configure_logging(args.log_level)

    handlers = {"play": _cmd_play, "tournament": _cmd_tournament, "replay": _cmd_replay}
    try:
        return handlers[args.cmd](args)
    except (GridFourError, FileNotFoundError) as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
