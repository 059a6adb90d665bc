from __future__ import annotations

import argparse
from pathlib import Path

from ..io.load_results import LoadSpec, load_latest_from_dir, load_results
from ..metrics.summarize import outcome_counts, seat_win_rates, summarize
from ..plots.chart import plot_game_lengths, plot_outcomes, plot_win_rates


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gridfour-analysis", description="Summarize gridfour tournament CSV results.")
    ap.add_argument("--csv", type=str, default=None, help="Path to a results CSV. If omitted, uses latest in --results-dir.")
    ap.add_argument("--results-dir", type=str, default="data/results", help="Directory containing tournament_*.csv")
    ap.add_argument("--pattern", type=str, default="tournament_*.csv", help="Glob pattern for selecting latest file")

    ap.add_argument("--outdir", type=str, default="data/figures", help="Directory for saving plots")
    ap.add_argument("--show", action="store_true", help="Show plots instead of saving")
    ap.add_argument("--no-plots", action="store_true", help="Only print tables")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    if args.csv:
        csv_path = Path(args.csv)
    else:
        csv_path = load_latest_from_dir(Path(args.results_dir), pattern=args.pattern)

    df = load_results(LoadSpec(csv_path=csv_path))

    print(f"\nLoaded: {csv_path}")
    print(f"Games: {len(df):,}")

    print("\n=== Strategies ===")
    print(summarize(df).to_string(index=False))

    print("\n=== Win rate by seat ===")
    print(seat_win_rates(df).to_string(index=False))

    print("\n=== Outcomes ===")
    print(outcome_counts(df).to_string())

    if args.no_plots:
        return 0

    outdir = Path(args.outdir)
    created = [
        plot_outcomes(df, outdir, show=args.show),
        plot_win_rates(df, outdir, show=args.show),
        plot_game_lengths(df, outdir, show=args.show),
    ]
    if not args.show:
        for p in created:
            if p is not None:
                print(f"Saved: {p}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
