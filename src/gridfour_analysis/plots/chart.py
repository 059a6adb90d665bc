from __future__ import annotations

from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt

from ..metrics.summarize import outcome_counts, summarize


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        return None
    _ensure_dir(outdir)
    out = outdir / filename
    fig.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_outcomes(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    counts = outcome_counts(df)
    if counts.empty:
        return None

    fig = plt.figure()
    plt.bar(counts.index.astype(str), counts.values)
    plt.title("Game outcomes")
    plt.xlabel("status")
    plt.ylabel("games")
    return _finish(fig, outdir, "outcomes.png", show=show)


def plot_win_rates(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    table = summarize(df)
    if table.empty:
        return None

    fig = plt.figure(figsize=(8, 4))
    plt.bar(table["name"].astype(str), table["win_rate"].astype(float))
    plt.title("Win rate by strategy")
    plt.xlabel("strategy")
    plt.ylabel("win rate")
    plt.ylim(0, 1)
    plt.xticks(rotation=30, ha="right")
    return _finish(fig, outdir, "win_rates.png", show=show)


def plot_game_lengths(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    if "moves" not in df.columns or df["moves"].dropna().empty:
        return None

    fig = plt.figure()
    plt.hist(df["moves"].dropna(), bins=range(0, int(df["moves"].max()) + 2))
    plt.title("Game length")
    plt.xlabel("moves")
    plt.ylabel("games")
    return _finish(fig, outdir, "game_lengths.png", show=show)
