from __future__ import annotations

import pandas as pd


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Present: {list(df.columns)}")


def by_seat(df: pd.DataFrame) -> pd.DataFrame:
    """One row per (game, strategy) with the seat it played from."""
    _require_cols(df, ["game", "player1", "player2", "winner", "moves", "time_ms_p1", "time_ms_p2"])

    seats = []
    for seat, name_col, opp_col, ms_col in (
        (1, "player1", "player2", "time_ms_p1"),
        (2, "player2", "player1", "time_ms_p2"),
    ):
        part = pd.DataFrame({
            "game": df["game"],
            "name": df[name_col],
            "opponent": df[opp_col],
            "seat": seat,
            "moves": df["moves"],
            "time_ms": df[ms_col],
        })
        part["win"] = df["winner"] == df[name_col]
        part["draw"] = df["winner"] == ""
        part["loss"] = ~part["win"] & ~part["draw"]
        seats.append(part)

    return pd.concat(seats, ignore_index=True)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    long = by_seat(df)
    if long.empty:
        return pd.DataFrame(columns=["name", "games", "wins", "draws", "losses", "win_rate", "avg_moves", "avg_ms_per_game"])

    out = (
        long.groupby("name")
        .agg(
            games=("game", "count"),
            wins=("win", "sum"),
            draws=("draw", "sum"),
            losses=("loss", "sum"),
            avg_moves=("moves", "mean"),
            avg_ms_per_game=("time_ms", "mean"),
        )
        .reset_index()
    )
    out["win_rate"] = out["wins"] / out["games"]
    out = out.sort_values(["win_rate", "name"], ascending=[False, True]).reset_index(drop=True)
    return out[["name", "games", "wins", "draws", "losses", "win_rate", "avg_moves", "avg_ms_per_game"]]


def seat_win_rates(df: pd.DataFrame) -> pd.DataFrame:
    """Win rate of each strategy split by the seat it moved from (1 = moved first)."""
    long = by_seat(df)
    out = long.groupby(["name", "seat"]).agg(games=("game", "count"), wins=("win", "sum")).reset_index()
    out["win_rate"] = out["wins"] / out["games"]
    return out


def outcome_counts(df: pd.DataFrame) -> pd.Series:
    _require_cols(df, ["status"])
    return df["status"].value_counts().sort_index()
