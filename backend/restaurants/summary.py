from __future__ import annotations

from typing import Any

import pandas as pd

from ..matching.engine import round_half_away
from .data_store import get_dataframe


def count_by_cuisine(df: pd.DataFrame) -> list[dict[str, Any]]:
    counts = df.groupby("cuisine").size().sort_values(ascending=False, kind="stable")
    return [{"cuisine": cuisine, "count": int(count)} for cuisine, count in counts.items()]


def avg_rating_by_city(df: pd.DataFrame) -> list[dict[str, Any]]:
    rated = df.dropna(subset=["rating"])
    if rated.empty:
        return []
    averages = (
        rated.groupby(["city", "state"])["rating"]
        .mean()
        .map(lambda avg: round_half_away(avg, 2))
        .sort_values(ascending=False, kind="stable")
    )
    return [
        {"city": city, "state": state, "avg_rating": float(avg)}
        for (city, state), avg in averages.items()
    ]


def summarize(df: pd.DataFrame | None = None) -> dict[str, Any]:
    """Restaurant counts per cuisine and average rating per city.

    Equal cuisine counts keep alphabetical cuisine order. Averages round half
    away from zero to two places.
    """
    df = get_dataframe() if df is None else df
    return {
        "count_by_cuisine": count_by_cuisine(df),
        "avg_rating_by_city": avg_rating_by_city(df),
    }
