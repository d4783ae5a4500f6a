from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import pandas as pd

from ..matching.models import RestaurantRecord
from .config import DEFAULT_STORE_CONFIG
from .models import RestaurantIn

logger = logging.getLogger(__name__)

COLUMNS = [
    "id",
    "name",
    "city",
    "state",
    "latitude",
    "longitude",
    "cuisine",
    "price_range",
    "rating",
    "tags",
    "notes",
]
_NUMERIC_COLUMNS = ["latitude", "longitude", "rating"]

_df: pd.DataFrame | None = None
_lock = threading.RLock()


class RestaurantNotFoundError(LookupError):
    pass


def _split_tags(value: Any) -> list[str]:
    if not isinstance(value, str):
        return []
    return list(dict.fromkeys(t.strip() for t in value.split(",") if t.strip()))


def _normalize(df: pd.DataFrame) -> pd.DataFrame:
    df = df.reindex(columns=COLUMNS)
    df["id"] = df["id"].astype(int)
    for col in _NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df.reset_index(drop=True)


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path).reindex(columns=COLUMNS)
    df["tags"] = df["tags"].apply(_split_tags)
    df = _normalize(df)
    logger.info("Loaded %d restaurants from %s", len(df), path)
    return df


def _scalar(value: Any) -> Any:
    return None if pd.isna(value) else value


def _row_to_record(row: pd.Series) -> RestaurantRecord:
    return RestaurantRecord(
        id=int(row["id"]),
        name=row["name"],
        city=row["city"],
        state=row["state"],
        latitude=_scalar(row["latitude"]),
        longitude=_scalar(row["longitude"]),
        cuisine=row["cuisine"],
        price_range=row["price_range"],
        rating=_scalar(row["rating"]),
        tags=list(row["tags"]),
        notes=_scalar(row["notes"]),
    )


def _payload_row(restaurant_id: int, payload: RestaurantIn) -> dict[str, Any]:
    return {"id": restaurant_id, **payload.model_dump()}


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory restaurant DataFrame, loading it on first call."""
    global _df
    with _lock:
        if _df is None:
            _df = _load(DEFAULT_STORE_CONFIG.data_path)
        return _df


def reset_store(path: Path | None = None) -> None:
    """Discard in-memory edits and reload the snapshot."""
    global _df
    with _lock:
        _df = _load(path or DEFAULT_STORE_CONFIG.data_path)


def list_restaurants(
    cuisine: str | None = None,
    city: str | None = None,
    state: str | None = None,
    min_rating: float | None = None,
    sort: str | None = None,
) -> list[RestaurantRecord]:
    """
    Coarse directory lookup.

    Cuisine matches exactly; city and state ignore case. Records without a
    rating never satisfy ``min_rating``. Ordered by name unless ``sort`` is
    ``rating_desc`` or ``city_asc``.
    """
    df = get_dataframe()

    mask = pd.Series(True, index=df.index)
    if cuisine:
        mask = mask & (df["cuisine"] == cuisine)
    if city:
        mask = mask & (df["city"].str.lower() == city.lower())
    if state:
        mask = mask & (df["state"].str.lower() == state.lower())
    if min_rating:
        mask = mask & (df["rating"] >= min_rating)

    rows = df.loc[mask]
    if sort == "rating_desc":
        rows = rows.sort_values("rating", ascending=False, na_position="last", kind="stable")
    elif sort == "city_asc":
        rows = rows.sort_values(["city", "name"], kind="stable")
    else:
        rows = rows.sort_values("name", kind="stable")

    return [_row_to_record(row) for _, row in rows.iterrows()]


def get_restaurant(restaurant_id: int) -> RestaurantRecord:
    df = get_dataframe()
    rows = df.loc[df["id"] == restaurant_id]
    if rows.empty:
        raise RestaurantNotFoundError(restaurant_id)
    return _row_to_record(rows.iloc[0])


def create_restaurant(payload: RestaurantIn) -> RestaurantRecord:
    global _df
    with _lock:
        df = get_dataframe()
        new_id = int(df["id"].max()) + 1 if not df.empty else 1
        _df = _normalize(pd.concat([df, pd.DataFrame([_payload_row(new_id, payload)])], ignore_index=True))
        logger.info("Created restaurant %d (%s)", new_id, payload.name)
        return get_restaurant(new_id)


def update_restaurant(restaurant_id: int, payload: RestaurantIn) -> RestaurantRecord:
    """Replace every field and tag of an existing restaurant."""
    global _df
    with _lock:
        df = get_dataframe()
        existing = df["id"] == restaurant_id
        if not existing.any():
            raise RestaurantNotFoundError(restaurant_id)
        _df = _normalize(
            pd.concat([df.loc[~existing], pd.DataFrame([_payload_row(restaurant_id, payload)])], ignore_index=True)
        )
        logger.info("Updated restaurant %d", restaurant_id)
        return get_restaurant(restaurant_id)
