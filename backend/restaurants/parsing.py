from __future__ import annotations

import math
from typing import Any, Iterable

from ..matching.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from ..matching.models import SearchCriteria


def to_number(value: Any) -> float | None:
    """Coerce a raw parameter to a float; blanks and junk become ``None``."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_tags(tags: str | Iterable[str] | None) -> list[str]:
    """Split comma-separated tags, strip them and drop blanks and duplicates."""
    if not tags:
        return []
    raw = [tags] if isinstance(tags, str) else list(tags)
    cleaned: list[str] = []
    for item in raw:
        if not item:
            continue
        for tag in str(item).split(","):
            tag = tag.strip()
            if tag and tag not in cleaned:
                cleaned.append(tag)
    return cleaned


def build_search_criteria(
    *,
    cuisine: str | None = None,
    price_range: str | None = None,
    tags: str | Iterable[str] | None = None,
    lat: Any = None,
    lng: Any = None,
    radius_km: Any = None,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> SearchCriteria:
    """
    Turn raw query parameters into ``SearchCriteria``.

    A missing, zero or non-numeric radius becomes the configured default.
    Out-of-range values still fail model validation.
    """
    return SearchCriteria(
        cuisine=cuisine or None,
        price_range=price_range or None,
        tags=normalize_tags(tags),
        latitude=to_number(lat),
        longitude=to_number(lng),
        radius_km=to_number(radius_km) or config.default_radius_km,
    )
