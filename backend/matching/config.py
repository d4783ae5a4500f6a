from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass(frozen=True)
class MatchingConfig:
    default_radius_km: float = _env_float("MATCH_DEFAULT_RADIUS_KM", 25.0)
    attribute_weight: float = _env_float("MATCH_ATTRIBUTE_WEIGHT", 0.55)
    distance_weight: float = _env_float("MATCH_DISTANCE_WEIGHT", 0.2)
    rating_weight: float = _env_float("MATCH_RATING_WEIGHT", 0.25)
    cuisine_weight: float = _env_float("MATCH_CUISINE_WEIGHT", 0.4)
    price_weight: float = _env_float("MATCH_PRICE_WEIGHT", 0.2)
    tag_weight: float = _env_float("MATCH_TAG_WEIGHT", 0.2)


DEFAULT_MATCHING_CONFIG = MatchingConfig()
