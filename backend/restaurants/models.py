from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..matching.models import MatchResult
from .parsing import normalize_tags, to_number


class RestaurantIn(BaseModel):
    """Create / update payload from the internal interface."""

    name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    cuisine: str = Field(..., min_length=1)
    price_range: str = Field(..., min_length=1, description='Price label, e.g. "$$"')
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("latitude", "longitude", "rating", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return to_number(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes(cls, value: Any) -> Any:
        return value or None


class CriteriaOut(BaseModel):
    cuisine: str | None
    price_range: str | None
    tags: list[str]
    city: str | None
    state: str | None
    latitude: float | None
    longitude: float | None
    radius_km: float


class BestMatchResponse(BaseModel):
    criteria: CriteriaOut
    count: int
    message: str
    results: list[MatchResult]


class CuisineCount(BaseModel):
    cuisine: str
    count: int


class CityRating(BaseModel):
    city: str
    state: str
    avg_rating: float


class SummaryResponse(BaseModel):
    count_by_cuisine: list[CuisineCount]
    avg_rating_by_city: list[CityRating]
