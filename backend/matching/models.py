from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig


def _unique_tags(tags: list[str]) -> list[str]:
    return list(dict.fromkeys(tag for tag in tags if tag))


class RestaurantRecord(BaseModel):
    """Read-only snapshot of one directory entry."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    city: str
    state: str
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0, allow_inf_nan=False)
    cuisine: str
    price_range: str
    rating: float | None = Field(default=None, ge=0.0, le=5.0, allow_inf_nan=False)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return _unique_tags(value)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class SearchCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    cuisine: str | None = None
    price_range: str | None = None
    tags: list[str] = Field(default_factory=list, description="Candidate must carry at least one")
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0, allow_inf_nan=False)
    radius_km: float = Field(
        default=DEFAULT_MATCHING_CONFIG.default_radius_km,
        gt=0.0,
        allow_inf_nan=False,
    )

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return _unique_tags(value)

    @field_validator("radius_km", mode="before")
    @classmethod
    def _default_radius(cls, value: Any) -> Any:
        """Missing or non-numeric radius falls back to the configured default."""
        if value is None or value == "":
            return DEFAULT_MATCHING_CONFIG.default_radius_km
        try:
            float(value)
        except (TypeError, ValueError):
            return DEFAULT_MATCHING_CONFIG.default_radius_km
        return value

    @property
    def has_origin(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class WeightConfiguration(BaseModel):
    """Outer weights (attribute/distance/rating) and attribute sub-weights.

    Weights are used as given; nothing forces them to sum to 1.
    """

    model_config = ConfigDict(frozen=True)

    attribute_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.attribute_weight, ge=0.0, allow_inf_nan=False)
    distance_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.distance_weight, ge=0.0, allow_inf_nan=False)
    rating_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.rating_weight, ge=0.0, allow_inf_nan=False)
    cuisine_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.cuisine_weight, ge=0.0, allow_inf_nan=False)
    price_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.price_weight, ge=0.0, allow_inf_nan=False)
    tag_weight: float = Field(default=DEFAULT_MATCHING_CONFIG.tag_weight, ge=0.0, allow_inf_nan=False)

    @classmethod
    def from_config(cls, config: MatchingConfig = DEFAULT_MATCHING_CONFIG) -> WeightConfiguration:
        return cls(
            attribute_weight=config.attribute_weight,
            distance_weight=config.distance_weight,
            rating_weight=config.rating_weight,
            cuisine_weight=config.cuisine_weight,
            price_weight=config.price_weight,
            tag_weight=config.tag_weight,
        )


class MatchResult(RestaurantRecord):
    distance_km: float | None = None
    score: float
    explanation: str
