from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable

from .geo import haversine_km
from .models import MatchResult, RestaurantRecord, SearchCriteria, WeightConfiguration

logger = logging.getLogger(__name__)

SCORE_DECIMALS = 3
NEUTRAL_SCORE = 0.5
EXPLANATION_SEPARATOR = " • "
FALLBACK_EXPLANATION = "Matches your criteria"

# Wide enough to quantize any finite float to a few decimals
_DECIMAL_CONTEXT = Context(prec=400)


def _quantize(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)


def round_half_away(value: float, places: int = SCORE_DECIMALS) -> float:
    """Round the exact binary value of *value*, ties away from zero."""
    if not math.isfinite(value):
        return value
    return float(_quantize(value, places))


def format_fixed(value: float, places: int = 1) -> str:
    """Fixed-point text with the same rounding as ``round_half_away``."""
    if not math.isfinite(value):
        return str(value)
    return format(_quantize(value, places), "f")


@dataclass(frozen=True)
class CandidateEvaluation:
    """Outcome of the hard gates for one candidate."""

    record: RestaurantRecord
    distance_km: float | None
    within_radius: bool
    cuisine_match: bool
    price_match: bool
    tag_matches: tuple[str, ...]
    tags_match: bool

    @property
    def passes(self) -> bool:
        return self.within_radius and self.cuisine_match and self.price_match and self.tags_match


@dataclass(frozen=True)
class ScoreBreakdown:
    rating_score: float
    tag_score: float
    distance_score: float
    attribute_score: float
    total: float

    @property
    def score(self) -> float:
        return round_half_away(self.total, SCORE_DECIMALS)


def evaluate_candidate(record: RestaurantRecord, criteria: SearchCriteria) -> CandidateEvaluation:
    """Apply the radius, cuisine, price and tag gates to a single record."""
    if criteria.has_origin and record.has_location:
        distance_km: float | None = haversine_km(
            criteria.latitude, criteria.longitude, record.latitude, record.longitude,
        )
    else:
        distance_km = None

    within_radius = distance_km is None or distance_km <= criteria.radius_km
    cuisine_match = record.cuisine == criteria.cuisine if criteria.cuisine else True
    price_match = record.price_range == criteria.price_range if criteria.price_range else True

    candidate_tags = set(record.tags)
    tag_matches = tuple(tag for tag in criteria.tags if tag in candidate_tags)
    tags_match = bool(tag_matches) if criteria.tags else True

    return CandidateEvaluation(
        record=record,
        distance_km=distance_km,
        within_radius=within_radius,
        cuisine_match=cuisine_match,
        price_match=price_match,
        tag_matches=tag_matches,
        tags_match=tags_match,
    )


def score_candidate(
    evaluation: CandidateEvaluation,
    criteria: SearchCriteria,
    weights: WeightConfiguration,
) -> ScoreBreakdown:
    """Weighted attribute / distance / rating score for a gated candidate.

    Missing rating scores 0; missing distance and an empty tag query score
    the neutral 0.5.
    """
    rating = evaluation.record.rating
    rating_score = rating / 5 if rating is not None else 0.0

    if criteria.tags:
        tag_score = len(evaluation.tag_matches) / len(criteria.tags)
    else:
        tag_score = NEUTRAL_SCORE

    if evaluation.distance_km is None:
        distance_score = NEUTRAL_SCORE
    else:
        distance_score = max(0.0, 1 - evaluation.distance_km / criteria.radius_km)

    attribute_score = (
        int(evaluation.cuisine_match) * weights.cuisine_weight
        + int(evaluation.price_match) * weights.price_weight
        + tag_score * weights.tag_weight
    )
    total = (
        attribute_score * weights.attribute_weight
        + distance_score * weights.distance_weight
        + rating_score * weights.rating_weight
    )
    return ScoreBreakdown(
        rating_score=rating_score,
        tag_score=tag_score,
        distance_score=distance_score,
        attribute_score=attribute_score,
        total=total,
    )


def build_explanation(
    *,
    cuisine_match: bool,
    price_match: bool,
    tag_matches: Iterable[str],
    distance_km: float | None,
    rating: float | None,
) -> str:
    parts: list[str] = []
    if cuisine_match:
        parts.append("Cuisine matches")
    if price_match:
        parts.append("Price range matches")
    tag_matches = list(tag_matches)
    if tag_matches:
        parts.append(f"Tags matched: {', '.join(tag_matches)}")
    if distance_km is not None:
        parts.append(f"Within {format_fixed(distance_km, 1)} km")
    if rating is not None:
        parts.append(f"Rating {format_fixed(rating, 1)}")
    return EXPLANATION_SEPARATOR.join(parts) if parts else FALLBACK_EXPLANATION


def _to_result(
    evaluation: CandidateEvaluation,
    criteria: SearchCriteria,
    weights: WeightConfiguration,
) -> MatchResult:
    breakdown = score_candidate(evaluation, criteria, weights)
    record = evaluation.record
    return MatchResult(
        **record.model_dump(),
        distance_km=evaluation.distance_km,
        score=breakdown.score,
        explanation=build_explanation(
            cuisine_match=evaluation.cuisine_match,
            price_match=evaluation.price_match,
            tag_matches=evaluation.tag_matches,
            distance_km=evaluation.distance_km,
            rating=record.rating,
        ),
    )


def match_and_rank(
    restaurants: Iterable[RestaurantRecord],
    criteria: SearchCriteria,
    weights: WeightConfiguration | None = None,
) -> list[MatchResult]:
    """Filter, score, explain and rank candidates for one search.

    Results are ordered by descending score. The sort is stable, so equal
    scores keep the order in which candidates were supplied.
    """
    weights = weights or WeightConfiguration.from_config()

    candidates = list(restaurants)
    # Gating runs before scoring; rejected candidates are never scored.
    retained = [e for e in (evaluate_candidate(r, criteria) for r in candidates) if e.passes]
    results = [_to_result(e, criteria, weights) for e in retained]

    logger.debug("Matched %d of %d candidates", len(results), len(candidates))
    return sorted(results, key=lambda result: result.score, reverse=True)
