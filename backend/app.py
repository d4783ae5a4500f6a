from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from pydantic import ValidationError

from .matching.engine import match_and_rank
from .matching.models import RestaurantRecord, WeightConfiguration
from .restaurants.data_store import (
    RestaurantNotFoundError,
    create_restaurant,
    list_restaurants,
    update_restaurant,
)
from .restaurants.models import (
    BestMatchResponse,
    CriteriaOut,
    RestaurantIn,
    SummaryResponse,
)
from .restaurants.parsing import build_search_criteria, to_number
from .restaurants.summary import summarize

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant Insights API", version="1.0.0")

NO_MATCHES_MESSAGE = "No matches found for the provided criteria."
MATCHES_MESSAGE = "Matches found."


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/best_match", response_model=BestMatchResponse)
def best_match(
    cuisine: str | None = None,
    price_range: str | None = None,
    tags: list[str] | None = Query(default=None),
    city: str | None = None,
    state: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
    radius_km: str | None = None,
) -> BestMatchResponse:
    try:
        criteria = build_search_criteria(
            cuisine=cuisine,
            price_range=price_range,
            tags=tags,
            lat=lat,
            lng=lng,
            radius_km=radius_km,
        )
    except ValidationError as exc:
        logger.warning("Rejected search criteria: %s", exc)
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc

    # Coarse narrowing happens in the store; the matcher applies the hard gates.
    candidates = list_restaurants(
        cuisine=criteria.cuisine,
        city=city or None,
        state=state or None,
    )
    matches = match_and_rank(candidates, criteria, WeightConfiguration.from_config())

    return BestMatchResponse(
        criteria=CriteriaOut(
            cuisine=criteria.cuisine,
            price_range=criteria.price_range,
            tags=criteria.tags,
            city=city or None,
            state=state or None,
            latitude=criteria.latitude,
            longitude=criteria.longitude,
            radius_km=criteria.radius_km,
        ),
        count=len(matches),
        message=MATCHES_MESSAGE if matches else NO_MATCHES_MESSAGE,
        results=matches,
    )


# ── Internal directory endpoints ─────────────────────────────────────────


@app.get("/restaurants", response_model=list[RestaurantRecord])
def restaurants(
    cuisine: str | None = None,
    city: str | None = None,
    state: str | None = None,
    min_rating: str | None = None,
    sort: str | None = None,
) -> list[RestaurantRecord]:
    return list_restaurants(
        cuisine=cuisine or None,
        city=city or None,
        state=state or None,
        min_rating=to_number(min_rating),
        sort=sort,
    )


@app.get("/restaurants/summary", response_model=SummaryResponse)
def restaurants_summary() -> SummaryResponse:
    return SummaryResponse(**summarize())


@app.post("/restaurants", response_model=RestaurantRecord, status_code=201)
def add_restaurant(body: RestaurantIn) -> RestaurantRecord:
    return create_restaurant(body)


@app.put("/restaurants/{restaurant_id}", response_model=RestaurantRecord)
def edit_restaurant(restaurant_id: int, body: RestaurantIn) -> RestaurantRecord:
    try:
        return update_restaurant(restaurant_id, body)
    except RestaurantNotFoundError:
        raise HTTPException(status_code=404, detail="Restaurant not found")


@app.get("/")
def root() -> dict[str, str]:
    return {"status": "ok"}
