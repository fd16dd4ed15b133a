"""
Market endpoints
================

GET /api/v1/markets               -- proximity / text search with day filter
GET /api/v1/markets/suggestions   -- autocomplete on name, town or zip
GET /api/v1/markets/{market_id}   -- one market with its openings
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.api.dependencies import get_market_repository, get_search_engine
from src.api.middleware import limiter
from src.api.schemas import (
    ErrorResponse,
    MarketResponse,
    MarketSearchResponse,
    SuggestionListResponse,
    SuggestionResponse,
)
from src.config import settings
from src.domain.entities import GeoQuery, InvalidSearchQuery, SearchQuery, TextQuery
from src.domain.enums import Weekday
from src.domain.search import ProximitySearchEngine
from src.infrastructure.repositories import MarketRepository


router = APIRouter(prefix="/markets", tags=["markets"])


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def build_query(
    *,
    lat: Optional[float],
    lng: Optional[float],
    radius: float,
    search: Optional[str],
    town: Optional[str],
    zip_code: Optional[str],
    day: Optional[str],
) -> SearchQuery:
    """Turn raw query parameters into a ``GeoQuery`` or a ``TextQuery``."""
    weekday: Optional[Weekday] = None
    if _blank_to_none(day):
        try:
            weekday = Weekday.parse(day)
        except ValueError as exc:
            raise InvalidSearchQuery(str(exc)) from exc

    if (lat is None) != (lng is None):
        raise InvalidSearchQuery("lat and lng must be provided together")

    if lat is not None and lng is not None:
        return GeoQuery(lat=lat, lng=lng, radius_km=radius, day=weekday)

    return TextQuery(
        search=_blank_to_none(search),
        town=_blank_to_none(town),
        zip=_blank_to_none(zip_code),
        day=weekday,
    )


@router.get(
    "",
    response_model=MarketSearchResponse,
    summary="Search markets by proximity or text",
    description=(
        "With ``lat`` and ``lng`` the search is geographic: markets within "
        "``radius`` km, nearest first.  Otherwise ``search`` (or the older "
        "``town`` / ``zip`` filters) match by name, town or postal-code "
        "prefix, ordered by name.  ``day`` keeps only markets open that day."
    ),
    responses={422: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def search_markets(
    request: Request,
    lat: Optional[float] = Query(None, ge=-90, le=90, allow_inf_nan=False),
    lng: Optional[float] = Query(None, ge=-180, le=180, allow_inf_nan=False),
    radius: float = Query(
        settings.default_radius_km,
        ge=0,
        le=settings.max_radius_km,
        allow_inf_nan=False,
        description="Search radius in km",
    ),
    search: Optional[str] = Query(None, max_length=100),
    town: Optional[str] = Query(None, max_length=120),
    zip_code: Optional[str] = Query(None, alias="zip", max_length=10),
    day: Optional[str] = Query(None, description="LUNDI ... DIMANCHE"),
    engine: ProximitySearchEngine = Depends(get_search_engine),
):
    query = build_query(
        lat=lat,
        lng=lng,
        radius=radius,
        search=search,
        town=town,
        zip_code=zip_code,
        day=day,
    )
    page = await engine.search(query)
    return MarketSearchResponse.from_page(page)


@router.get(
    "/suggestions",
    response_model=SuggestionListResponse,
    summary="Autocomplete market names, towns and postal codes",
)
@limiter.limit(settings.rate_limit)
async def suggest_markets(
    request: Request,
    q: Optional[str] = Query(None, max_length=100),
    repo: MarketRepository = Depends(get_market_repository),
):
    fragment = (q or "").strip()
    if len(fragment) < settings.suggestion_min_length:
        return SuggestionListResponse()

    markets = await repo.suggest(fragment, settings.suggestion_limit)
    return SuggestionListResponse(
        suggestions=[
            SuggestionResponse(
                id=m.id,
                label=f"{m.name} - {m.town} ({m.zip})",
                name=m.name,
                town=m.town,
                zip=m.zip,
            )
            for m in markets
        ]
    )


@router.get(
    "/{market_id}",
    response_model=MarketResponse,
    summary="Get a market with its opening hours",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_market(
    request: Request,
    market_id: str,
    repo: MarketRepository = Depends(get_market_repository),
):
    market = await repo.get_by_id(market_id)
    if not market:
        raise HTTPException(status_code=404, detail="Market not found")
    return MarketResponse.from_entity(market)
