"""Pydantic response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Market, SearchPage, SearchResult


class OpeningResponse(BaseModel):
    day: str
    start: str
    end: str


class MarketResponse(BaseModel):
    id: str
    name: str
    address: str
    town: str
    zip: str
    lat: float
    lng: float
    openings: list[OpeningResponse] = []
    distance_km: Optional[float] = None

    @classmethod
    def from_entity(
        cls, market: Market, distance_km: Optional[float] = None
    ) -> "MarketResponse":
        return cls(
            id=market.id,
            name=market.name,
            address=market.address,
            town=market.town,
            zip=market.zip,
            lat=market.lat,
            lng=market.lng,
            openings=[
                OpeningResponse(day=o.day.value, start=o.start, end=o.end)
                for o in market.openings
            ],
            distance_km=distance_km,
        )

    @classmethod
    def from_result(cls, result: SearchResult) -> "MarketResponse":
        return cls.from_entity(result.market, result.distance_km)


class MarketSearchResponse(BaseModel):
    markets: list[MarketResponse]
    total: int
    limited: bool

    @classmethod
    def from_page(cls, page: SearchPage) -> "MarketSearchResponse":
        return cls(
            markets=[MarketResponse.from_result(r) for r in page.results],
            total=page.total,
            limited=page.limited,
        )


class SuggestionResponse(BaseModel):
    id: str
    label: str
    name: str
    town: str
    zip: str


class SuggestionListResponse(BaseModel):
    suggestions: list[SuggestionResponse] = []


class HealthResponse(BaseModel):
    status: str = "ok"


class StatsResponse(BaseModel):
    markets: int


class ErrorResponse(BaseModel):
    detail: str
