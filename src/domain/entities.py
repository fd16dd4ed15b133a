"""
Domain entities and value objects for the market search.

Patterns used
-------------
- **Tagged variant** for queries: a request is either a ``GeoQuery`` or a
  ``TextQuery``, never both.  ``SearchQuery`` is their union.
- Entities are frozen: the search engine reads markets, it never
  mutates them.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .enums import Weekday

_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# Largest radius for which the bounding box still encloses the whole search
# circle up to 60° of latitude.
MAX_RADIUS_KM = 300.0


class InvalidSearchQuery(ValueError):
    """Raised when query parameters cannot form a valid search."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        """Inclusive on every edge."""
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lng <= lng <= self.max_lng
        )


@dataclass(frozen=True)
class GeoQuery:
    lat: float
    lng: float
    radius_km: float
    day: Optional[Weekday] = None

    def __post_init__(self) -> None:
        for name in ("lat", "lng", "radius_km"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidSearchQuery(f"{name} must be a finite number")
        if not -90 <= self.lat <= 90:
            raise InvalidSearchQuery("lat must be between -90 and 90")
        if not -180 <= self.lng <= 180:
            raise InvalidSearchQuery("lng must be between -180 and 180")
        if not 0 <= self.radius_km <= MAX_RADIUS_KM:
            raise InvalidSearchQuery(
                f"radius must be between 0 and {MAX_RADIUS_KM:g} km"
            )


@dataclass(frozen=True)
class TextQuery:
    """
    Free-text lookup.  ``search`` matches name, town or postal-code
    prefix; ``town`` / ``zip`` are the older discrete filters, OR-combined
    and only consulted when ``search`` is empty.  All three empty means
    "browse every market".
    """

    search: Optional[str] = None
    town: Optional[str] = None
    zip: Optional[str] = None
    day: Optional[Weekday] = None


SearchQuery = Union[GeoQuery, TextQuery]


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Opening:
    day: Weekday
    start: str
    end: str

    @staticmethod
    def valid_time(value: str) -> bool:
        return bool(_TIME_OF_DAY.match(value))


@dataclass(frozen=True)
class Market:
    id: str
    name: str
    address: str
    town: str
    zip: str
    lat: float
    lng: float
    openings: tuple[Opening, ...] = ()

    def is_open_on(self, day: Weekday) -> bool:
        return any(o.day == day for o in self.openings)


@dataclass(frozen=True)
class SearchResult:
    market: Market
    distance_km: Optional[float] = None  # geographic mode only


@dataclass(frozen=True)
class SearchPage:
    results: list[SearchResult] = field(default_factory=list)
    total: int = 0  # matches before the cap
    limited: bool = False
