"""
Proximity Market Search
=======================

Per-call pipeline, no persistent state:

1. **Mode selection**     -- ``GeoQuery`` or ``TextQuery``.
2. **Candidate retrieval** -- delegated to a ``MarketSource``:
   * geographic: every market inside the bounding box of the circle;
   * textual: name / town substring or zip prefix, already ordered by
     name and capped by the storage layer.
3. **Exact filter**       -- geographic only: drop candidates whose
   haversine distance exceeds the radius.  The box is a superset, so this
   step is mandatory.
4. **Day filter**         -- optional, both modes.
5. **Sort**               -- distance ascending (geo); text results keep
   the name order the source retrieved them in.
6. **Cap**                -- truncate to ``max_results`` and report the
   pre-cap total plus a ``limited`` flag.

Complexity
----------
Let K = candidates returned by the source, O = openings per market.

* Exact filter:  O(K)
* Day filter:    O(K x O)
* Sort:          O(K log K)
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from .distance import bounding_box, haversine_km
from .entities import (
    BoundingBox,
    GeoQuery,
    Market,
    SearchPage,
    SearchQuery,
    SearchResult,
    TextQuery,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 200


class MarketSource(Protocol):
    """Read-only market collaborator (see ``MarketRepository``)."""

    async def find_in_bounding_box(self, box: BoundingBox) -> list[Market]: ...

    async def find_by_text(self, query: TextQuery, limit: int) -> list[Market]: ...

    async def count_by_text(self, query: TextQuery) -> int: ...


class ProximitySearchEngine:
    """High-level API used by the ``/markets`` route."""

    def __init__(
        self, source: MarketSource, max_results: int = DEFAULT_MAX_RESULTS
    ):
        if max_results < 0:
            raise ValueError("max_results must be >= 0")
        self.source = source
        self.max_results = max_results

    async def search(self, query: SearchQuery) -> SearchPage:
        if isinstance(query, GeoQuery):
            box = bounding_box(query.lat, query.lng, query.radius_km)
            candidates = await self.source.find_in_bounding_box(box)
            logger.debug(
                "Geo search (%.5f, %.5f) r=%.2fkm: %d candidates in box",
                query.lat, query.lng, query.radius_km, len(candidates),
            )
            return self.rank(query, candidates)

        candidates = await self.source.find_by_text(query, self.max_results)
        total = await self.source.count_by_text(query)
        logger.debug(
            "Text search %r: %d of %d matches fetched",
            query.search or query.town or query.zip, len(candidates), total,
        )
        return self.rank(query, candidates, total=total)

    def rank(
        self,
        query: SearchQuery,
        candidates: Sequence[Market],
        total: Optional[int] = None,
    ) -> SearchPage:
        """
        Run steps 3-6 over an already-retrieved candidate set.

        *total* overrides the pre-cap count when the source itself capped
        the candidates (textual mode).
        """
        if isinstance(query, GeoQuery):
            results = _within_radius(query, candidates)
        else:
            results = [SearchResult(market=m) for m in candidates]

        if query.day is not None:
            results = [r for r in results if r.market.is_open_on(query.day)]

        # Text candidates keep the source's name ordering (its collation
        # decided which rows survived the cap).
        if isinstance(query, GeoQuery):
            results.sort(
                key=lambda r: (r.distance_km, r.market.name, r.market.id)
            )

        found = len(results) if total is None else max(total, len(results))
        return SearchPage(
            results=results[: self.max_results],
            total=found,
            limited=found > self.max_results,
        )


def _within_radius(
    query: GeoQuery, candidates: Sequence[Market]
) -> list[SearchResult]:
    results: list[SearchResult] = []
    for market in candidates:
        d = haversine_km(query.lat, query.lng, market.lat, market.lng)
        if d <= query.radius_km:
            results.append(SearchResult(market=market, distance_km=d))
    return results
