"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

``MarketRepository`` receives an ``AsyncSession`` (unit-of-work) and
implements the ``MarketSource`` collaborator of the search engine.  Rows
are returned as domain ``Market`` entities with their openings loaded.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import MarketModel, OpeningModel
from src.domain.entities import BoundingBox, Market, TextQuery
from src.domain.enums import Weekday


def _text_filters(query: TextQuery) -> list:
    """Name/town substring (case-insensitive) and zip prefix, OR-combined."""
    if query.search:
        needle = query.search.strip()
        return [
            MarketModel.name.icontains(needle, autoescape=True),
            MarketModel.town.icontains(needle, autoescape=True),
            MarketModel.zip.startswith(needle, autoescape=True),
        ]

    conditions = []
    if query.town:
        conditions.append(
            MarketModel.town.icontains(query.town.strip(), autoescape=True)
        )
    if query.zip:
        conditions.append(
            MarketModel.zip.startswith(query.zip.strip(), autoescape=True)
        )
    return conditions


def _open_on(day: Weekday):
    return MarketModel.openings.any(OpeningModel.day == day)


class MarketRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, market_id: str) -> Optional[Market]:
        result = await self.session.execute(
            select(MarketModel).where(MarketModel.id == market_id)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def find_in_bounding_box(self, box: BoundingBox) -> list[Market]:
        """Inclusive range predicate on both coordinates."""
        result = await self.session.execute(
            select(MarketModel)
            .where(
                MarketModel.lat.between(box.min_lat, box.max_lat),
                MarketModel.lng.between(box.min_lng, box.max_lng),
            )
            .order_by(MarketModel.name)
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def find_by_text(self, query: TextQuery, limit: int) -> list[Market]:
        stmt = select(MarketModel)
        conditions = _text_filters(query)
        if conditions:
            stmt = stmt.where(or_(*conditions))
        if query.day is not None:
            stmt = stmt.where(_open_on(query.day))
        result = await self.session.execute(
            stmt.order_by(MarketModel.name, MarketModel.id).limit(limit)
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def count_by_text(self, query: TextQuery) -> int:
        stmt = select(func.count()).select_from(MarketModel)
        conditions = _text_filters(query)
        if conditions:
            stmt = stmt.where(or_(*conditions))
        if query.day is not None:
            stmt = stmt.where(_open_on(query.day))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def suggest(self, fragment: str, limit: int) -> list[Market]:
        """Autocomplete lookup, ordered by name."""
        result = await self.session.execute(
            select(MarketModel)
            .where(or_(*_text_filters(TextQuery(search=fragment))))
            .order_by(MarketModel.name)
            .limit(limit)
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(MarketModel)
        )
        return result.scalar() or 0
