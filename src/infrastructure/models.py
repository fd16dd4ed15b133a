"""
SQLAlchemy ORM models.

Tables
------
* ``markets``          -- market place, postal address and position
* ``market_openings``  -- weekly opening windows (weekday + HH:MM range)

Indexes
-------
* **B-Tree** composite on ``(lat, lng)`` so the bounding-box range
  predicate used by the proximity search is served from the index.
* **B-Tree** on ``name``, ``town``, ``zip`` for text search / ordering
  and on ``market_openings.market_id`` / ``day`` for the day filter.
"""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from src.domain.entities import Market, Opening
from src.domain.enums import Weekday


def _new_id() -> str:
    return str(uuid.uuid4())


class MarketModel(Base):
    __tablename__ = "markets"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False, default="")
    town = Column(String(120), nullable=False)
    zip = Column(String(10), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    openings = relationship(
        "OpeningModel",
        back_populates="market",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_markets_lat_lng", "lat", "lng"),
        Index("idx_markets_name", "name"),
        Index("idx_markets_town", "town"),
        Index("idx_markets_zip", "zip"),
    )

    def to_entity(self) -> Market:
        return Market(
            id=self.id,
            name=self.name,
            address=self.address,
            town=self.town,
            zip=self.zip,
            lat=self.lat,
            lng=self.lng,
            openings=tuple(o.to_entity() for o in self.openings),
        )


class OpeningModel(Base):
    __tablename__ = "market_openings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    market_id = Column(
        String(36), ForeignKey("markets.id", ondelete="CASCADE"), nullable=False
    )
    day = Column(Enum(Weekday, name="weekday"), nullable=False)
    start = Column(String(5), nullable=False)  # "HH:MM"
    end = Column(String(5), nullable=False)

    market = relationship("MarketModel", back_populates="openings")

    __table_args__ = (
        Index("idx_openings_market", "market_id"),
        Index("idx_openings_day", "day"),
    )

    def to_entity(self) -> Opening:
        return Opening(day=Weekday(self.day), start=self.start, end=self.end)
