"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  The production ORM models are used as-is: they only
rely on portable column types.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.domain.entities import Market, Opening
from src.domain.enums import Weekday
from src.infrastructure.database import Base
from src.infrastructure.models import MarketModel, OpeningModel


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

PARIS = (48.8566, 2.3522)


# name, town, zip, lat, lng, open days
MARKETS = [
    ("Marché Paris Centre", "Paris", "75004", 48.8566, 2.3522,
     [Weekday.LUNDI, Weekday.SAMEDI]),
    ("Marché Saint-Honoré", "Paris", "75001", 48.8667, 2.3319,
     [Weekday.MERCREDI, Weekday.SAMEDI]),
    ("Marché des Enfants Rouges", "Paris", "75003", 48.8629, 2.3617,
     [Weekday.MARDI]),
    ("Marché d'Aligre", "Paris", "75012", 48.8490, 2.3781,
     [Weekday.JEUDI, Weekday.DIMANCHE]),
    ("Marché Saint-Quentin", "Paris", "75010", 48.8790, 2.3560,
     [Weekday.VENDREDI]),
    ("Marché Notre-Dame", "Versailles", "78000", 48.8066, 2.1310,
     [Weekday.SAMEDI]),
    # ~100 km due north of Paris centre
    ("Marché Lointain", "Amiens", "80000", 49.7559, 2.3522,
     [Weekday.LUNDI]),
]


def make_market(
    name: str,
    lat: float,
    lng: float,
    days: tuple[Weekday, ...] = (),
    *,
    market_id: str | None = None,
    town: str = "Paris",
    zip_code: str = "75000",
) -> Market:
    return Market(
        id=market_id or name,
        name=name,
        address="",
        town=town,
        zip=zip_code,
        lat=lat,
        lng=lng,
        openings=tuple(Opening(day=d, start="08:00", end="13:00") for d in days),
    )


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory schema per test."""
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def market_ids(session_factory) -> dict[str, str]:
    """Insert ``MARKETS``; return name -> generated id."""
    async with session_factory() as session:
        models = [
            MarketModel(
                name=name,
                address="",
                town=town,
                zip=zip_code,
                lat=lat,
                lng=lng,
                openings=[
                    OpeningModel(day=d, start="08:00", end="13:00") for d in days
                ],
            )
            for name, town, zip_code, lat, lng, days in MARKETS
        ]
        session.add_all(models)
        await session.commit()
        return {m.name: m.id for m in models}


@pytest_asyncio.fixture
async def db_session(session_factory, market_ids) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory, market_ids):
    """App wired to the seeded SQLite database."""
    from src.api.app import create_app
    from src.api.dependencies import get_db
    from src.api.middleware import limiter

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    limiter.reset()
    application = create_app()
    application.dependency_overrides[get_db] = _test_db
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
