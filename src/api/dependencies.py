"""FastAPI dependency injection helpers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.domain.search import ProximitySearchEngine
from src.infrastructure.database import async_session_factory
from src.infrastructure.repositories import MarketRepository


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_market_repository(
    db: AsyncSession = Depends(get_db),
) -> MarketRepository:
    return MarketRepository(db)


def get_search_engine(
    repo: MarketRepository = Depends(get_market_repository),
) -> ProximitySearchEngine:
    return ProximitySearchEngine(repo, max_results=settings.search_result_limit)
