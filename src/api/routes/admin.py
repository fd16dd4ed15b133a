"""
Admin / observability endpoints
===============================

GET /api/v1/admin/health -- simple health check
GET /api/v1/admin/stats  -- number of markets loaded
"""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_market_repository
from src.api.middleware import limiter
from src.api.schemas import HealthResponse, StatsResponse
from src.config import settings
from src.infrastructure.repositories import MarketRepository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()


@router.get("/stats", response_model=StatsResponse, summary="Catalogue size")
@limiter.limit(settings.rate_limit)
async def stats(
    request: Request,
    repo: MarketRepository = Depends(get_market_repository),
):
    return StatsResponse(markets=await repo.count())
