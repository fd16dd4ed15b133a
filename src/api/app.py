"""
FastAPI application factory.

* Registers routes for markets and admin.
* Maps domain validation errors to 422 and data-source failures to 500.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from src.api.middleware import limiter
from src.api.routes import admin, markets
from src.config import settings
from src.domain.entities import InvalidSearchQuery

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


async def _invalid_query_handler(request: Request, exc: InvalidSearchQuery):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def _data_source_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "Market data source failure on %s", request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=500, content={"detail": "Error while fetching markets"}
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Local Market Finder API",
        description=(
            "Finds open-air markets near a point or by town, name or "
            "postal code, optionally restricted to one weekday."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(InvalidSearchQuery, _invalid_query_handler)
    app.add_exception_handler(SQLAlchemyError, _data_source_error_handler)

    # Routers
    app.include_router(markets.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
