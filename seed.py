"""
Seed script -- populates the database with markets and opening hours.

Run after migrations:
    python seed.py [path/to/markets.json]

Input is a JSON list of::

    {"name", "address", "town", "zip", "lat", "lng",
     "openings": [{"day", "start", "end"}]}

Markets without coordinates (lat or lng equal to 0) are skipped, as are
openings whose day is not a known weekday (French or English name) or
whose times are not ``HH:MM``.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from src.domain.entities import Opening
from src.domain.enums import Weekday
from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import MarketModel, OpeningModel
from src.infrastructure.repositories import MarketRepository

logger = logging.getLogger("seed")

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "markets.json"


def parse_markets(raw: list[dict]) -> list[MarketModel]:
    """Build ORM rows from raw market records, dropping unusable data."""
    markets: list[MarketModel] = []
    for item in raw:
        try:
            lat = float(item.get("lat") or 0)
            lng = float(item.get("lng") or 0)
        except (TypeError, ValueError):
            logger.warning(
                "Skipping %r: bad coordinates %r, %r",
                item.get("name"), item.get("lat"), item.get("lng"),
            )
            continue
        if lat == 0 or lng == 0:
            logger.warning("Skipping %r: no coordinates", item.get("name"))
            continue

        openings: list[OpeningModel] = []
        for o in item.get("openings") or []:
            try:
                day = Weekday.parse(o.get("day") or "")
            except ValueError:
                logger.warning(
                    "  %s: ignoring invalid day %r", item["name"], o.get("day")
                )
                continue
            start, end = o.get("start", ""), o.get("end", "")
            if not (Opening.valid_time(start) and Opening.valid_time(end)):
                logger.warning(
                    "  %s: ignoring invalid hours %r-%r", item["name"], start, end
                )
                continue
            openings.append(OpeningModel(day=day, start=start, end=end))

        markets.append(
            MarketModel(
                name=item["name"],
                address=item.get("address") or "",
                town=item["town"],
                zip=str(item["zip"]),
                lat=lat,
                lng=lng,
                openings=openings,
            )
        )
    return markets


async def seed(path: Path = DEFAULT_DATA_PATH):
    async with async_session_factory() as session:
        # Check if already seeded
        if await MarketRepository(session).count() > 0:
            logger.info("Database already seeded. Skipping.")
            return

        raw = json.loads(path.read_text(encoding="utf-8"))
        markets = parse_markets(raw)
        session.add_all(markets)
        await session.commit()
        logger.info("Created %d markets (%d in source)", len(markets), len(raw))


async def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DATA_PATH
    logger.info("Seeding database from %s...", path)
    await seed(path)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
