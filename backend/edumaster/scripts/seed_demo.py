"""Create the schema if needed and load the demo catalogue."""

import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import edumaster.models  # noqa: F401  populates Base.metadata
from edumaster.config import settings
from edumaster.models.base import Base
from edumaster.scripts.runner import configure_logging
from edumaster.services.demo_seed import seed_demo_data

logger = logging.getLogger("edumaster.scripts")


async def seed() -> int:
    engine = create_async_engine(settings.database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with async_sessionmaker(engine, class_=AsyncSession)() as db:
            created = await seed_demo_data(db)
            await db.commit()
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        await engine.dispose()
    if created:
        logger.info("Seeded demo data (%d users)", created)
    else:
        logger.info("Demo data already present, nothing to do")
    return 0


def main() -> int:
    configure_logging()
    return asyncio.run(seed())


if __name__ == "__main__":
    sys.exit(main())
