"""Shared plumbing for the command-line scripts."""

import logging
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from edumaster.config import settings

logger = logging.getLogger("edumaster.scripts")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


async def run_report(
    build: Callable[[AsyncSession], Awaitable[str]],
    *,
    engine: AsyncEngine | None = None,
) -> int:
    """Build a text report in one session and print it.

    The engine is disposed whether or not the report succeeds. Errors are
    logged, never raised; the return value is the process exit status.
    """
    engine = engine or create_async_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_factory() as db:
            report = await build(db)
        print(report)
        return 0
    except Exception:
        logger.exception("Error building report")
        return 1
    finally:
        await engine.dispose()
