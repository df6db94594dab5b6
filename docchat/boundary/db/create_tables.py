"""
Database table creation.

Creates all tables registered on `Base.metadata`. Idempotent.

Dependencies: sqlalchemy, docchat.boundary.db.connection
System role: Database schema initialization

Usage:
    python -m docchat.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from docchat.boundary.db.base import Base
from docchat.boundary.db.connection import get_async_engine

# Register models with Base.metadata
from docchat.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables that do not exist yet.

    Args:
        engine: Target engine (defaults to the settings engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop every registered table. Development only."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_all_tables())
