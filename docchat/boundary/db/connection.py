"""
Database connection management.

Async engine, session factory and the FastAPI session dependency. SQLite
URLs (development and tests) get foreign-key enforcement switched on so
ON DELETE CASCADE behaves as it does on PostgreSQL.

Dependencies: sqlalchemy, docchat.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from docchat.configs import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_async_engine(url: str, echo: bool = False, **pool_options) -> AsyncEngine:
    """
    Create an async engine for `url`.

    Args:
        url: SQLAlchemy async URL
        echo: Echo SQL statements
        **pool_options: Pool sizing, ignored for SQLite

    Returns:
        AsyncEngine: Configured engine
    """
    if url.startswith("sqlite"):
        # An in-memory database lives only as long as its single connection
        memory_options = {"poolclass": StaticPool} if ":memory:" in url else {}
        engine = create_async_engine(url, echo=echo, **memory_options)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(url, echo=echo, pool_pre_ping=True, **pool_options)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide async engine built from settings.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    db_config = get_settings().database
    return build_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory with explicit transaction control.

    Args:
        engine: Engine to bind (defaults to the settings engine)

    Returns:
        async_sessionmaker: Factory producing AsyncSession objects
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one AsyncSession per request.

    Yields:
        AsyncSession: Session closed when the request finishes
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
