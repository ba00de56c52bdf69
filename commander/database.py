"""
Commander Backend — Database Engine & Sessions
==============================================

What:  Async SQLAlchemy engine construction, session factory and the
       declarative Base shared by the ORM models.
How:   `create_app()` calls build_engine() and build_session_factory() once;
       the results are stored on `app.state` and each request opens its own
       session from the factory (see repositories.RepositoryProvider).
When:  Engine at application creation; sessions per request; engine disposed
       on shutdown.

Connection Pooling:
    Server databases (PostgreSQL, MySQL/MariaDB) get a sized pool with
    pre-ping and hourly recycling. SQLite URLs keep SQLAlchemy's defaults,
    which are tuned for a local file database.
"""

import logging
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from commander.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Holds the single metadata object used to create the schema on startup.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Echoes SQL when the log level is DEBUG.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory used for every request.

    expire_on_commit=False keeps attribute values (including the id assigned
    by the store) readable after commit without another round trip, which an
    async session cannot do implicitly.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    What:  Creates missing tables from the ORM metadata (no-op if present).
    When:  Application startup, when `db_create_tables` is enabled.
    """
    # Models register themselves on Base.metadata at import time.
    from commander.models import command  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", ", ".join(sorted(Base.metadata.tables)))


async def ping(engine: AsyncEngine) -> bool:
    """Runs SELECT 1; returns False if the database cannot be reached."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database unreachable: %s", str(e))
        return False
    return True


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
