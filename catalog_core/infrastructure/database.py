"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from catalog_core.domain.exceptions import StorageFailureError
from catalog_core.infrastructure.config import settings

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite does not enforce foreign keys unless asked to on every
    connection, so relation and image rows would survive the deletion of
    their product. The pragma is switched on here for SQLite URLs.

    Args:
        database_url: SQLAlchemy URL with an async driver.
        echo: Whether to log emitted SQL.
        **kwargs: Extra arguments for ``create_async_engine``.

    Returns:
        Configured async engine.
    """
    async_engine = create_async_engine(database_url, echo=echo, **kwargs)
    if async_engine.dialect.name == "sqlite":
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return async_engine


def build_session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Create async engine
engine = build_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=settings.database_pool_pre_ping,
)

# Session factory
async_session_factory = build_session_factory(engine)


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    operation: str,
) -> AsyncIterator[AsyncSession]:
    """Run one unit of work in its own session and transaction.

    The transaction commits when the block exits normally. Any exception,
    including task cancellation, rolls it back. Database errors are logged
    and re-raised as ``StorageFailureError``; catalog errors pass through
    unchanged.

    Args:
        session_factory: Factory producing a fresh session per call.
        operation: Name of the calling operation, used for logs and errors.

    Yields:
        Session bound to the open transaction.
    """
    try:
        async with session_factory() as session:
            async with session.begin():
                yield session
    except SQLAlchemyError as exc:
        logger.error(
            "Storage failure",
            operation=operation,
            error=str(exc),
            exc_info=True,
        )
        raise StorageFailureError(operation, str(exc)) from exc
