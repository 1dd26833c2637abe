"""Infrastructure layer - configuration, logging and database plumbing."""

from catalog_core.infrastructure.config import Settings, settings
from catalog_core.infrastructure.database import (
    Base,
    async_session_factory,
    build_engine,
    build_session_factory,
    engine,
    transaction,
)
from catalog_core.infrastructure.logging import configure_logging

__all__ = [
    "Base",
    "Settings",
    "async_session_factory",
    "build_engine",
    "build_session_factory",
    "configure_logging",
    "engine",
    "settings",
    "transaction",
]
