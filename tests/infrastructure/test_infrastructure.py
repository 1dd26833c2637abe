"""Tests for configuration and database plumbing."""

import asyncio
from unittest.mock import patch

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_core.catalog.models import ProductCategoryModel
from catalog_core.domain.entities import ProductCategory
from catalog_core.domain.exceptions import CategoryNotFoundError, StorageFailureError
from catalog_core.infrastructure.config import Settings
from catalog_core.infrastructure.database import transaction


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.default_page_size == 10
            assert settings.log_level == "INFO"
            assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_environment_overrides(self) -> None:
        env = {
            "DATABASE_URL": "sqlite+aiosqlite:///catalog.db",
            "DEFAULT_PAGE_SIZE": "25",
            "LOG_LEVEL": "DEBUG",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings(_env_file=None)
            assert settings.database_url == "sqlite+aiosqlite:///catalog.db"
            assert settings.default_page_size == 25
            assert settings.log_level == "DEBUG"


class TestTransaction:
    """Tests for the transaction helper."""

    @pytest.mark.asyncio
    async def test_commits_on_success(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        category = ProductCategory.new("Rugs")
        async with transaction(session_factory, "test.commit") as session:
            session.add(ProductCategoryModel(id=category.id, name=category.name))

        async with session_factory() as session:
            result = await session.execute(select(ProductCategoryModel.name))
            assert result.scalars().all() == ["Rugs"]

    @pytest.mark.asyncio
    async def test_catalog_errors_roll_back_and_pass_through(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        category = ProductCategory.new("Rugs")
        with pytest.raises(CategoryNotFoundError):
            async with transaction(session_factory, "test.rollback") as session:
                session.add(ProductCategoryModel(id=category.id, name=category.name))
                await session.flush()
                raise CategoryNotFoundError(category.id)

        async with session_factory() as session:
            result = await session.execute(select(ProductCategoryModel))
            assert result.scalars().all() == []

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """A cancelled unit of work leaves nothing behind and stays a cancellation."""
        category = ProductCategory.new("Rugs")
        with pytest.raises(asyncio.CancelledError) as exc_info:
            async with transaction(session_factory, "test.cancel") as session:
                session.add(ProductCategoryModel(id=category.id, name=category.name))
                await session.flush()
                raise asyncio.CancelledError()

        assert not isinstance(exc_info.value, StorageFailureError)
        async with session_factory() as session:
            result = await session.execute(select(ProductCategoryModel))
            assert result.scalars().all() == []

    @pytest.mark.asyncio
    async def test_database_errors_become_storage_failures(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        with pytest.raises(StorageFailureError) as exc_info:
            async with transaction(session_factory, "test.broken") as session:
                await session.execute(text("SELECT * FROM no_such_table"))

        assert exc_info.value.operation == "test.broken"
        assert isinstance(exc_info.value.__cause__, OperationalError)
