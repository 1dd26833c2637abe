"""Shared fixtures for catalog tests.

Each test gets its own SQLite database file, created from the ORM
metadata, with foreign keys enforced.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog_core.catalog.lookup_repository import (
    ProductCategoryRepository,
    ProductMaterialRepository,
)
from catalog_core.catalog.repository import SqlAlchemyProductRepository
from catalog_core.domain.entities import (
    Product,
    ProductCategory,
    ProductImage,
    ProductMaterial,
)
from catalog_core.infrastructure.database import Base, build_engine, build_session_factory


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all catalog tables."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
def product_repository(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlAlchemyProductRepository:
    return SqlAlchemyProductRepository(session_factory)


@pytest.fixture
def category_repository(
    session_factory: async_sessionmaker[AsyncSession],
) -> ProductCategoryRepository:
    return ProductCategoryRepository(session_factory)


@pytest.fixture
def material_repository(
    session_factory: async_sessionmaker[AsyncSession],
) -> ProductMaterialRepository:
    return ProductMaterialRepository(session_factory)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def categories(category_repository: ProductCategoryRepository) -> list[ProductCategory]:
    """Create two stored categories."""
    return [
        await category_repository.create(ProductCategory.new("Chairs")),
        await category_repository.create(ProductCategory.new("Outdoor")),
    ]


@pytest_asyncio.fixture
async def materials(material_repository: ProductMaterialRepository) -> list[ProductMaterial]:
    """Create two stored materials."""
    return [
        await material_repository.create(ProductMaterial.new("Walnut")),
        await material_repository.create(ProductMaterial.new("Steel")),
    ]


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for unsaved product aggregates with controllable fields."""
    base_time = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _make(
        category_ids: list[UUID],
        name: str = "Lounge chair",
        price: str = "199.00",
        description: str = "Comfortable lounge chair",
        status: str = "active",
        material_ids: list[UUID] | None = None,
        image_urls: list[str] | None = None,
        minutes: int = 0,
    ) -> Product:
        product_id = uuid4()
        created_at = base_time + timedelta(minutes=minutes)
        return Product(
            id=product_id,
            name=name,
            price=Decimal(price),
            description=description,
            status=status,
            created_at=created_at,
            updated_at=created_at,
            category_ids=list(category_ids),
            material_ids=list(material_ids or []),
            images=[
                ProductImage(
                    id=uuid4(),
                    product_id=product_id,
                    url=url,
                    created_at=created_at,
                    updated_at=created_at,
                )
                for url in image_urls or []
            ],
        )

    return _make
