"""Repositories for product categories and materials.

Categories and materials share one shape (id, name, timestamps), so both
repositories are thin subclasses of ``LookupRepository``.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

import structlog
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_core.catalog.models import ProductCategoryModel, ProductMaterialModel
from catalog_core.catalog.pagination import PaginationQuery, SortOrder
from catalog_core.catalog.query_builder import like_pattern
from catalog_core.domain.entities import ProductCategory, ProductMaterial
from catalog_core.domain.exceptions import (
    CategoryNotFoundError,
    MaterialNotFoundError,
    NotFoundError,
)
from catalog_core.infrastructure.database import transaction

logger = structlog.get_logger()

E = TypeVar("E", ProductCategory, ProductMaterial)

LOOKUP_SORT_FIELDS = ("name", "created_at", "updated_at")
DEFAULT_LOOKUP_SORT_FIELD = "created_at"


async def count_existing(session: AsyncSession, model: Any, ids: Sequence[UUID]) -> int:
    """Count how many of ``ids`` exist in the table of ``model``.

    Args:
        session: Session with an open transaction.
        model: Mapped class with an ``id`` primary key.
        ids: Distinct IDs to look up.

    Returns:
        Number of matching rows.
    """
    if not ids:
        return 0
    result = await session.execute(
        select(func.count()).select_from(model).where(model.id.in_(list(ids)))
    )
    return int(result.scalar_one())


class LookupRepository(Generic[E]):
    """CRUD for a simple named entity table.

    Subclasses set ``model``, ``entity``, ``not_found`` and ``name``.
    """

    model: Any
    entity: type[E]
    not_found: type[NotFoundError]
    name: str

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository.

        Args:
            session_factory: Factory used to open one session per call.
        """
        self.session_factory = session_factory

    def _to_entity(self, row: Any) -> E:
        return self.entity(
            id=row.id,
            name=row.name,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def find_all(self, query: PaginationQuery) -> tuple[list[E], int]:
        """List entities, newest first unless another order is asked for.

        Args:
            query: Listing parameters; ``search`` filters on name and
                ``sort`` may be one of ``LOOKUP_SORT_FIELDS``. Any other
                sort value falls back to ``created_at``.

        Returns:
            Page of entities and the total filtered count.
        """
        stmt = select(self.model, func.count().over().label("total_count"))
        if query.search:
            stmt = stmt.where(self.model.name.ilike(like_pattern(query.search), escape="\\"))

        sort_field = DEFAULT_LOOKUP_SORT_FIELD
        if query.sort in LOOKUP_SORT_FIELDS:
            sort_field = query.sort
        sort_column = getattr(self.model, sort_field)
        if query.sort_order == SortOrder.ASC:
            stmt = stmt.order_by(sort_column.asc(), self.model.id.asc())
        else:
            stmt = stmt.order_by(sort_column.desc(), self.model.id.desc())
        stmt = stmt.limit(query.limit).offset(query.offset)

        async with transaction(self.session_factory, f"{self.name}.find_all") as session:
            rows = (await session.execute(stmt)).all()

        total = rows[0].total_count if rows else 0
        return [self._to_entity(row[0]) for row in rows], int(total)

    async def find_by_id(self, entity_id: UUID) -> E:
        """Get an entity by ID.

        Raises:
            NotFoundError: If the entity does not exist.
        """
        async with transaction(self.session_factory, f"{self.name}.find_by_id") as session:
            result = await session.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            row = result.scalar_one_or_none()

        if row is None:
            raise self.not_found(entity_id)
        return self._to_entity(row)

    async def create(self, entity: E) -> E:
        """Insert an entity and return the stored row."""
        async with transaction(self.session_factory, f"{self.name}.create") as session:
            await session.execute(
                insert(self.model).values(
                    id=entity.id,
                    name=entity.name,
                    created_at=entity.created_at,
                    updated_at=entity.updated_at,
                )
            )

        logger.info(f"{self.name.capitalize()} created", entity_id=str(entity.id))
        return await self.find_by_id(entity.id)

    async def update(self, entity_id: UUID, entity: E) -> E:
        """Rename an entity.

        Raises:
            NotFoundError: If the entity does not exist.
        """
        async with transaction(self.session_factory, f"{self.name}.update") as session:
            await session.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(name=entity.name, updated_at=entity.updated_at)
            )

        return await self.find_by_id(entity_id)

    async def delete(self, entity_id: UUID) -> None:
        """Delete an entity. Deleting a missing ID is not an error."""
        async with transaction(self.session_factory, f"{self.name}.delete") as session:
            await session.execute(delete(self.model).where(self.model.id == entity_id))

        logger.info(f"{self.name.capitalize()} deleted", entity_id=str(entity_id))

    async def count_existing(self, ids: Sequence[UUID]) -> int:
        """Count how many of the distinct ``ids`` exist."""
        async with transaction(self.session_factory, f"{self.name}.count") as session:
            return await count_existing(session, self.model, list(dict.fromkeys(ids)))


class ProductCategoryRepository(LookupRepository[ProductCategory]):
    """Repository for product categories."""

    model = ProductCategoryModel
    entity = ProductCategory
    not_found = CategoryNotFoundError
    name = "category"


class ProductMaterialRepository(LookupRepository[ProductMaterial]):
    """Repository for product materials."""

    model = ProductMaterialModel
    entity = ProductMaterial
    not_found = MaterialNotFoundError
    name = "material"
