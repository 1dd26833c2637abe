"""Product repository.

``ProductRepository`` is the storage-independent interface;
``SqlAlchemyProductRepository`` implements it on a relational database.
Every call opens its own session and transaction, so calls are stateless
and may run concurrently.
"""

from abc import ABC, abstractmethod
from uuid import UUID

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_core.catalog.aggregate_reader import ProductAggregateReader
from catalog_core.catalog.aggregate_writer import ProductAggregateWriter
from catalog_core.catalog.models import ProductModel
from catalog_core.catalog.pagination import PaginationQuery
from catalog_core.catalog.query_builder import ProductQueryBuilder
from catalog_core.domain.entities import Product
from catalog_core.infrastructure.database import transaction

logger = structlog.get_logger()


class ProductRepository(ABC):
    """Persistence contract for product aggregates."""

    @abstractmethod
    async def find_all(self, query: PaginationQuery) -> tuple[list[Product], int]:
        """Return one page of hydrated products and the filtered total."""

    @abstractmethod
    async def find_by_id(self, product_id: UUID) -> Product:
        """Return one hydrated product or raise ``ProductNotFoundError``."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Persist a new aggregate and return it as stored."""

    @abstractmethod
    async def update(self, product_id: UUID, product: Product) -> Product:
        """Replace an aggregate's state and return it as stored."""

    @abstractmethod
    async def delete(self, product_id: UUID) -> None:
        """Delete a product; missing IDs are ignored."""


class SqlAlchemyProductRepository(ProductRepository):
    """Product repository backed by SQLAlchemy.

    Handles listing with search, whitelisted sorting and pagination, and
    all-or-nothing writes of a product with its category links, material
    links and images.

    Example usage:
        repo = SqlAlchemyProductRepository(async_session_factory)
        products, total = await repo.find_all(
            PaginationQuery(page=1, limit=20, search="oak", sort="price"),
        )
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory used to open one session per call.
        """
        self.session_factory = session_factory

    async def find_all(self, query: PaginationQuery) -> tuple[list[Product], int]:
        """Find products with search, sorting and pagination.

        Args:
            query: Listing parameters.

        Returns:
            Hydrated products for the requested page and the total number
            of products matching the search.
        """
        async with transaction(self.session_factory, "product.find_all") as session:
            rows, total = await ProductQueryBuilder(query).execute(session)
            products = await ProductAggregateReader(session).hydrate(rows)

        return products, total

    async def find_by_id(self, product_id: UUID) -> Product:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Hydrated product.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        async with transaction(self.session_factory, "product.find_by_id") as session:
            return await ProductAggregateReader(session).load(product_id)

    async def create(self, product: Product) -> Product:
        """Create a product with its links and images in one transaction.

        Args:
            product: Complete aggregate with a caller-generated ID.

        Returns:
            The product as read back after commit.

        Raises:
            EmptyCategoriesError: If ``category_ids`` is empty.
            CategoriesNotFoundError: If any category does not exist.
            StorageFailureError: On any database error.
        """
        async with transaction(self.session_factory, "product.create") as session:
            await ProductAggregateWriter(session).insert(product)

        logger.info(
            "Product created",
            product_id=str(product.id),
            category_count=len(product.category_ids),
            material_count=len(product.material_ids),
            image_count=len(product.images),
        )
        return await self.find_by_id(product.id)

    async def update(self, product_id: UUID, product: Product) -> Product:
        """Replace a product's fields, links and images in one transaction.

        Args:
            product_id: ID of the product to update.
            product: Complete desired state.

        Returns:
            The product as read back after commit.

        Raises:
            EmptyCategoriesError: If ``category_ids`` is empty.
            CategoriesNotFoundError: If any category does not exist.
            ProductNotFoundError: If the product is absent on read-back.
            StorageFailureError: On any database error.
        """
        async with transaction(self.session_factory, "product.update") as session:
            await ProductAggregateWriter(session).replace(product_id, product)

        logger.info(
            "Product updated",
            product_id=str(product_id),
            category_count=len(product.category_ids),
            material_count=len(product.material_ids),
            image_count=len(product.images),
        )
        return await self.find_by_id(product_id)

    async def delete(self, product_id: UUID) -> None:
        """Delete product by ID.

        Link and image rows are removed by the database cascade.

        Args:
            product_id: Product ID.
        """
        async with transaction(self.session_factory, "product.delete") as session:
            result = await session.execute(
                delete(ProductModel).where(ProductModel.id == product_id)
            )
            deleted = result.rowcount > 0

        logger.info(
            "Product deleted",
            product_id=str(product_id),
            deleted=deleted,
        )
