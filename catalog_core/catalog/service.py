"""Catalog services.

High-level operations that turn requests into complete aggregates before
handing them to the repositories.
"""

from dataclasses import replace
from typing import Generic, Protocol, TypeVar
from uuid import UUID

import structlog

from catalog_core.catalog.lookup_repository import LookupRepository
from catalog_core.catalog.pagination import PaginatedResult, PaginationQuery
from catalog_core.catalog.repository import ProductRepository
from catalog_core.catalog.schemas import (
    CreateProductRequest,
    LookupRequest,
    UpdateProductRequest,
)
from catalog_core.domain.entities import (
    Product,
    ProductCategory,
    ProductImage,
    ProductMaterial,
    utc_now,
)

logger = structlog.get_logger()

E = TypeVar("E", ProductCategory, ProductMaterial)


class ObjectValidator(Protocol):
    """Checks that an image URL points at a stored object.

    Implementations raise ``InvalidImageUrlError`` for unknown objects.
    """

    async def validate_object(self, url: str) -> None: ...


class ProductService:
    """Service for product operations.

    Example usage:
        service = ProductService(SqlAlchemyProductRepository(async_session_factory))
        page = await service.get_all(PaginationQuery(page=2, limit=5))
        print(page.total_pages)
    """

    def __init__(
        self,
        repository: ProductRepository,
        object_validator: ObjectValidator | None = None,
    ) -> None:
        """Initialize service.

        Args:
            repository: Product repository.
            object_validator: Optional image URL validator.
        """
        self.repository = repository
        self.object_validator = object_validator

    async def get_all(self, query: PaginationQuery) -> PaginatedResult[Product]:
        """List products.

        Args:
            query: Listing parameters.

        Returns:
            Page of products with pagination metadata.
        """
        products, total = await self.repository.find_all(query)
        return PaginatedResult.from_query(products, total, query)

    async def get_by_id(self, product_id: UUID) -> Product:
        return await self.repository.find_by_id(product_id)

    async def create(self, request: CreateProductRequest) -> Product:
        """Create a product from a request.

        Args:
            request: Create request.

        Returns:
            Stored product.
        """
        await self._validate_urls(request.image_urls)

        product = Product.new(
            name=request.name,
            price=request.price,
            description=request.description,
            status=request.status,
            category_ids=request.category_ids,
            material_ids=request.material_ids,
            image_urls=request.image_urls,
        )
        return await self.repository.create(product)

    async def update(self, product_id: UUID, request: UpdateProductRequest) -> Product:
        """Apply a partial update.

        The request is merged onto the current aggregate and the complete
        result is written with replace-all semantics. When ``image_urls``
        is omitted the current images are kept with their IDs.

        Args:
            product_id: Product ID.
            request: Partial update.

        Returns:
            Stored product.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        if request.image_urls is not None:
            await self._validate_urls(request.image_urls)

        current = await self.repository.find_by_id(product_id)

        images = current.images
        if request.image_urls is not None:
            images = [ProductImage.new(product_id, url) for url in request.image_urls]

        merged = replace(
            current,
            name=request.name if request.name is not None else current.name,
            price=request.price if request.price is not None else current.price,
            description=(
                request.description if request.description is not None else current.description
            ),
            status=request.status if request.status is not None else current.status,
            category_ids=(
                request.category_ids if request.category_ids is not None else current.category_ids
            ),
            material_ids=(
                request.material_ids if request.material_ids is not None else current.material_ids
            ),
            updated_at=utc_now(),
            categories=[],
            product_materials=[],
            images=images,
        )
        return await self.repository.update(product_id, merged)

    async def delete(self, product_id: UUID) -> None:
        await self.repository.delete(product_id)

    async def _validate_urls(self, urls: list[str]) -> None:
        if self.object_validator is None:
            return
        for url in urls:
            await self.object_validator.validate_object(url)


class LookupService(Generic[E]):
    """Service for categories or materials."""

    def __init__(self, repository: LookupRepository[E]) -> None:
        self.repository = repository

    async def get_all(self, query: PaginationQuery) -> PaginatedResult[E]:
        items, total = await self.repository.find_all(query)
        return PaginatedResult.from_query(items, total, query)

    async def get_by_id(self, entity_id: UUID) -> E:
        return await self.repository.find_by_id(entity_id)

    async def create(self, request: LookupRequest) -> E:
        entity = self.repository.entity.new(request.name)
        return await self.repository.create(entity)

    async def update(self, entity_id: UUID, request: LookupRequest) -> E:
        """Rename an existing entry.

        Raises:
            NotFoundError: If the entry does not exist.
        """
        current = await self.repository.find_by_id(entity_id)
        renamed = replace(current, name=request.name, updated_at=utc_now())
        return await self.repository.update(entity_id, renamed)

    async def delete(self, entity_id: UUID) -> None:
        await self.repository.delete(entity_id)
