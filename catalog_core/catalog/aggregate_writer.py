"""Transactional writes of product aggregates.

The writer runs inside a transaction owned by the caller. It validates the
aggregate, writes the scalar product row and then the category links,
material links and images. Updates replace every link and image row of the
product with the supplied sets.
"""

from uuid import UUID

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.lookup_repository import count_existing
from catalog_core.catalog.models import (
    ProductCategoryModel,
    ProductCategoryRelationModel,
    ProductImageModel,
    ProductMaterialRelationModel,
    ProductModel,
)
from catalog_core.domain.entities import Product
from catalog_core.domain.exceptions import CategoriesNotFoundError, EmptyCategoriesError

logger = structlog.get_logger()


def _distinct(ids: list[UUID]) -> list[UUID]:
    """Drop repeated IDs, keeping first-seen order."""
    return list(dict.fromkeys(ids))


class ProductAggregateWriter:
    """Writes product aggregates within the caller's transaction.

    Example usage:
        async with session.begin():
            await ProductAggregateWriter(session).insert(product)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize writer.

        Args:
            session: Session with an open transaction.
        """
        self.session = session

    async def insert(self, product: Product) -> None:
        """Insert a new product with its links and images.

        Args:
            product: Complete aggregate, including its ID.

        Raises:
            EmptyCategoriesError: If no category is given.
            CategoriesNotFoundError: If any category does not exist.
        """
        category_ids = await self._validate_categories(product)

        await self.session.execute(
            insert(ProductModel).values(
                id=product.id,
                name=product.name,
                price=product.price,
                description=product.description,
                status=product.status,
                created_at=product.created_at,
                updated_at=product.updated_at,
            )
        )
        await self._insert_relations(product.id, product, category_ids)

    async def replace(self, product_id: UUID, product: Product) -> None:
        """Overwrite a product's scalar fields, links and images.

        A missing product row is not an error here: the UPDATE affects
        nothing and no link or image rows are touched.

        Args:
            product_id: ID of the product to overwrite.
            product: Complete desired state.

        Raises:
            EmptyCategoriesError: If no category is given.
            CategoriesNotFoundError: If any category does not exist.
        """
        category_ids = await self._validate_categories(product)

        result = await self.session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(
                name=product.name,
                price=product.price,
                description=product.description,
                status=product.status,
                updated_at=product.updated_at,
            )
        )
        if result.rowcount == 0:
            logger.debug("Update matched no product row", product_id=str(product_id))
            return

        await self._delete_relations(product_id)
        await self._insert_relations(product_id, product, category_ids)

    async def _validate_categories(self, product: Product) -> list[UUID]:
        category_ids = _distinct(product.category_ids)
        if not category_ids:
            raise EmptyCategoriesError(product.id)

        found = await count_existing(self.session, ProductCategoryModel, category_ids)
        if found != len(category_ids):
            raise CategoriesNotFoundError(requested=len(category_ids), found=found)
        return category_ids

    async def _delete_relations(self, product_id: UUID) -> None:
        for model in (
            ProductCategoryRelationModel,
            ProductMaterialRelationModel,
            ProductImageModel,
        ):
            await self.session.execute(delete(model).where(model.product_id == product_id))

    async def _insert_relations(
        self,
        product_id: UUID,
        product: Product,
        category_ids: list[UUID],
    ) -> None:
        await self.session.execute(
            insert(ProductCategoryRelationModel),
            [
                {"product_id": product_id, "category_id": category_id, "position": position}
                for position, category_id in enumerate(category_ids)
            ],
        )

        material_ids = _distinct(product.material_ids)
        if material_ids:
            await self.session.execute(
                insert(ProductMaterialRelationModel),
                [
                    {"product_id": product_id, "material_id": material_id, "position": position}
                    for position, material_id in enumerate(material_ids)
                ],
            )

        if product.images:
            await self.session.execute(
                insert(ProductImageModel),
                [
                    {
                        "id": image.id,
                        "product_id": product_id,
                        "url": image.url,
                        "position": position,
                        "created_at": image.created_at,
                        "updated_at": image.updated_at,
                    }
                    for position, image in enumerate(product.images)
                ],
            )
