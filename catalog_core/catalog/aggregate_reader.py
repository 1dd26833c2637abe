"""Hydration of product aggregates.

Given product rows, loads their categories, materials and images with one
query per relation type, whatever the number of products.
"""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.models import (
    ProductCategoryModel,
    ProductCategoryRelationModel,
    ProductImageModel,
    ProductMaterialModel,
    ProductMaterialRelationModel,
    ProductModel,
)
from catalog_core.domain.entities import (
    Product,
    ProductCategory,
    ProductImage,
    ProductMaterial,
)
from catalog_core.domain.exceptions import ProductNotFoundError


def category_from_model(model: ProductCategoryModel) -> ProductCategory:
    return ProductCategory(
        id=model.id,
        name=model.name,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def material_from_model(model: ProductMaterialModel) -> ProductMaterial:
    return ProductMaterial(
        id=model.id,
        name=model.name,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def image_from_model(model: ProductImageModel) -> ProductImage:
    return ProductImage(
        id=model.id,
        product_id=model.product_id,
        url=model.url,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class ProductAggregateReader:
    """Assembles ``Product`` aggregates from product rows.

    ``category_ids`` and ``material_ids`` on the returned aggregates are
    derived from the fetched relation rows only. Links and images come back
    in the order they were written.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reader.

        Args:
            session: Session with an open transaction.
        """
        self.session = session

    async def load(self, product_id: UUID) -> Product:
        """Load one fully hydrated product.

        Args:
            product_id: Product ID.

        Returns:
            Hydrated product.

        Raises:
            ProductNotFoundError: If no product row has this ID.
        """
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id == product_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise ProductNotFoundError(product_id)

        products = await self.hydrate([row])
        return products[0]

    async def hydrate(self, rows: Sequence[ProductModel]) -> list[Product]:
        """Attach relations to product rows, preserving row order.

        Args:
            rows: Product rows, e.g. one listing page.

        Returns:
            Hydrated products in the same order as ``rows``.
        """
        if not rows:
            return []

        product_ids = [row.id for row in rows]
        categories = await self._fetch_categories(product_ids)
        materials = await self._fetch_materials(product_ids)
        images = await self._fetch_images(product_ids)

        products = []
        for row in rows:
            product_categories = categories.get(row.id, [])
            product_materials = materials.get(row.id, [])
            products.append(
                Product(
                    id=row.id,
                    name=row.name,
                    price=row.price,
                    description=row.description,
                    status=row.status,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                    category_ids=[category.id for category in product_categories],
                    material_ids=[material.id for material in product_materials],
                    categories=product_categories,
                    product_materials=product_materials,
                    images=images.get(row.id, []),
                )
            )
        return products

    async def _fetch_categories(
        self, product_ids: list[UUID]
    ) -> dict[UUID, list[ProductCategory]]:
        result = await self.session.execute(
            select(ProductCategoryRelationModel.product_id, ProductCategoryModel)
            .join(
                ProductCategoryModel,
                ProductCategoryModel.id == ProductCategoryRelationModel.category_id,
            )
            .where(ProductCategoryRelationModel.product_id.in_(product_ids))
            .order_by(ProductCategoryRelationModel.position)
        )
        grouped: dict[UUID, list[ProductCategory]] = defaultdict(list)
        for product_id, category in result.all():
            grouped[product_id].append(category_from_model(category))
        return grouped

    async def _fetch_materials(
        self, product_ids: list[UUID]
    ) -> dict[UUID, list[ProductMaterial]]:
        result = await self.session.execute(
            select(ProductMaterialRelationModel.product_id, ProductMaterialModel)
            .join(
                ProductMaterialModel,
                ProductMaterialModel.id == ProductMaterialRelationModel.material_id,
            )
            .where(ProductMaterialRelationModel.product_id.in_(product_ids))
            .order_by(ProductMaterialRelationModel.position)
        )
        grouped: dict[UUID, list[ProductMaterial]] = defaultdict(list)
        for product_id, material in result.all():
            grouped[product_id].append(material_from_model(material))
        return grouped

    async def _fetch_images(self, product_ids: list[UUID]) -> dict[UUID, list[ProductImage]]:
        result = await self.session.execute(
            select(ProductImageModel)
            .where(ProductImageModel.product_id.in_(product_ids))
            .order_by(ProductImageModel.product_id, ProductImageModel.position)
        )
        grouped: dict[UUID, list[ProductImage]] = defaultdict(list)
        for image in result.scalars().all():
            grouped[image.product_id].append(image_from_model(image))
        return grouped
