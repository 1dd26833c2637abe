"""Tests for category and material repositories."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from catalog_core.catalog.lookup_repository import (
    ProductCategoryRepository,
    ProductMaterialRepository,
)
from catalog_core.catalog.pagination import PaginationQuery, SortOrder
from catalog_core.catalog.repository import SqlAlchemyProductRepository
from catalog_core.domain.entities import Product, ProductCategory, ProductMaterial
from catalog_core.domain.exceptions import CategoryNotFoundError, MaterialNotFoundError


class TestCategoryRepository:
    """Tests for ProductCategoryRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, category_repository: ProductCategoryRepository) -> None:
        category = ProductCategory.new("Sofas")

        created = await category_repository.create(category)

        assert created.id == category.id
        assert created.name == "Sofas"
        assert await category_repository.find_by_id(category.id) == created

    @pytest.mark.asyncio
    async def test_find_missing(self, category_repository: ProductCategoryRepository) -> None:
        with pytest.raises(CategoryNotFoundError):
            await category_repository.find_by_id(uuid4())

    @pytest.mark.asyncio
    async def test_find_all_newest_first(
        self, category_repository: ProductCategoryRepository
    ) -> None:
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for minute, name in enumerate(("First", "Second", "Third")):
            created_at = base + timedelta(minutes=minute)
            await category_repository.create(
                ProductCategory(id=uuid4(), name=name, created_at=created_at, updated_at=created_at)
            )

        items, total = await category_repository.find_all(PaginationQuery(limit=2))

        assert total == 3
        assert [c.name for c in items] == ["Third", "Second"]

    @pytest.mark.asyncio
    async def test_find_all_sort_by_name_ascending(
        self, category_repository: ProductCategoryRepository
    ) -> None:
        for name in ("Beds", "Sofas", "Lamps"):
            await category_repository.create(ProductCategory.new(name))

        items, _ = await category_repository.find_all(
            PaginationQuery(sort="name", sort_order=SortOrder.ASC)
        )

        assert [c.name for c in items] == ["Beds", "Lamps", "Sofas"]

    @pytest.mark.asyncio
    async def test_find_all_unknown_sort_falls_back_to_created_at(
        self, category_repository: ProductCategoryRepository
    ) -> None:
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for minute, name in enumerate(("Zebra", "Alpha")):
            created_at = base + timedelta(minutes=minute)
            await category_repository.create(
                ProductCategory(id=uuid4(), name=name, created_at=created_at, updated_at=created_at)
            )

        items, _ = await category_repository.find_all(
            PaginationQuery(sort="name; DROP TABLE product_categories", sort_order=SortOrder.ASC)
        )

        assert [c.name for c in items] == ["Zebra", "Alpha"]

    @pytest.mark.asyncio
    async def test_find_all_search(self, category_repository: ProductCategoryRepository) -> None:
        for name in ("Garden", "Kitchen", "Garage"):
            await category_repository.create(ProductCategory.new(name))

        items, total = await category_repository.find_all(PaginationQuery(search="gar"))

        assert total == 2
        assert {c.name for c in items} == {"Garden", "Garage"}

    @pytest.mark.asyncio
    async def test_update_renames(
        self,
        category_repository: ProductCategoryRepository,
        categories: list[ProductCategory],
    ) -> None:
        category = categories[0]

        updated = await category_repository.update(
            category.id, replace(category, name="Armchairs")
        )

        assert updated.name == "Armchairs"
        assert updated.created_at == category.created_at

    @pytest.mark.asyncio
    async def test_update_missing(self, category_repository: ProductCategoryRepository) -> None:
        with pytest.raises(CategoryNotFoundError):
            await category_repository.update(uuid4(), ProductCategory.new("Ghost"))

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(
        self,
        category_repository: ProductCategoryRepository,
        categories: list[ProductCategory],
    ) -> None:
        await category_repository.delete(categories[0].id)
        await category_repository.delete(categories[0].id)

        with pytest.raises(CategoryNotFoundError):
            await category_repository.find_by_id(categories[0].id)

    @pytest.mark.asyncio
    async def test_count_existing(
        self,
        category_repository: ProductCategoryRepository,
        categories: list[ProductCategory],
    ) -> None:
        ids = [c.id for c in categories]

        assert await category_repository.count_existing(ids) == 2
        assert await category_repository.count_existing(ids + [ids[0]]) == 2
        assert await category_repository.count_existing(ids + [uuid4()]) == 2
        assert await category_repository.count_existing([]) == 0

    @pytest.mark.asyncio
    async def test_deleting_category_unlinks_products(
        self,
        category_repository: ProductCategoryRepository,
        product_repository: SqlAlchemyProductRepository,
        categories: list[ProductCategory],
        make_product: Callable[..., Product],
    ) -> None:
        """The relation rows go with the category; the product stays."""
        c1, c2 = categories
        product = await product_repository.create(make_product(category_ids=[c1.id, c2.id]))

        await category_repository.delete(c1.id)

        found = await product_repository.find_by_id(product.id)
        assert found.category_ids == [c2.id]


class TestMaterialRepository:
    """Tests for ProductMaterialRepository."""

    @pytest.mark.asyncio
    async def test_crud(self, material_repository: ProductMaterialRepository) -> None:
        material = await material_repository.create(ProductMaterial.new("Rattan"))

        renamed = await material_repository.update(
            material.id, replace(material, name="Wicker")
        )
        await material_repository.delete(material.id)

        assert renamed.name == "Wicker"
        with pytest.raises(MaterialNotFoundError):
            await material_repository.find_by_id(material.id)
