#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and fills them with deterministic demo
categories, materials and products.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --products 50 --seed 7
"""

import argparse
import asyncio
import random
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import catalog_core.catalog.models  # noqa: E402,F401
from catalog_core.catalog.lookup_repository import (  # noqa: E402
    ProductCategoryRepository,
    ProductMaterialRepository,
)
from catalog_core.catalog.repository import SqlAlchemyProductRepository  # noqa: E402
from catalog_core.catalog.schemas import CreateProductRequest, LookupRequest  # noqa: E402
from catalog_core.catalog.service import LookupService, ProductService  # noqa: E402
from catalog_core.infrastructure.database import (  # noqa: E402
    Base,
    async_session_factory,
    engine,
)
from catalog_core.infrastructure.logging import configure_logging  # noqa: E402

CATEGORIES = ["Chairs", "Tables", "Lighting", "Storage", "Decor"]
MATERIALS = ["Oak", "Walnut", "Steel", "Brass", "Linen", "Glass"]
ADJECTIVES = ["Nordic", "Classic", "Compact", "Rustic", "Modern"]
STATUSES = ["active", "draft", "archived"]


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(product_count: int, seed_value: int) -> dict:
    """Seed categories, materials and products.

    Args:
        product_count: Number of products to create.
        seed_value: Random seed for deterministic output.

    Returns:
        Seeding result with counts.
    """
    rng = random.Random(seed_value)
    categories = LookupService(ProductCategoryRepository(async_session_factory))
    materials = LookupService(ProductMaterialRepository(async_session_factory))
    products = ProductService(SqlAlchemyProductRepository(async_session_factory))

    category_ids = [
        (await categories.create(LookupRequest(name=name))).id for name in CATEGORIES
    ]
    material_ids = [
        (await materials.create(LookupRequest(name=name))).id for name in MATERIALS
    ]

    for index in range(product_count):
        material_index = rng.randrange(len(MATERIALS))
        name = f"{rng.choice(ADJECTIVES)} {MATERIALS[material_index]} {CATEGORIES[index % len(CATEGORIES)][:-1]}"
        await products.create(
            CreateProductRequest(
                name=name,
                price=Decimal(rng.randint(1500, 90000)) / 100,
                description=f"{name}, item {index + 1}",
                status=rng.choice(STATUSES),
                category_ids=rng.sample(category_ids, k=rng.randint(1, 2)),
                material_ids=[material_ids[material_index]],
                image_urls=[
                    f"https://cdn.example.com/products/{index + 1}/{position}.jpg"
                    for position in range(rng.randint(1, 3))
                ],
            )
        )

    return {
        "categories_created": len(category_ids),
        "materials_created": len(material_ids),
        "products_created": product_count,
    }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo data",
    )
    parser.add_argument(
        "--products",
        type=int,
        default=25,
        help="Number of products to create (default: 25)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )

    args = parser.parse_args()
    configure_logging(json_output=False)

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(args.products, args.seed)
    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Materials: {result['materials_created']}")
    print(f"  ✓ Products: {result['products_created']}")
    print()

    await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
