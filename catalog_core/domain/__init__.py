"""Domain layer - catalog entities and exceptions.

Example usage:
    from catalog_core.domain import Product

    product = Product.new(
        name="Oak chair",
        price=Decimal("129.00"),
        description="Solid oak dining chair",
        status="active",
        category_ids=[chairs.id],
        image_urls=["https://cdn.example.com/chair.jpg"],
    )
"""

from catalog_core.domain.entities import (
    Product,
    ProductCategory,
    ProductImage,
    ProductMaterial,
    utc_now,
)
from catalog_core.domain.exceptions import (
    CatalogError,
    CatalogValidationError,
    CategoriesNotFoundError,
    CategoryNotFoundError,
    EmptyCategoriesError,
    InvalidImageUrlError,
    MaterialNotFoundError,
    NotFoundError,
    ProductNotFoundError,
    StorageFailureError,
)

__all__ = [
    # Entities
    "Product",
    "ProductCategory",
    "ProductImage",
    "ProductMaterial",
    "utc_now",
    # Exceptions
    "CatalogError",
    "CatalogValidationError",
    "CategoriesNotFoundError",
    "CategoryNotFoundError",
    "EmptyCategoriesError",
    "InvalidImageUrlError",
    "MaterialNotFoundError",
    "NotFoundError",
    "ProductNotFoundError",
    "StorageFailureError",
]
