"""Product Catalog.

Provides relational persistence for product aggregates (categories,
materials and ordered images) with paginated, searchable listings.
"""

from catalog_core.catalog.aggregate_reader import ProductAggregateReader
from catalog_core.catalog.aggregate_writer import ProductAggregateWriter
from catalog_core.catalog.lookup_repository import (
    LookupRepository,
    ProductCategoryRepository,
    ProductMaterialRepository,
)
from catalog_core.catalog.pagination import PaginatedResult, PaginationQuery, SortOrder
from catalog_core.catalog.query_builder import SORTABLE_COLUMNS, ProductQueryBuilder
from catalog_core.catalog.repository import ProductRepository, SqlAlchemyProductRepository
from catalog_core.catalog.schemas import (
    CreateProductRequest,
    LookupRequest,
    UpdateProductRequest,
)
from catalog_core.catalog.service import LookupService, ObjectValidator, ProductService

__all__ = [
    # Pagination
    "PaginatedResult",
    "PaginationQuery",
    "SortOrder",
    # Query / aggregates
    "SORTABLE_COLUMNS",
    "ProductQueryBuilder",
    "ProductAggregateReader",
    "ProductAggregateWriter",
    # Repositories
    "LookupRepository",
    "ProductCategoryRepository",
    "ProductMaterialRepository",
    "ProductRepository",
    "SqlAlchemyProductRepository",
    # Schemas
    "CreateProductRequest",
    "LookupRequest",
    "UpdateProductRequest",
    # Services
    "LookupService",
    "ObjectValidator",
    "ProductService",
]
