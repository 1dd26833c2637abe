"""Listing query construction for products.

Builds one SELECT that returns a page of product rows together with the
size of the whole filtered set, computed by a ``COUNT(*) OVER ()`` window.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.models import (
    ProductMaterialModel,
    ProductMaterialRelationModel,
    ProductModel,
)
from catalog_core.catalog.pagination import PaginationQuery, SortOrder

DEFAULT_SORT_FIELD = "created_at"

# Only these names may choose the ORDER BY column.
SORTABLE_COLUMNS: dict[str, Any] = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "created_at": ProductModel.created_at,
    "updated_at": ProductModel.updated_at,
    "status": ProductModel.status,
}


def resolve_sort_field(sort: str | None) -> str:
    """Return ``sort`` if it is whitelisted, else the default field."""
    if sort in SORTABLE_COLUMNS:
        return sort
    return DEFAULT_SORT_FIELD


def like_pattern(term: str) -> str:
    """Build a substring LIKE pattern with wildcards in ``term`` escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductQueryBuilder:
    """Builds the paginated product listing query.

    Example usage:
        builder = ProductQueryBuilder(PaginationQuery(page=2, search="oak"))
        rows, total = await builder.execute(session)
    """

    def __init__(self, query: PaginationQuery) -> None:
        """Initialize builder.

        Args:
            query: Listing parameters.
        """
        self.query = query

    @property
    def sort_field(self) -> str:
        """Whitelisted sort field name."""
        return resolve_sort_field(self.query.sort)

    def search_condition(self) -> ColumnElement[bool] | None:
        """Build the search filter, or None when no search was requested.

        The term matches name, description or the name of any linked
        material, case-insensitively.
        """
        if not self.query.search:
            return None

        pattern = like_pattern(self.query.search)
        material_match = (
            select(ProductMaterialRelationModel.product_id)
            .join(
                ProductMaterialModel,
                ProductMaterialModel.id == ProductMaterialRelationModel.material_id,
            )
            .where(
                ProductMaterialRelationModel.product_id == ProductModel.id,
                ProductMaterialModel.name.ilike(pattern, escape="\\"),
            )
            .exists()
        )
        return or_(
            ProductModel.name.ilike(pattern, escape="\\"),
            ProductModel.description.ilike(pattern, escape="\\"),
            material_match,
        )

    def build(self) -> Select:
        """Build the SELECT statement.

        Returns:
            Statement yielding ``(ProductModel, total_count)`` rows.
        """
        stmt = select(ProductModel, func.count().over().label("total_count"))

        condition = self.search_condition()
        if condition is not None:
            stmt = stmt.where(condition)

        # Sorting; id breaks ties so pages never overlap
        sort_column = SORTABLE_COLUMNS[self.sort_field]
        if self.query.sort_order == SortOrder.ASC:
            stmt = stmt.order_by(sort_column.asc(), ProductModel.id.asc())
        else:
            stmt = stmt.order_by(sort_column.desc(), ProductModel.id.desc())

        return stmt.limit(self.query.limit).offset(self.query.offset)

    async def execute(self, session: AsyncSession) -> tuple[Sequence[ProductModel], int]:
        """Run the listing query.

        Args:
            session: Session with an open transaction.

        Returns:
            Product rows for the page and the total filtered count. The
            count is read from the first row, so an empty page reports 0.
        """
        result = await session.execute(self.build())
        rows = result.all()
        total = rows[0].total_count if rows else 0
        return [row[0] for row in rows], int(total)
