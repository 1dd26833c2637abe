"""Pagination request and result types."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from catalog_core.infrastructure.config import settings

T = TypeVar("T")


class SortOrder(str, Enum):
    """Listing sort direction."""

    ASC = "Asc"
    DESC = "Desc"

    @classmethod
    def _missing_(cls, value: object) -> "SortOrder | None":
        """Match member values case-insensitively, e.g. "asc" or "DESC"."""
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class PaginationQuery(BaseModel):
    """Listing parameters shared by every paginated read.

    ``sort`` is free text here; it is checked against a whitelist of
    columns when the query is built.
    """

    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    limit: int = Field(
        default_factory=lambda: settings.default_page_size,
        ge=1,
        description="Items per page",
    )
    search: str | None = Field(default=None, description="Case-insensitive substring")
    sort: str | None = Field(default=None, description="Sort field name")
    sort_order: SortOrder = Field(default=SortOrder.DESC, description="Sort direction")

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    ``page`` and ``limit`` echo the request, even past the last page.

    Attributes:
        items: List of items.
        total: Total count over the filtered set.
        page: Requested page.
        limit: Requested page size.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages (ceiling of total / limit)."""
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    @classmethod
    def from_query(cls, items: list[T], total: int, query: PaginationQuery) -> "PaginatedResult[T]":
        """Build a result echoing the query's page and limit."""
        return cls(items=items, total=total, page=query.page, limit=query.limit)
