"""Request schemas for catalog operations.

Pydantic models describing what a caller may send when creating or
changing catalog entries.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., gt=0, description="Product price")
    description: str = Field(..., description="Product description")
    status: str = Field(..., description="Free-form status label")
    category_ids: list[UUID] = Field(default_factory=list, description="Category IDs")
    material_ids: list[UUID] = Field(default_factory=list, description="Material IDs")
    image_urls: list[str] = Field(default_factory=list, description="Image URLs in order")


class UpdateProductRequest(BaseModel):
    """Partial product update.

    Omitted fields keep their current value. ``image_urls``, when given,
    replaces the whole image list.
    """

    name: str | None = None
    price: Decimal | None = Field(default=None, gt=0)
    description: str | None = None
    status: str | None = None
    category_ids: list[UUID] | None = None
    material_ids: list[UUID] | None = None
    image_urls: list[str] | None = None


class LookupRequest(BaseModel):
    """Request to create or rename a category or material."""

    name: str = Field(..., min_length=1, description="Display name")
