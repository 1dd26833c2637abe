"""Catalog domain entities.

The ``Product`` aggregate owns three collections: category links, material
links and an ordered list of images. ``category_ids`` and ``material_ids``
are inputs on the write path; on the read path they are always recomputed
from the hydrated ``categories`` and ``product_materials``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


@dataclass
class ProductCategory:
    """Category a product can be filed under."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, name: str) -> "ProductCategory":
        now = utc_now()
        return cls(id=uuid4(), name=name, created_at=now, updated_at=now)


@dataclass
class ProductMaterial:
    """Material a product can be made of."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, name: str) -> "ProductMaterial":
        now = utc_now()
        return cls(id=uuid4(), name=name, created_at=now, updated_at=now)


@dataclass
class ProductImage:
    """Image owned by a product.

    Images have no identity outside their parent product.

    Attributes:
        id: Image identifier.
        product_id: Parent product ID.
        url: Public object URL.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    product_id: UUID
    url: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, product_id: UUID, url: str) -> "ProductImage":
        """Create an image with a fresh ID and timestamps.

        Args:
            product_id: Parent product ID.
            url: Public object URL.

        Returns:
            New image.
        """
        now = utc_now()
        return cls(id=uuid4(), product_id=product_id, url=url, created_at=now, updated_at=now)


@dataclass
class Product:
    """Product aggregate.

    Attributes:
        id: Unique product identifier, generated by the caller.
        name: Product name.
        price: Positive price.
        description: Product description.
        status: Free-form status label.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        category_ids: Linked category IDs (at least one on write).
        material_ids: Linked material IDs (may be empty).
        categories: Hydrated categories (read path only).
        product_materials: Hydrated materials (read path only).
        images: Ordered images.
    """

    id: UUID
    name: str
    price: Decimal
    description: str
    status: str
    created_at: datetime
    updated_at: datetime
    category_ids: list[UUID] = field(default_factory=list)
    material_ids: list[UUID] = field(default_factory=list)
    categories: list[ProductCategory] = field(default_factory=list)
    product_materials: list[ProductMaterial] = field(default_factory=list)
    images: list[ProductImage] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        name: str,
        price: Decimal,
        description: str,
        status: str,
        category_ids: list[UUID],
        material_ids: list[UUID] | None = None,
        image_urls: list[str] | None = None,
    ) -> "Product":
        """Build a new aggregate with client-side IDs and timestamps.

        Args:
            name: Product name.
            price: Product price.
            description: Product description.
            status: Status label.
            category_ids: Category IDs to link.
            material_ids: Material IDs to link.
            image_urls: Image URLs in display order.

        Returns:
            Unsaved product aggregate.
        """
        product_id = uuid4()
        now = utc_now()
        return cls(
            id=product_id,
            name=name,
            price=Decimal(price),
            description=description,
            status=status,
            created_at=now,
            updated_at=now,
            category_ids=list(category_ids),
            material_ids=list(material_ids or []),
            images=[ProductImage.new(product_id, url) for url in image_urls or []],
        )

    @property
    def image_urls(self) -> list[str]:
        """Image URLs in display order."""
        return [image.url for image in self.images]
