"""SQLAlchemy models for the product catalog.

Defines the product, category and material tables, the two many-to-many
relation tables and the product image table. Relation and image rows are
removed by ``ON DELETE CASCADE`` when their product goes away.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog_core.infrastructure.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProductCategoryModel(Base):
    """Product category row."""

    __tablename__ = "product_categories"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductCategoryModel(id={self.id}, name={self.name})>"


class ProductMaterialModel(Base):
    """Product material row."""

    __tablename__ = "product_materials"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductMaterialModel(id={self.id}, name={self.name})>"


class ProductModel(Base):
    """Scalar product row.

    Category, material and image associations live in their own tables
    and are never duplicated here.

    Attributes:
        id: Product identifier supplied by the caller.
        name: Product name.
        price: Price with two decimal places.
        description: Product description.
        status: Free-form status label.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name[:30]})>"


class ProductCategoryRelationModel(Base):
    """Link between a product and a category.

    ``position`` keeps the order of the caller's ``category_ids``.
    """

    __tablename__ = "product_category_relations"

    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("product_categories.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductMaterialRelationModel(Base):
    """Link between a product and a material.

    ``position`` keeps the order of the caller's ``material_ids``.
    """

    __tablename__ = "product_material_relations"

    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    material_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("product_materials.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductImageModel(Base):
    """Image row owned by a product.

    ``position`` keeps the caller's image order.
    """

    __tablename__ = "product_images"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductImageModel(id={self.id}, position={self.position})>"
