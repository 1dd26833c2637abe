"""Domain exceptions.

Every failure the catalog engine reports falls in one of three families:

- ``CatalogValidationError``: the caller's aggregate breaks a precondition
  that is checked before anything is written.
- ``NotFoundError``: a referenced product, category or material is missing.
- ``StorageFailureError``: the database reported an error that is not
  otherwise classified.

None of them are retried by the engine.
"""

from typing import Any
from uuid import UUID


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors inherit from this class so callers can catch
    them in one place at the service or transport layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class CatalogValidationError(CatalogError):
    """Raised when a caller-supplied aggregate violates a precondition."""

    pass


class EmptyCategoriesError(CatalogValidationError):
    """Raised when a product is written without any category."""

    def __init__(self, product_id: UUID) -> None:
        """Initialize empty categories error.

        Args:
            product_id: ID of the product being written.
        """
        super().__init__(
            f"Product {product_id} must belong to at least one category",
            details={"product_id": str(product_id), "field": "category_ids"},
        )


class InvalidImageUrlError(CatalogValidationError):
    """Raised when object storage rejects an image URL."""

    def __init__(self, url: str, reason: str = "Object does not exist") -> None:
        """Initialize invalid image URL error.

        Args:
            url: The rejected URL.
            reason: Explanation from the validator.
        """
        super().__init__(
            f"Invalid image url {url}: {reason}",
            details={"url": url, "reason": reason},
        )


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(CatalogError):
    """Base class for missing-entity errors."""

    pass


class ProductNotFoundError(NotFoundError):
    """Raised when a product does not exist."""

    def __init__(self, product_id: UUID) -> None:
        super().__init__(
            f"Product {product_id} not found",
            details={"product_id": str(product_id)},
        )


class CategoryNotFoundError(NotFoundError):
    """Raised when a single category does not exist."""

    def __init__(self, category_id: UUID) -> None:
        super().__init__(
            f"Product category {category_id} not found",
            details={"category_id": str(category_id)},
        )


class MaterialNotFoundError(NotFoundError):
    """Raised when a single material does not exist."""

    def __init__(self, material_id: UUID) -> None:
        super().__init__(
            f"Product material {material_id} not found",
            details={"material_id": str(material_id)},
        )


class CategoriesNotFoundError(NotFoundError):
    """Raised when one or more categories referenced by a product are missing."""

    def __init__(self, requested: int, found: int) -> None:
        """Initialize categories not found error.

        Args:
            requested: Number of distinct category IDs supplied.
            found: Number of those IDs that exist.
        """
        super().__init__(
            f"One or more categories not found ({found} of {requested} exist)",
            details={"requested": requested, "found": found},
        )


# ============================================================================
# Storage Errors
# ============================================================================


class StorageFailureError(CatalogError):
    """Raised when the storage engine fails in an unclassified way.

    The original driver exception is kept as ``__cause__``.
    """

    def __init__(self, operation: str, message: str) -> None:
        """Initialize storage failure error.

        Args:
            operation: Repository operation that failed (e.g. "product.create").
            message: Text of the underlying database error.
        """
        super().__init__(
            f"Storage failure during {operation}: {message}",
            details={"operation": operation},
        )
        self.operation = operation
