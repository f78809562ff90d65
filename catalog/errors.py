"""Error taxonomy for the product catalog.

Every failure raised by the store or the service is one of these kinds.
Only the API boundary (``catalog.error_handler``) decides how each kind is
represented to the client.
"""

from __future__ import annotations

from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for classified catalog failures."""

    error_code = "catalog_error"

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation


class ProductNotFoundError(CatalogError):
    """The requested product id does not exist in the store."""

    error_code = "not_found"

    def __init__(self, product_id: int, *, operation: Optional[str] = None) -> None:
        super().__init__(f"product {product_id} not found", operation=operation)
        self.product_id = product_id


class CatalogValidationError(CatalogError):
    """Malformed input such as a non-positive page size.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
    """

    error_code = "validation_error"

    def __init__(
        self,
        field_errors: Dict[str, str],
        message: str = "Validation failed",
        *,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.field_errors = field_errors


class StorageError(CatalogError):
    """The underlying store operation failed (connectivity, constraints)."""

    error_code = "storage_failure"

    def __init__(self, message: str, *, operation: Optional[str] = None, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, operation=operation)
        self.cause = cause


class ConfigError(Exception):
    """Configuration could not be loaded or resolved."""
