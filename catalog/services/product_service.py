"""Product service - business rules for the product catalog."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog.database.models import Product
from catalog.database.pagination import Page
from catalog.errors import CatalogValidationError, ProductNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE_SIZE = 100

# ids are stored as signed 64-bit integers
MIN_PRODUCT_ID = -(2 ** 63)
MAX_PRODUCT_ID = 2 ** 63 - 1


class ProductService:
    """
    Service for product catalog business logic.

    Responsibilities:
    - Existence checks before update and delete
    - Construction of new entities
    - Pagination parameter validation

    Does NOT:
    - Handle HTTP requests (that's API layer)
    - Run queries directly (that's the store)
    """

    def __init__(self, store, max_page_size: int = DEFAULT_MAX_PAGE_SIZE):
        self.store = store
        self.max_page_size = max_page_size

    def create(self, category: str, name: str) -> Product:
        """Persist a new product. Empty strings are accepted as-is."""
        self._require_fields("create", category=category, name=name)
        product = self.store.save(Product(category=category, name=name))
        logger.debug("Created product %s in category %r", product.id, category)
        return product

    def get_by_id(self, product_id: int, operation: str = "get_by_id") -> Product:
        if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
            raise ProductNotFoundError(product_id, operation=operation)
        product = self.store.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, operation=operation)
        return product

    def update(self, product_id: int, category: str, name: str) -> Product:
        """
        Overwrite both mutable fields of an existing product.

        Read-then-write without a surrounding transaction: concurrent updates
        of the same id are last-write-wins.
        """
        self._require_fields("update", category=category, name=name)
        product = self.get_by_id(product_id, operation="update")
        product.category = category
        product.name = name
        return self.store.save(product)

    def delete_by_id(self, product_id: int) -> None:
        product = self.get_by_id(product_id, operation="delete_by_id")
        self.store.delete_by_id(product.id)
        logger.debug("Deleted product %s", product.id)

    def list_by_category(self, category: Optional[str], page_index: int, page_size: int) -> Page:
        """Page through products of a category, always sorted ascending by category."""
        errors: Dict[str, str] = {}
        if page_index < 0:
            errors["page"] = "page must be >= 0"
        if page_size < 1 or page_size > self.max_page_size:
            errors["size"] = f"size must be between 1 and {self.max_page_size}"
        if errors:
            raise CatalogValidationError(errors, "Invalid pagination parameters", operation="list_by_category")
        return self.store.page_by_category(category, page_index, page_size)

    def list_unique_categories(self) -> List[str]:
        return self.store.distinct_categories()

    @staticmethod
    def _require_fields(operation: str, **fields: Any) -> None:
        errors = {
            field: f"{field} is required" if value is None else f"{field} must be a string"
            for field, value in fields.items()
            if not isinstance(value, str)
        }
        if errors:
            raise CatalogValidationError(errors, operation=operation)
