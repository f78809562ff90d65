"""
Lightweight in-memory ProductStore replacement for local development.

This provides the same interface as `catalog.database.store_real` so the API
can run without a real database. It is NOT intended for production use.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from catalog.database.models import Product
from catalog.database.pagination import Page


class ProductStore:
    """
    In-memory stand-in for the SQLAlchemy-backed product store.

    Entities are stored and returned as copies, so a caller only changes
    stored state through `save`.
    """

    kind = "memory"

    def __init__(self) -> None:
        self._products: Dict[int, Product] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Schema / lifecycle
    # ------------------------------------------------------------------ #
    def create_tables(self) -> None:
        """
        No-op for the in-memory implementation. Kept for compatibility
        with the startup hook in `catalog/api/main.py`.
        """
        return None

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #
    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return product.copy() if product else None

    def save(self, product: Product) -> Product:
        with self._lock:
            stored = product.copy()
            if stored.id is None:
                self._last_id += 1
                stored.id = self._last_id
            else:
                # explicit ids move the counter too, so later creates never collide
                self._last_id = max(self._last_id, stored.id)
            self._products[stored.id] = stored
            product.id = stored.id
            return stored.copy()

    def delete_by_id(self, product_id: int) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    def page_by_category(self, category: Optional[str], page_index: int, page_size: int) -> Page:
        with self._lock:
            matches = [
                p for p in self._products.values()
                if category is None or p.category == category
            ]
        matches.sort(key=lambda p: (p.category, p.id))
        start = page_index * page_size
        return Page(
            items=[p.copy() for p in matches[start:start + page_size]],
            total_elements=len(matches),
            page_index=page_index,
            page_size=page_size,
        )

    def distinct_categories(self) -> List[str]:
        with self._lock:
            return sorted({p.category for p in self._products.values()})
