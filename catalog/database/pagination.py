"""Paged result returned by both product stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from catalog.database.models import Product


def total_pages_for(total_elements: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return (total_elements + page_size - 1) // page_size


@dataclass
class Page:
    """A bounded slice of the products matching a category filter."""

    items: List[Product] = field(default_factory=list)
    total_elements: int = 0
    page_index: int = 0
    page_size: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_elements, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages
