"""Request and response models - the external API contract."""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.database.models import Product
from catalog.database.pagination import Page


class ProductResponse(BaseModel):
    """Product data for API responses. Only these fields leave the service."""
    id: int
    category: str
    name: str

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(id=product.id, category=product.category, name=product.name)


class ProductListResponse(BaseModel):
    """One page of products plus the totals needed to fetch the others."""
    items: List[ProductResponse]
    total_pages: int
    total_elements: int
    page_index: int

    @classmethod
    def from_page(cls, page: Page) -> "ProductListResponse":
        return cls(
            items=[ProductResponse.from_entity(p) for p in page.items],
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            page_index=page.page_index,
        )


class CreateProductRequest(BaseModel):
    category: str = Field(..., description="Free-text category label")
    name: str = Field(..., description="Free-text product name")


class UpdateProductRequest(BaseModel):
    """Full replacement of the mutable fields; both are required."""
    category: str
    name: str


class LegacyUpdateProductRequest(UpdateProductRequest):
    id: int


class ProductListRequest(BaseModel):
    category: Optional[str] = None
    page: int = 0
    size: Optional[int] = Field(None, description="Page size; defaults to pagination.default_page_size")


class DeleteResponse(BaseModel):
    deleted: bool
