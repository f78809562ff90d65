"""
Product catalog endpoints (resource-oriented).

Each endpoint is a direct pass-through to ProductService; failures propagate
to the handlers registered by `catalog.error_handler`.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from catalog.api.dependencies import get_config, get_product_service
from catalog.api.schemas import (
    CreateProductRequest,
    DeleteResponse,
    ProductListResponse,
    ProductResponse,
    UpdateProductRequest,
)
from catalog.services.product_service import ProductService
from catalog.utils.config_loader import CatalogConfig

api = APIRouter()
products_api = api


@api.get("/products/categories", response_model=List[str], tags=["Products"])
def list_unique_categories(service: ProductService = Depends(get_product_service)):
    """List each category present in the catalog once, alphabetically."""
    return service.list_unique_categories()


@api.get("/products", response_model=ProductListResponse, tags=["Products"])
def list_products_by_category(
    category: Optional[str] = Query(None, description="Only products in this category; all when omitted."),
    page: int = Query(0, description="Zero-based page index."),
    size: Optional[int] = Query(None, description="Page size; defaults to pagination.default_page_size."),
    service: ProductService = Depends(get_product_service),
    config: CatalogConfig = Depends(get_config),
):
    """
    Page through products sorted ascending by category.

    - **category**: filter (e.g. `?category=tools`).
    - **page** / **size**: zero-based page and page size.
    """
    if size is None:
        size = config.pagination.default_page_size
    result = service.list_by_category(category, page, size)
    return ProductListResponse.from_page(result)


@api.get("/products/{product_id}", response_model=ProductResponse, tags=["Products"])
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_entity(service.get_by_id(product_id))


@api.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, tags=["Products"])
def create_product(request: CreateProductRequest, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_entity(service.create(request.category, request.name))


@api.put("/products/{product_id}", response_model=ProductResponse, tags=["Products"])
def update_product(
    product_id: int,
    request: UpdateProductRequest,
    service: ProductService = Depends(get_product_service),
):
    return ProductResponse.from_entity(service.update(product_id, request.category, request.name))


@api.delete("/products/{product_id}", response_model=DeleteResponse, tags=["Products"])
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_by_id(product_id)
    return DeleteResponse(deleted=True)
