"""
Compatibility endpoints keeping the first-generation verb-style paths working
for existing clients. Same service calls as `products_router`.
"""

from typing import List

from fastapi import APIRouter, Depends

from catalog.api.dependencies import get_config, get_product_service
from catalog.api.schemas import (
    CreateProductRequest,
    LegacyUpdateProductRequest,
    ProductListRequest,
    ProductListResponse,
    ProductResponse,
)
from catalog.services.product_service import ProductService
from catalog.utils.config_loader import CatalogConfig

api = APIRouter()
legacy_api = api


@api.get("/get/product/by/{product_id}", response_model=ProductResponse, tags=["Legacy"])
def get_product_by_id(product_id: int, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_entity(service.get_by_id(product_id))


@api.post("/create/product", response_model=ProductResponse, tags=["Legacy"])
def create_product(request: CreateProductRequest, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_entity(service.create(request.category, request.name))


@api.post("/delete/product/{product_id}", response_model=bool, tags=["Legacy"])
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_by_id(product_id)
    return True


@api.post("/update/product", response_model=ProductResponse, tags=["Legacy"])
def update_product(request: LegacyUpdateProductRequest, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_entity(service.update(request.id, request.category, request.name))


@api.post("/product/list", response_model=ProductListResponse, tags=["Legacy"])
def list_products_by_category(
    request: ProductListRequest,
    service: ProductService = Depends(get_product_service),
    config: CatalogConfig = Depends(get_config),
):
    size = request.size if request.size is not None else config.pagination.default_page_size
    page = service.list_by_category(request.category, request.page, size)
    return ProductListResponse.from_page(page)


@api.get("/product/category/list", response_model=List[str], tags=["Legacy"])
def list_unique_categories(service: ProductService = Depends(get_product_service)):
    return service.list_unique_categories()
