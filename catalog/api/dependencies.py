"""
FastAPI dependencies. The application state is filled in by `catalog.api.main`;
tests swap implementations through `app.dependency_overrides`.
"""

from fastapi import Request

from catalog.services.product_service import ProductService
from catalog.utils.config_loader import CatalogConfig


def get_product_service(request: Request) -> ProductService:
    """Dependency for the product service"""
    return request.app.state.product_service


def get_config(request: Request) -> CatalogConfig:
    """Dependency for the loaded configuration"""
    return request.app.state.config
