"""
Service layer for business logic.

This layer separates business rules from HTTP request handling and from
query execution in the stores.
"""

from .product_service import ProductService

__all__ = ["ProductService"]
