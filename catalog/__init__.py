"""
Product catalog service.

Layers, leaf first:
- database: Product model plus in-memory and SQLAlchemy stores
- services: business rules (existence checks, pagination bounds)
- api: FastAPI routers, request/response models, app assembly
- error_handler: single translation point from failures to HTTP outcomes
- security: ENC(...) configuration secrets

Switching store implementations happens in ONE place (catalog/api/main.py).
"""
