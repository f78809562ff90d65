"""Pytest fixtures for the product catalog tests."""

import pytest
from fastapi.testclient import TestClient

from catalog.database.store import ProductStore as MemoryProductStore
from catalog.database.store_real import ProductStore as SqlProductStore
from catalog.services.product_service import ProductService
from catalog.utils.config_loader import CatalogConfig, PaginationConfig


@pytest.fixture
def memory_store():
    """In-memory ProductStore stub."""
    return MemoryProductStore()


@pytest.fixture
def sql_store():
    """SQLAlchemy ProductStore on a private in-memory SQLite database."""
    store = SqlProductStore("sqlite://")
    store.create_tables()
    yield store
    store.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Both store implementations, for behaviour they must share."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def service(store):
    return ProductService(store, max_page_size=50)


@pytest.fixture
def config():
    return CatalogConfig(pagination=PaginationConfig(default_page_size=10, max_page_size=50))


@pytest.fixture
def client(config, memory_store):
    from catalog.api.main import create_app

    app = create_app(config=config, store=memory_store)
    return TestClient(app)
