"""
FastAPI application - Main entry point

    uvicorn catalog.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from typing import Optional

from fastapi import FastAPI

from catalog.api.legacy_router import legacy_api
from catalog.api.products_router import products_api
from catalog.error_handler import register_exception_handlers
from catalog.services.product_service import ProductService
from catalog.utils.config_loader import CatalogConfig, load_catalog_config

logger = logging.getLogger(__name__)


def build_store(config: CatalogConfig):
    """Use the SQLAlchemy store when a database URL is configured, else the in-memory stub."""
    url = config.database.connection_url()
    if url:
        from catalog.database.store_real import ProductStore

        return ProductStore(
            connection_string=url,
            pool_size=config.database.pool_size,
            max_overflow=config.database.max_overflow,
        )

    from catalog.database.store import ProductStore

    return ProductStore()


def create_app(config: Optional[CatalogConfig] = None, store=None) -> FastAPI:
    """Assemble the application: logging, store, service, routers, error handlers."""
    config = config or load_catalog_config()

    logging.basicConfig(level=getattr(logging, config.app.log_level.upper(), logging.INFO))

    store = store if store is not None else build_store(config)

    app = FastAPI(
        title=config.app.title,
        description="Product catalog CRUD service",
        version=config.app.version,
    )
    app.state.config = config
    app.state.store = store
    app.state.product_service = ProductService(store, max_page_size=config.pagination.max_page_size)

    app.include_router(products_api, prefix="/api/v1")
    app.include_router(legacy_api)
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "store": getattr(store, "kind", type(store).__name__)}

    @app.on_event("startup")
    async def startup_event():
        """Create tables on startup"""
        if getattr(store, "kind", None) == "sql":
            logger.info(
                "Using SQL product store (%s)",
                store.engine.url.render_as_string(hide_password=True),
            )
        else:
            logger.info("Database URL not set; using in-memory product store")
        store.create_tables()
        logger.info("Product tables initialized")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", config.app.title)
        if hasattr(store, "dispose"):
            store.dispose()

    return app


app = create_app()
