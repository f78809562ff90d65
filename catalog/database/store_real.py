"""
Real SQLAlchemy-backed ProductStore, used when a database URL is configured.
Implements the same interface as catalog.database.store (in-memory stub).
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database.models import Base, Product
from catalog.database.pagination import Page
from catalog.errors import StorageError


def _normalize_connection_string(s: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace."""
    s = s.strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    return s


def build_engine(connection_string: str, pool_size: int = 5, max_overflow: int = 10):
    connection_string = _normalize_connection_string(connection_string)
    if connection_string.startswith("sqlite"):
        # sqlite pools do not take sizing; in-memory databases must share one connection
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in connection_string or connection_string.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(connection_string, **kwargs)
    return create_engine(connection_string, pool_pre_ping=True, pool_size=pool_size, max_overflow=max_overflow)


class ProductStore:
    """
    Product data access using SQLAlchemy. One session per call; every
    SQLAlchemy failure surfaces as StorageError.
    """

    kind = "sql"

    def __init__(self, connection_string: str, pool_size: int = 5, max_overflow: int = 10) -> None:
        self.engine = build_engine(connection_string, pool_size=pool_size, max_overflow=max_overflow)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def create_tables(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"could not create tables: {e}", operation="create_tables", cause=e) from e

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        s = self.SessionLocal()
        try:
            yield s
            s.commit()
        except SQLAlchemyError as e:
            s.rollback()
            raise StorageError(f"{operation} failed: {e}", operation=operation, cause=e) from e
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #
    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._session("find_by_id") as s:
            stmt = select(Product).where(Product.id == product_id)
            return s.execute(stmt).scalar_one_or_none()

    def save(self, product: Product) -> Product:
        with self._session("save") as s:
            if product.id is None:
                s.add(product)
                s.flush()
                s.refresh(product)
                return product
            merged = s.merge(product)
            s.flush()
            return merged

    def delete_by_id(self, product_id: int) -> bool:
        with self._session("delete_by_id") as s:
            product = s.get(Product, product_id)
            if product is None:
                return False
            s.delete(product)
            return True

    def page_by_category(self, category: Optional[str], page_index: int, page_size: int) -> Page:
        with self._session("page_by_category") as s:
            stmt = select(Product)
            count_stmt = select(func.count()).select_from(Product)
            if category is not None:
                stmt = stmt.where(Product.category == category)
                count_stmt = count_stmt.where(Product.category == category)
            total = s.execute(count_stmt).scalar_one()
            offset = page_index * page_size
            # past the end; also keeps huge offsets away from the driver
            if offset >= total:
                return Page(items=[], total_elements=total, page_index=page_index, page_size=page_size)
            stmt = (
                stmt.order_by(Product.category.asc(), Product.id.asc())
                .offset(offset)
                .limit(page_size)
            )
            items = list(s.execute(stmt).scalars().all())
            return Page(items=items, total_elements=total, page_index=page_index, page_size=page_size)

    def distinct_categories(self) -> List[str]:
        with self._session("distinct_categories") as s:
            stmt = select(Product.category).distinct().order_by(Product.category.asc())
            return list(s.execute(stmt).scalars().all())
