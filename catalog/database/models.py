"""
SQLAlchemy model for the product table.
Shared by both stores: store_real persists it, store keeps detached copies in memory.
"""
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Product(Base):
    __tablename__ = "products"
    # ids of deleted rows must not be handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column("product_id", Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def copy(self) -> "Product":
        """Return a transient copy carrying the same column values."""
        return Product(id=self.id, category=self.category, name=self.name)

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, category={self.category!r}, name={self.name!r})"
