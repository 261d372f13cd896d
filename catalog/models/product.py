"""Product database model."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

from catalog.configs import MAX_TITLE_LENGTH
from catalog.models.category import CategoryDB, utcnow


class ProductDB(SQLModel, table=True):
    """
    Catalog product.

    ``is_live`` is derived: the product belongs to a category and its stock
    meets that category's minimum. Call ``refresh_liveness`` after changing
    the stock, the category, or the category's minimum.
    """

    __tablename__ = cast("declared_attr[str]", "products")

    __table_args__ = (
        Index("ix_products_category_live", "category_id", "is_live"),
        Index("ix_products_stock", "stock_quantity"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    title: str = Field(sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False))
    description: str | None = Field(default=None, sa_column=Column(Text))
    category_id: UUID = Field(
        sa_column=Column(
            "category_id",
            ForeignKey("categories.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        ),
    )
    stock_quantity: int = Field(default=0, ge=0, nullable=False)
    is_live: bool = Field(default=False, nullable=False)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
    )

    category: CategoryDB | None = Relationship(
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    def refresh_liveness(self, category: CategoryDB | None = None) -> bool:
        """Recompute ``is_live`` against ``category`` (or the loaded one)."""
        category = category or self.category
        self.is_live = category is not None and self.stock_quantity >= category.minimum_stock_quantity
        return self.is_live

    def touch(self) -> None:
        self.updated_at = utcnow()
