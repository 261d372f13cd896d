"""Category database model."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from catalog.configs import MAX_CATEGORY_NAME_LENGTH


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class CategoryDB(SQLModel, table=True):
    """
    Product category.

    ``minimum_stock_quantity`` is the stock level a product of this category
    needs before it is considered live.
    """

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    name: str = Field(
        sa_column=Column(String(MAX_CATEGORY_NAME_LENGTH), unique=True, nullable=False, index=True),
        description="Unique category name",
    )
    minimum_stock_quantity: int = Field(
        default=0,
        ge=0,
        nullable=False,
        description="Stock a product needs to be live",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
    )

    def touch(self) -> None:
        self.updated_at = utcnow()
