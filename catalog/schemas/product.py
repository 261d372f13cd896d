"""Product DTOs, request bodies, commands and queries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog.configs import DEFAULT_PAGE_SIZE
from catalog.models import ProductDB


class ProductDto(BaseModel):
    """Product as returned to clients and stored in the cache."""

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        alias_generator=to_camel,
    )

    id: UUID
    title: str
    description: str | None = None
    category_id: UUID
    category_name: str = ""
    stock_quantity: int
    is_live: bool
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, product: ProductDB, category_name: str | None = None) -> "ProductDto":
        """Map a product row, taking the category name from its loaded category by default."""
        if category_name is None:
            category_name = product.category.name if product.category else ""
        return cls(
            id=product.id,
            title=product.title,
            description=product.description,
            category_id=product.category_id,
            category_name=category_name,
            stock_quantity=product.stock_quantity,
            is_live=product.is_live,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductCreate(BaseModel):
    """Request body for creating a product. Business rules live in the validators."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    title: str = Field(default="", examples=["Wireless Mouse"])
    description: str | None = Field(default=None, examples=["Ergonomic 2.4GHz mouse"])
    category_id: UUID | None = None
    stock_quantity: int = Field(default=0, examples=[25])


class ProductUpdate(BaseModel):
    """Request body for a partial product update; omitted fields stay unchanged."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    title: str | None = None
    description: str | None = None
    category_id: UUID | None = None
    stock_quantity: int | None = None


class DeleteProductResponse(BaseModel):
    success: bool = True
    message: str = "Product deleted successfully"


# --- mediator requests ---


@dataclass(frozen=True, slots=True)
class CreateProductCommand:
    title: str
    category_id: UUID | None
    stock_quantity: int = 0
    description: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateProductCommand:
    id: UUID | None
    title: str | None = None
    description: str | None = None
    category_id: UUID | None = None
    stock_quantity: int | None = None


@dataclass(frozen=True, slots=True)
class DeleteProductCommand:
    id: UUID | None


@dataclass(frozen=True, slots=True)
class GetProductByIdQuery:
    id: UUID


@dataclass(frozen=True, slots=True)
class GetAllProductsQuery:
    pass


@dataclass(frozen=True, slots=True)
class GetFilteredProductsQuery:
    """Filter criteria plus paging; every filter left as None is unconstrained."""

    search_term: str | None = None
    min_stock_quantity: int | None = None
    max_stock_quantity: int | None = None
    is_live: bool | None = None
    category_id: UUID | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
