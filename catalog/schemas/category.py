"""Category DTOs, request bodies, commands and queries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog.configs import DEFAULT_PAGE_SIZE


class CategoryDto(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        alias_generator=to_camel,
    )

    id: UUID
    name: str
    minimum_stock_quantity: int
    created_at: datetime
    updated_at: datetime | None = None


class CategoryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str = Field(default="", examples=["Electronics"])
    minimum_stock_quantity: int = Field(default=0, examples=[10])


class CategoryUpdate(BaseModel):
    """Partial update; omitted fields stay unchanged."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str | None = None
    minimum_stock_quantity: int | None = None


@dataclass(frozen=True, slots=True)
class CreateCategoryCommand:
    name: str
    minimum_stock_quantity: int = 0


@dataclass(frozen=True, slots=True)
class UpdateCategoryCommand:
    id: UUID | None
    name: str | None = None
    minimum_stock_quantity: int | None = None


@dataclass(frozen=True, slots=True)
class DeleteCategoryCommand:
    id: UUID | None


@dataclass(frozen=True, slots=True)
class GetCategoryByIdQuery:
    id: UUID


@dataclass(frozen=True, slots=True)
class GetAllCategoriesQuery:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
