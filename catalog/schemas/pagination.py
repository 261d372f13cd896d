"""Pagination envelope and arithmetic."""

from collections.abc import Sequence
from math import ceil
from typing import Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PaginationMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    previous_page: int | None = None
    next_page: int | None = None

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> Self:
        """
        Derive page navigation from the total item count.

        ``total_pages`` is the ceiling of ``total_count / page_size``; previous
        and next page numbers are only set when such a page exists.
        """
        total_pages = ceil(total_count / page_size) if page_size > 0 else 0
        has_previous = page > 1
        has_next = page < total_pages
        return cls(
            current_page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_previous_page=has_previous,
            has_next_page=has_next,
            previous_page=page - 1 if has_previous else None,
            next_page=page + 1 if has_next else None,
        )


class PaginatedResult(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    data: list[T]
    metadata: PaginationMetadata


def paginate[I](items: Sequence[I], page: int, page_size: int) -> PaginatedResult[I]:
    """Slice ``items`` to one page and attach its metadata."""
    start = (page - 1) * page_size
    return PaginatedResult(
        data=list(items[start : start + page_size]),
        metadata=PaginationMetadata.build(page, page_size, len(items)),
    )
