"""Validators for product commands and queries."""

from catalog.configs import MAX_PAGE_SIZE, MAX_TITLE_LENGTH
from catalog.schemas.product import (
    CreateProductCommand,
    DeleteProductCommand,
    GetFilteredProductsQuery,
    UpdateProductCommand,
)
from catalog.validators.base import NIL_UUID, ValidationResult, is_blank, is_empty_id

TITLE_REQUIRED = "Title is required."
TITLE_TOO_LONG = f"Title cannot exceed {MAX_TITLE_LENGTH} characters."
TITLE_EMPTY = "Title cannot be empty."
CATEGORY_REQUIRED = "Category ID is required."
CATEGORY_EMPTY = "Category ID cannot be empty when provided."
STOCK_NEGATIVE = "Stock quantity cannot be negative."
PRODUCT_ID_REQUIRED = "Product ID is required."


class CreateProductValidator:
    def validate(self, request: CreateProductCommand) -> ValidationResult:
        result = ValidationResult()
        if is_blank(request.title):
            result.add("title", TITLE_REQUIRED)
        else:
            result.check(len(request.title) <= MAX_TITLE_LENGTH, "title", TITLE_TOO_LONG)
        result.check(not is_empty_id(request.category_id), "categoryId", CATEGORY_REQUIRED)
        result.check(request.stock_quantity >= 0, "stockQuantity", STOCK_NEGATIVE)
        return result


class UpdateProductValidator:
    """Only fields that are provided are checked; ``None`` means unchanged."""

    def validate(self, request: UpdateProductCommand) -> ValidationResult:
        result = ValidationResult()
        result.check(not is_empty_id(request.id), "id", PRODUCT_ID_REQUIRED)
        if request.title is not None:
            if is_blank(request.title):
                result.add("title", TITLE_EMPTY)
            else:
                result.check(len(request.title) <= MAX_TITLE_LENGTH, "title", TITLE_TOO_LONG)
        result.check(request.category_id != NIL_UUID, "categoryId", CATEGORY_EMPTY)
        if request.stock_quantity is not None:
            result.check(request.stock_quantity >= 0, "stockQuantity", STOCK_NEGATIVE)
        return result


class DeleteProductValidator:
    def validate(self, request: DeleteProductCommand) -> ValidationResult:
        result = ValidationResult()
        result.check(not is_empty_id(request.id), "id", PRODUCT_ID_REQUIRED)
        return result


class FilteredProductsValidator:
    def validate(self, request: GetFilteredProductsQuery) -> ValidationResult:
        result = ValidationResult()
        result.check(request.page >= 1, "page", "Page must be greater than or equal to 1.")
        result.check(
            1 <= request.page_size <= MAX_PAGE_SIZE,
            "pageSize",
            f"Page size must be between 1 and {MAX_PAGE_SIZE}.",
        )
        for name, value in (
            ("minStockQuantity", request.min_stock_quantity),
            ("maxStockQuantity", request.max_stock_quantity),
        ):
            if value is not None:
                result.check(value >= 0, name, STOCK_NEGATIVE)
        low, high = request.min_stock_quantity, request.max_stock_quantity
        if low is not None and high is not None:
            result.check(
                low <= high,
                "minStockQuantity",
                "Minimum stock quantity cannot be greater than maximum stock quantity.",
            )
        return result
