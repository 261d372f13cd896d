"""Validators for category commands and queries."""

from catalog.configs import MAX_CATEGORY_NAME_LENGTH, MAX_PAGE_SIZE
from catalog.schemas.category import (
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    UpdateCategoryCommand,
)
from catalog.validators.base import ValidationResult, is_blank, is_empty_id

NAME_REQUIRED = "Name is required."
NAME_TOO_LONG = f"Name cannot exceed {MAX_CATEGORY_NAME_LENGTH} characters."
NAME_EMPTY = "Name cannot be empty."
MINIMUM_NEGATIVE = "Minimum stock quantity cannot be negative."
CATEGORY_ID_REQUIRED = "Category ID is required."


class CreateCategoryValidator:
    def validate(self, request: CreateCategoryCommand) -> ValidationResult:
        result = ValidationResult()
        if is_blank(request.name):
            result.add("name", NAME_REQUIRED)
        else:
            result.check(len(request.name) <= MAX_CATEGORY_NAME_LENGTH, "name", NAME_TOO_LONG)
        result.check(request.minimum_stock_quantity >= 0, "minimumStockQuantity", MINIMUM_NEGATIVE)
        return result


class UpdateCategoryValidator:
    def validate(self, request: UpdateCategoryCommand) -> ValidationResult:
        result = ValidationResult()
        result.check(not is_empty_id(request.id), "id", CATEGORY_ID_REQUIRED)
        if request.name is not None:
            if is_blank(request.name):
                result.add("name", NAME_EMPTY)
            else:
                result.check(len(request.name) <= MAX_CATEGORY_NAME_LENGTH, "name", NAME_TOO_LONG)
        if request.minimum_stock_quantity is not None:
            result.check(
                request.minimum_stock_quantity >= 0,
                "minimumStockQuantity",
                MINIMUM_NEGATIVE,
            )
        return result


class DeleteCategoryValidator:
    def validate(self, request: DeleteCategoryCommand) -> ValidationResult:
        result = ValidationResult()
        result.check(not is_empty_id(request.id), "id", CATEGORY_ID_REQUIRED)
        return result


class CategoryPageValidator:
    def validate(self, request: GetAllCategoriesQuery) -> ValidationResult:
        result = ValidationResult()
        result.check(request.page >= 1, "page", "Page must be greater than or equal to 1.")
        result.check(
            1 <= request.page_size <= MAX_PAGE_SIZE,
            "pageSize",
            f"Page size must be between 1 and {MAX_PAGE_SIZE}.",
        )
        return result
