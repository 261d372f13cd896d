from catalog.validators.base import ValidationFailure, ValidationResult, Validator
from catalog.validators.category import (
    CategoryPageValidator,
    CreateCategoryValidator,
    DeleteCategoryValidator,
    UpdateCategoryValidator,
)
from catalog.validators.product import (
    CreateProductValidator,
    DeleteProductValidator,
    FilteredProductsValidator,
    UpdateProductValidator,
)

__all__ = [
    "CategoryPageValidator",
    "CreateCategoryValidator",
    "CreateProductValidator",
    "DeleteCategoryValidator",
    "DeleteProductValidator",
    "FilteredProductsValidator",
    "UpdateCategoryValidator",
    "UpdateProductValidator",
    "ValidationFailure",
    "ValidationResult",
    "Validator",
]
