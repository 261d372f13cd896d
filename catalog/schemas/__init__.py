from catalog.schemas.category import (
    CategoryCreate,
    CategoryDto,
    CategoryUpdate,
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    GetCategoryByIdQuery,
    UpdateCategoryCommand,
)
from catalog.schemas.pagination import PaginatedResult, PaginationMetadata, paginate
from catalog.schemas.product import (
    CreateProductCommand,
    DeleteProductCommand,
    DeleteProductResponse,
    GetAllProductsQuery,
    GetFilteredProductsQuery,
    GetProductByIdQuery,
    ProductCreate,
    ProductDto,
    ProductUpdate,
    UpdateProductCommand,
)
from catalog.schemas.result import Result

__all__ = [
    "CategoryCreate",
    "CategoryDto",
    "CategoryUpdate",
    "CreateCategoryCommand",
    "CreateProductCommand",
    "DeleteCategoryCommand",
    "DeleteProductCommand",
    "DeleteProductResponse",
    "GetAllCategoriesQuery",
    "GetAllProductsQuery",
    "GetCategoryByIdQuery",
    "GetFilteredProductsQuery",
    "GetProductByIdQuery",
    "PaginatedResult",
    "PaginationMetadata",
    "ProductCreate",
    "ProductDto",
    "ProductUpdate",
    "Result",
    "UpdateCategoryCommand",
    "UpdateProductCommand",
    "paginate",
]
