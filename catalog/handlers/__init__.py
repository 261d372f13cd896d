"""Use-case handlers and the mediator that dispatches to them."""

from catalog.handlers.categories import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    GetAllCategoriesHandler,
    GetCategoryByIdHandler,
    UpdateCategoryHandler,
)
from catalog.handlers.mediator import Mediator
from catalog.handlers.products import (
    CreateProductHandler,
    DeleteProductHandler,
    GetAllProductsHandler,
    GetFilteredProductsHandler,
    GetProductByIdHandler,
    UpdateProductHandler,
)
from catalog.managers.cache_manager import CacheManager
from catalog.repositories.protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol
from catalog.schemas import (
    CreateCategoryCommand,
    CreateProductCommand,
    DeleteCategoryCommand,
    DeleteProductCommand,
    GetAllCategoriesQuery,
    GetAllProductsQuery,
    GetCategoryByIdQuery,
    GetFilteredProductsQuery,
    GetProductByIdQuery,
    UpdateCategoryCommand,
    UpdateProductCommand,
)
from catalog.utils.cache_keys import CacheKeyGenerator


def build_mediator(
    products: ProductRepositoryProtocol,
    categories: CategoryRepositoryProtocol,
    cache: CacheManager,
    keys: CacheKeyGenerator,
) -> Mediator:
    """Register one handler per request type against the given collaborators."""
    return (
        Mediator()
        .register(GetProductByIdQuery, GetProductByIdHandler(products, cache, keys))
        .register(GetAllProductsQuery, GetAllProductsHandler(products, cache, keys))
        .register(GetFilteredProductsQuery, GetFilteredProductsHandler(products, cache, keys))
        .register(CreateProductCommand, CreateProductHandler(products, categories, cache, keys))
        .register(UpdateProductCommand, UpdateProductHandler(products, categories, cache, keys))
        .register(DeleteProductCommand, DeleteProductHandler(products, cache, keys))
        .register(GetCategoryByIdQuery, GetCategoryByIdHandler(categories, cache, keys))
        .register(GetAllCategoriesQuery, GetAllCategoriesHandler(categories, cache, keys))
        .register(CreateCategoryCommand, CreateCategoryHandler(categories, products, cache, keys))
        .register(UpdateCategoryCommand, UpdateCategoryHandler(categories, products, cache, keys))
        .register(DeleteCategoryCommand, DeleteCategoryHandler(categories, products, cache, keys))
    )


__all__ = [
    "CreateCategoryHandler",
    "CreateProductHandler",
    "DeleteCategoryHandler",
    "DeleteProductHandler",
    "GetAllCategoriesHandler",
    "GetAllProductsHandler",
    "GetCategoryByIdHandler",
    "GetFilteredProductsHandler",
    "GetProductByIdHandler",
    "Mediator",
    "UpdateCategoryHandler",
    "UpdateProductHandler",
    "build_mediator",
]
