"""Category query and command handlers.

Product DTOs embed the category name and liveness, so every category write
invalidates the products namespace as well as the categories namespace.
"""

from logging import getLogger

from catalog.configs import file_logger
from catalog.handlers.base import STORAGE_ERRORS, invalidate, not_found, validation_failure
from catalog.managers.cache_manager import CacheManager
from catalog.models import CategoryDB
from catalog.repositories.protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol
from catalog.schemas.category import (
    CategoryDto,
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    GetCategoryByIdQuery,
    UpdateCategoryCommand,
)
from catalog.schemas.pagination import PaginatedResult, paginate
from catalog.schemas.result import Result
from catalog.utils.cache_keys import CATEGORIES, PRODUCTS, CacheKeyGenerator
from catalog.validators.category import (
    CategoryPageValidator,
    CreateCategoryValidator,
    DeleteCategoryValidator,
    UpdateCategoryValidator,
)

logger = file_logger(getLogger(__name__))

WRITE_NAMESPACES = (CATEGORIES, PRODUCTS)


def duplicate_name(name: str) -> Result:
    return Result.failure(f"Category with name '{name}' already exists.")


class GetCategoryByIdHandler:
    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        self.categories = categories
        self.cache = cache
        self.keys = keys

    async def handle(self, request: GetCategoryByIdQuery) -> Result[CategoryDto]:
        key = self.keys.category_by_id_key(request.id)
        try:
            cached = await self.cache.get(key, CategoryDto)
            if cached.hit:
                return Result.success(cached.value)

            category = await self.categories.get_by_id(request.id)
            if category is None:
                return not_found("Category", request.id)

            dto = CategoryDto.model_validate(category)
            await self.cache.set(key, dto, self.cache.cache_config.default_ttl)
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to retrieve category {request.id}")
            return Result.failure(f"An error occurred while retrieving the category: {e}")
        return Result.success(dto)


class GetAllCategoriesHandler:
    validator = CategoryPageValidator()

    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        self.categories = categories
        self.cache = cache
        self.keys = keys

    async def handle(self, request: GetAllCategoriesQuery) -> Result[PaginatedResult[CategoryDto]]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        async def load() -> PaginatedResult[CategoryDto]:
            rows = await self.categories.get_all()
            dtos = [CategoryDto.model_validate(c) for c in rows]
            return paginate(dtos, request.page, request.page_size)

        try:
            page = await self.cache.get_or_set(
                self.keys.category_page_key(request.page, request.page_size),
                load,
                PaginatedResult[CategoryDto],
                self.cache.cache_config.default_ttl,
            )
        except STORAGE_ERRORS as e:
            logger.exception("Failed to retrieve categories")
            return Result.failure(f"An error occurred while retrieving categories: {e}")
        return Result.success(page)


class _CategoryWriteHandler:
    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        products: ProductRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        self.categories = categories
        self.products = products
        self.cache = cache
        self.keys = keys

    async def _name_taken(self, name: str, exclude: CategoryDB | None = None) -> bool:
        existing = await self.categories.get_by_name(name)
        return existing is not None and (exclude is None or existing.id != exclude.id)

    async def _invalidate(self) -> None:
        await invalidate(self.cache, self.keys, WRITE_NAMESPACES)


class CreateCategoryHandler(_CategoryWriteHandler):
    validator = CreateCategoryValidator()

    async def handle(self, request: CreateCategoryCommand) -> Result[CategoryDto]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        name = request.name.strip()
        try:
            if await self._name_taken(name):
                return duplicate_name(name)
            category = await self.categories.add(
                CategoryDB(name=name, minimum_stock_quantity=request.minimum_stock_quantity),
            )
            await self.categories.commit()
        except STORAGE_ERRORS as e:
            logger.exception("Failed to create category")
            return Result.failure(f"An error occurred while creating the category: {e}")

        await self._invalidate()
        logger.info(f"Category {category.id} ({name}) created")
        return Result.success(CategoryDto.model_validate(category))


class UpdateCategoryHandler(_CategoryWriteHandler):
    """Partial update; a changed minimum recomputes liveness of the category's products."""

    validator = UpdateCategoryValidator()

    async def handle(self, request: UpdateCategoryCommand) -> Result[CategoryDto]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        try:
            category = await self.categories.get_by_id(request.id)
            if category is None:
                return not_found("Category", request.id)

            if request.name is not None:
                name = request.name.strip()
                if await self._name_taken(name, exclude=category):
                    return duplicate_name(name)
                category.name = name

            minimum_changed = (
                request.minimum_stock_quantity is not None
                and request.minimum_stock_quantity != category.minimum_stock_quantity
            )
            if minimum_changed:
                category.minimum_stock_quantity = request.minimum_stock_quantity

            category.touch()
            category = await self.categories.update(category)

            if minimum_changed:
                for product in await self.products.get_by_category(category.id):
                    was_live = product.is_live
                    if product.refresh_liveness(category) != was_live:
                        product.touch()
                        await self.products.update(product)
            # Both repositories share the request session
            await self.categories.commit()
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to update category {request.id}")
            return Result.failure(f"An error occurred while updating the category: {e}")

        await self._invalidate()
        logger.info(f"Category {category.id} updated")
        return Result.success(CategoryDto.model_validate(category))


class DeleteCategoryHandler(_CategoryWriteHandler):
    validator = DeleteCategoryValidator()

    async def handle(self, request: DeleteCategoryCommand) -> Result[bool]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        try:
            category = await self.categories.get_by_id(request.id)
            if category is None:
                return not_found("Category", request.id)

            product_count = await self.products.count_by_category(category.id)
            if product_count:
                return Result.failure(
                    f"Category with ID {request.id} still has {product_count} products.",
                )
            await self.categories.delete(category)
            await self.categories.commit()
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to delete category {request.id}")
            return Result.failure(f"An error occurred while deleting the category: {e}")

        await self._invalidate()
        logger.info(f"Category {request.id} deleted")
        return Result.success(True)
