"""Product query and command handlers."""

from logging import getLogger
from uuid import UUID

from catalog.configs import file_logger
from catalog.handlers.base import (
    STORAGE_ERRORS,
    invalidate,
    matches,
    not_found,
    validation_failure,
)
from catalog.managers.cache_manager import CacheManager
from catalog.models import CategoryDB, ProductDB
from catalog.repositories.protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol
from catalog.schemas.pagination import PaginatedResult, paginate
from catalog.schemas.product import (
    CreateProductCommand,
    DeleteProductCommand,
    GetAllProductsQuery,
    GetFilteredProductsQuery,
    GetProductByIdQuery,
    ProductDto,
    UpdateProductCommand,
)
from catalog.schemas.result import Result
from catalog.utils.cache_keys import PRODUCTS, CacheKeyGenerator
from catalog.validators.product import (
    CreateProductValidator,
    DeleteProductValidator,
    FilteredProductsValidator,
    UpdateProductValidator,
)

logger = file_logger(getLogger(__name__))


class _ProductHandler:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        self.products = products
        self.cache = cache
        self.keys = keys
        self.ttl = cache.cache_config.default_ttl


class GetProductByIdHandler(_ProductHandler):
    async def handle(self, request: GetProductByIdQuery) -> Result[ProductDto]:
        key = self.keys.product_by_id_key(request.id)
        try:
            cached = await self.cache.get(key, ProductDto)
            if cached.hit:
                logger.info(f"Product {request.id} served from cache")
                return Result.success(cached.value)

            product = await self.products.get_by_id(request.id)
            if product is None:
                return not_found("Product", request.id)

            dto = ProductDto.from_model(product)
            await self.cache.set(key, dto, self.ttl)
            return Result.success(dto)
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to retrieve product {request.id}")
            return Result.failure(f"An error occurred while retrieving the product: {e}")


class GetAllProductsHandler(_ProductHandler):
    async def handle(self, request: GetAllProductsQuery) -> Result[list[ProductDto]]:  # noqa: ARG002
        async def load() -> list[ProductDto]:
            return [ProductDto.from_model(p) for p in await self.products.get_all()]

        try:
            dtos = await self.cache.get_or_set(
                self.keys.all_products_key(),
                load,
                list[ProductDto],
                self.ttl,
            )
        except STORAGE_ERRORS as e:
            logger.exception("Failed to retrieve products")
            return Result.failure(f"An error occurred while retrieving products: {e}")
        return Result.success(dtos)


class GetFilteredProductsHandler(_ProductHandler):
    """Filters, then paginates; each distinct filter/page combination is cached for 30 minutes."""

    validator = FilteredProductsValidator()

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        super().__init__(products, cache, keys)
        self.ttl = cache.cache_config.filtered_ttl

    async def handle(self, request: GetFilteredProductsQuery) -> Result[PaginatedResult[ProductDto]]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        key = self.keys.product_filter_key(request, request.page, request.page_size)
        try:
            cached = await self.cache.get(key, PaginatedResult[ProductDto])
            if cached.hit:
                logger.info(
                    f"Filtered products served from cache, page {request.page} size {request.page_size}",
                )
                return Result.success(cached.value)

            products = [p for p in await self.products.get_all() if matches(p, request)]
            page = paginate([ProductDto.from_model(p) for p in products], request.page, request.page_size)
            await self.cache.set(key, page, self.ttl)
        except STORAGE_ERRORS as e:
            logger.exception("Failed to retrieve filtered products")
            return Result.failure(f"An error occurred while retrieving products: {e}")

        logger.info(
            f"Filtered products loaded, total {page.metadata.total_count}, "
            f"page {request.page} size {request.page_size}",
        )
        return Result.success(page)


class _ProductWriteHandler(_ProductHandler):
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
        cache: CacheManager,
        keys: CacheKeyGenerator,
    ) -> None:
        super().__init__(products, cache, keys)
        self.categories = categories

    async def _category(self, category_id: UUID) -> CategoryDB | None:
        return await self.categories.get_by_id(category_id)

    async def _invalidate(self) -> None:
        await invalidate(self.cache, self.keys, (PRODUCTS,))


class CreateProductHandler(_ProductWriteHandler):
    validator = CreateProductValidator()

    async def handle(self, request: CreateProductCommand) -> Result[ProductDto]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        try:
            category = await self._category(request.category_id)
            if category is None:
                return not_found("Category", request.category_id)

            product = ProductDB(
                title=request.title.strip(),
                description=request.description,
                category_id=category.id,
                stock_quantity=request.stock_quantity,
            )
            product.refresh_liveness(category)
            product = await self.products.add(product)
            await self.products.commit()
        except STORAGE_ERRORS as e:
            logger.exception("Failed to create product")
            return Result.failure(f"An error occurred while creating the product: {e}")

        await self._invalidate()
        logger.info(f"Product {product.id} created in category {category.name}")
        return Result.success(ProductDto.from_model(product, category.name))


class UpdateProductHandler(_ProductWriteHandler):
    """Partial update: fields left as None keep their stored value."""

    validator = UpdateProductValidator()

    async def handle(self, request: UpdateProductCommand) -> Result[ProductDto]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        try:
            product = await self.products.get_by_id(request.id)
            if product is None:
                return not_found("Product", request.id)

            category_id = request.category_id or product.category_id
            category = await self._category(category_id)
            if category is None:
                return not_found("Category", category_id)

            if request.title is not None:
                product.title = request.title.strip()
            if request.description is not None:
                product.description = request.description
            if request.stock_quantity is not None:
                product.stock_quantity = request.stock_quantity
            product.category_id = category.id
            product.refresh_liveness(category)
            product.touch()
            product = await self.products.update(product)
            await self.products.commit()
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to update product {request.id}")
            return Result.failure(f"An error occurred while updating the product: {e}")

        await self._invalidate()
        logger.info(f"Product {product.id} updated")
        return Result.success(ProductDto.from_model(product, category.name))


class DeleteProductHandler(_ProductHandler):
    validator = DeleteProductValidator()

    async def handle(self, request: DeleteProductCommand) -> Result[bool]:
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return validation_failure(validation)

        try:
            product = await self.products.get_by_id(request.id)
            if product is None:
                return not_found("Product", request.id)
            await self.products.delete(product)
            await self.products.commit()
        except STORAGE_ERRORS as e:
            logger.exception(f"Failed to delete product {request.id}")
            return Result.failure(f"An error occurred while deleting the product: {e}")

        await invalidate(self.cache, self.keys, (PRODUCTS,))
        logger.info(f"Product {request.id} deleted")
        return Result.success(True)
