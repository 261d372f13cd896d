"""FastAPI dependency providers."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.database import get_session
from catalog.handlers import Mediator, build_mediator
from catalog.managers.cache_manager import CacheManager
from catalog.repositories import CategoryRepository, ProductRepository
from catalog.utils.cache_keys import CacheKeyGenerator

cache_keys = CacheKeyGenerator()


def get_cache_manager(request: Request) -> CacheManager:
    """The application-wide cache manager created in the lifespan."""
    return request.app.state.cache_manager


def get_product_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductRepository:
    return ProductRepository(session)


def get_category_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryRepository:
    return CategoryRepository(session)


def get_mediator(
    products: Annotated[ProductRepository, Depends(get_product_repository)],
    categories: Annotated[CategoryRepository, Depends(get_category_repository)],
    cache: Annotated[CacheManager, Depends(get_cache_manager)],
) -> Mediator:
    return build_mediator(products, categories, cache, cache_keys)


CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]
MediatorDep = Annotated[Mediator, Depends(get_mediator)]
