"""Pieces shared by the product and category handlers."""

from collections.abc import Iterable
from logging import getLogger

from sqlalchemy.exc import SQLAlchemyError

from catalog.configs import file_logger
from catalog.errors.database import DatabaseError
from catalog.managers.cache_manager import CacheManager
from catalog.models import ProductDB
from catalog.schemas.product import GetFilteredProductsQuery
from catalog.schemas.result import Result
from catalog.utils.cache_keys import CacheKeyGenerator
from catalog.validators.base import ValidationResult

logger = file_logger(getLogger(__name__))

# What a repository may raise; anything else is a bug and propagates
STORAGE_ERRORS = (DatabaseError, SQLAlchemyError, OSError)

VALIDATION_FAILED = "Validation failed"


def validation_failure(result: ValidationResult) -> Result:
    return Result.failure(VALIDATION_FAILED, result.messages)


def not_found(entity: str, entity_id: object) -> Result:
    return Result.failure(f"{entity} with ID {entity_id} not found.")


async def invalidate(
    cache: CacheManager,
    keys: CacheKeyGenerator,
    namespaces: Iterable[str],
) -> None:
    """
    Drop every cached entry of ``namespaces`` once a write has committed.

    A failed invalidation is logged and never fails the write; the stale
    entries expire with their TTL.
    """
    for namespace in namespaces:
        pattern = keys.namespace_pattern(namespace)
        if not await cache.remove_by_pattern(pattern):
            logger.warning("Cache invalidation failed for pattern '%s'", pattern)


def matches(product: ProductDB, query: GetFilteredProductsQuery) -> bool:
    """
    Whether ``product`` satisfies every filter set on ``query``.

    Search is a case-insensitive substring match over title, description and
    category name; stock bounds are inclusive.
    """
    if query.search_term and query.search_term.strip():
        needle = query.search_term.strip().casefold()
        category_name = product.category.name if product.category else ""
        haystacks = (product.title, product.description or "", category_name)
        if not any(needle in h.casefold() for h in haystacks):
            return False
    if query.min_stock_quantity is not None and product.stock_quantity < query.min_stock_quantity:
        return False
    if query.max_stock_quantity is not None and product.stock_quantity > query.max_stock_quantity:
        return False
    if query.is_live is not None and product.is_live != query.is_live:
        return False
    return query.category_id is None or product.category_id == query.category_id
