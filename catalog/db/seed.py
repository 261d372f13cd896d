"""Initial category data for a fresh database."""

from logging import getLogger

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.configs import SEED_CATEGORIES, file_logger
from catalog.models import CategoryDB
from catalog.repositories.category import CategoryRepository

logger = file_logger(getLogger(__name__))


async def seed_categories(session: AsyncSession) -> int:
    """
    Insert the default categories when the table is empty.

    Returns:
        Number of categories inserted (0 when data already exists).
    """
    repository = CategoryRepository(session)
    if await repository.count():
        return 0

    for name, minimum in SEED_CATEGORIES:
        await repository.add(CategoryDB(name=name, minimum_stock_quantity=minimum))
    logger.info("Seeded %d categories.", len(SEED_CATEGORIES))
    return len(SEED_CATEGORIES)
