"""Product repository."""

from uuid import UUID

from sqlalchemy import func, select

from catalog.models import ProductDB
from catalog.repositories.base import BaseRepository


class ProductRepository(BaseRepository[ProductDB]):
    """SQL-backed product storage. The category is eager-loaded with every product."""

    model = ProductDB

    async def _list(self, *criteria: object) -> list[ProductDB]:
        statement = select(ProductDB).where(*criteria).order_by(*self._ordering())
        return list((await self.session.execute(statement)).scalars().all())

    async def get_by_category(self, category_id: UUID) -> list[ProductDB]:
        return await self._list(ProductDB.category_id == category_id)

    async def get_live_products(self) -> list[ProductDB]:
        return await self._list(ProductDB.is_live.is_(True))

    async def get_by_stock_quantity(
        self,
        min_quantity: int | None = None,
        max_quantity: int | None = None,
    ) -> list[ProductDB]:
        """Products whose stock lies within the inclusive bounds given."""
        criteria = []
        if min_quantity is not None:
            criteria.append(ProductDB.stock_quantity >= min_quantity)
        if max_quantity is not None:
            criteria.append(ProductDB.stock_quantity <= max_quantity)
        return await self._list(*criteria)

    async def count_by_category(self, category_id: UUID) -> int:
        statement = (
            select(func.count()).select_from(ProductDB).where(ProductDB.category_id == category_id)
        )
        return (await self.session.execute(statement)).scalar() or 0
