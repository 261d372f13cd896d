"""Category repository."""

from sqlalchemy import func, select

from catalog.models import CategoryDB
from catalog.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    model = CategoryDB
    order_by = ("name",)

    async def get_by_name(self, name: str) -> CategoryDB | None:
        """Case-insensitive lookup; names are unique regardless of case."""
        statement = select(CategoryDB).where(func.lower(CategoryDB.name) == name.strip().lower())
        return (await self.session.execute(statement)).scalars().first()

    async def get_by_minimum_stock_quantity(self, quantity: int) -> list[CategoryDB]:
        """Categories whose minimum stock is at most ``quantity``."""
        statement = (
            select(CategoryDB)
            .where(CategoryDB.minimum_stock_quantity <= quantity)
            .order_by(*self._ordering())
        )
        return list((await self.session.execute(statement)).scalars().all())
