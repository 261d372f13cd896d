"""Storage contracts the handlers depend on."""

from typing import Protocol, runtime_checkable
from uuid import UUID

from catalog.models import CategoryDB, ProductDB


@runtime_checkable
class ProductRepositoryProtocol(Protocol):
    async def get_by_id(self, record_id: UUID) -> ProductDB | None: ...

    async def get_all(self) -> list[ProductDB]: ...

    async def add(self, record: ProductDB) -> ProductDB: ...

    async def update(self, record: ProductDB) -> ProductDB: ...

    async def delete(self, record: ProductDB) -> None: ...

    async def commit(self) -> None: ...

    async def get_by_category(self, category_id: UUID) -> list[ProductDB]: ...

    async def get_live_products(self) -> list[ProductDB]: ...

    async def get_by_stock_quantity(
        self,
        min_quantity: int | None = None,
        max_quantity: int | None = None,
    ) -> list[ProductDB]: ...

    async def count_by_category(self, category_id: UUID) -> int: ...


@runtime_checkable
class CategoryRepositoryProtocol(Protocol):
    async def get_by_id(self, record_id: UUID) -> CategoryDB | None: ...

    async def get_all(self) -> list[CategoryDB]: ...

    async def add(self, record: CategoryDB) -> CategoryDB: ...

    async def update(self, record: CategoryDB) -> CategoryDB: ...

    async def delete(self, record: CategoryDB) -> None: ...

    async def commit(self) -> None: ...

    async def get_by_name(self, name: str) -> CategoryDB | None: ...

    async def get_by_minimum_stock_quantity(self, quantity: int) -> list[CategoryDB]: ...
