# tests/conftest.py
"""Root pytest configuration, in-memory repositories and shared fixtures."""

import os

# Settings are read at import time, so these must be set before catalog is imported
os.environ["LOG_TO_FILE"] = "false"
os.environ["REDIS_ENABLED"] = "false"
os.environ["SEED_DATA"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LIMITER_ENABLED"] = "false"

from collections import Counter  # noqa: E402
from collections.abc import AsyncGenerator, Callable  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from catalog.clients import MemoryClient  # noqa: E402
from catalog.configs import CacheConfig  # noqa: E402
from catalog.dependencies import get_category_repository, get_product_repository  # noqa: E402
from catalog.errors import DatabaseConnectionError  # noqa: E402
from catalog.handlers import Mediator, build_mediator  # noqa: E402
from catalog.main import app  # noqa: E402
from catalog.managers.cache_manager import CacheManager  # noqa: E402
from catalog.managers.rate_limiter import limiter  # noqa: E402
from catalog.models import CategoryDB, ProductDB  # noqa: E402
from catalog.utils.cache_keys import CacheKeyGenerator  # noqa: E402


class FakeCategoryRepository:
    """Dict-backed category storage that counts reads and commits."""

    def __init__(self) -> None:
        self.rows: dict[UUID, CategoryDB] = {}
        self.calls: Counter[str] = Counter()

    async def get_by_id(self, record_id: UUID) -> CategoryDB | None:
        self.calls["get_by_id"] += 1
        return self.rows.get(record_id)

    async def get_all(self) -> list[CategoryDB]:
        self.calls["get_all"] += 1
        return sorted(self.rows.values(), key=lambda c: c.name)

    async def add(self, record: CategoryDB) -> CategoryDB:
        self.rows[record.id] = record
        return record

    async def update(self, record: CategoryDB) -> CategoryDB:
        self.rows[record.id] = record
        return record

    async def delete(self, record: CategoryDB) -> None:
        self.rows.pop(record.id, None)

    async def commit(self) -> None:
        self.calls["commit"] += 1

    async def get_by_name(self, name: str) -> CategoryDB | None:
        wanted = name.strip().lower()
        return next((c for c in self.rows.values() if c.name.lower() == wanted), None)

    async def get_by_minimum_stock_quantity(self, quantity: int) -> list[CategoryDB]:
        return [c for c in self.rows.values() if c.minimum_stock_quantity <= quantity]


class FakeProductRepository:
    """Dict-backed product storage; resolves ``product.category`` like the eager load."""

    def __init__(self, categories: FakeCategoryRepository) -> None:
        self.categories = categories
        self.rows: dict[UUID, ProductDB] = {}
        self.calls: Counter[str] = Counter()

    def _load(self, product: ProductDB) -> ProductDB:
        product.category = self.categories.rows.get(product.category_id)
        return product

    async def get_by_id(self, record_id: UUID) -> ProductDB | None:
        self.calls["get_by_id"] += 1
        product = self.rows.get(record_id)
        return self._load(product) if product else None

    async def get_all(self) -> list[ProductDB]:
        self.calls["get_all"] += 1
        return [self._load(p) for p in sorted(self.rows.values(), key=lambda p: p.created_at)]

    async def add(self, record: ProductDB) -> ProductDB:
        self.rows[record.id] = record
        return self._load(record)

    async def update(self, record: ProductDB) -> ProductDB:
        self.calls["update"] += 1
        self.rows[record.id] = record
        return self._load(record)

    async def delete(self, record: ProductDB) -> None:
        self.rows.pop(record.id, None)

    async def commit(self) -> None:
        self.calls["commit"] += 1

    async def get_by_category(self, category_id: UUID) -> list[ProductDB]:
        return [self._load(p) for p in self.rows.values() if p.category_id == category_id]

    async def get_live_products(self) -> list[ProductDB]:
        return [self._load(p) for p in self.rows.values() if p.is_live]

    async def get_by_stock_quantity(
        self,
        min_quantity: int | None = None,
        max_quantity: int | None = None,
    ) -> list[ProductDB]:
        return [
            self._load(p)
            for p in self.rows.values()
            if (min_quantity is None or p.stock_quantity >= min_quantity)
            and (max_quantity is None or p.stock_quantity <= max_quantity)
        ]

    async def count_by_category(self, category_id: UUID) -> int:
        return sum(1 for p in self.rows.values() if p.category_id == category_id)


class BrokenProductRepository(FakeProductRepository):
    """Every read fails as if the database were down."""

    async def get_by_id(self, record_id: UUID) -> ProductDB | None:
        raise DatabaseConnectionError("connection refused")

    async def get_all(self) -> list[ProductDB]:
        raise DatabaseConnectionError("connection refused")


@pytest.fixture
def categories() -> FakeCategoryRepository:
    return FakeCategoryRepository()


@pytest.fixture
def products(categories: FakeCategoryRepository) -> FakeProductRepository:
    return FakeProductRepository(categories)


@pytest.fixture
def keys() -> CacheKeyGenerator:
    return CacheKeyGenerator()


@pytest.fixture
async def cache() -> AsyncGenerator[CacheManager]:
    manager = CacheManager(
        CacheConfig(key_prefix="test"),
        memory_client=MemoryClient(),
        redis_enabled=False,
    )
    await manager.initialize()
    yield manager
    await manager.shutdown()


@pytest.fixture
def failing_client() -> AsyncMock:
    """Transport whose every command fails with a connection error."""
    client = AsyncMock()
    for name in ("get", "set", "delete", "delete_pattern", "exists", "ttl", "ping", "info"):
        getattr(client, name).side_effect = ConnectionError("cache down")
    return client


@pytest.fixture
def unreachable_cache(failing_client: AsyncMock) -> CacheManager:
    """Cache manager stuck on a dead transport; nothing falls back to memory."""
    return CacheManager(CacheConfig(key_prefix="test"), client=failing_client, redis_enabled=False)


@pytest.fixture
def mediator(
    products: FakeProductRepository,
    categories: FakeCategoryRepository,
    cache: CacheManager,
    keys: CacheKeyGenerator,
) -> Mediator:
    return build_mediator(products, categories, cache, keys)


@pytest.fixture
def electronics(categories: FakeCategoryRepository) -> CategoryDB:
    category = CategoryDB(name="Electronics", minimum_stock_quantity=10)
    categories.rows[category.id] = category
    return category


@pytest.fixture
def books(categories: FakeCategoryRepository) -> CategoryDB:
    category = CategoryDB(name="Books", minimum_stock_quantity=500)
    categories.rows[category.id] = category
    return category


@pytest.fixture
def broken_products(categories: FakeCategoryRepository) -> BrokenProductRepository:
    return BrokenProductRepository(categories)


@pytest.fixture
def broken_mediator(
    broken_products: BrokenProductRepository,
    categories: FakeCategoryRepository,
    cache: CacheManager,
    keys: CacheKeyGenerator,
) -> Mediator:
    """Mediator whose product repository cannot reach the database."""
    return build_mediator(broken_products, categories, cache, keys)


@pytest.fixture
def degraded_mediator(
    products: FakeProductRepository,
    categories: FakeCategoryRepository,
    unreachable_cache: CacheManager,
    keys: CacheKeyGenerator,
) -> Mediator:
    """Mediator whose every cache call fails."""
    return build_mediator(products, categories, unreachable_cache, keys)


@pytest.fixture
def use_repositories() -> Callable[[Any, Any], None]:
    """Swap the SQL repositories of the app for the given in-memory ones."""

    def override(products: Any, categories: Any) -> None:
        app.dependency_overrides[get_product_repository] = lambda: products
        app.dependency_overrides[get_category_repository] = lambda: categories

    return override


@pytest.fixture
async def client(
    products: FakeProductRepository,
    categories: FakeCategoryRepository,
    cache: CacheManager,
    use_repositories: Callable[[Any, Any], None],
) -> AsyncGenerator[AsyncClient]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    The lifespan is skipped: the cache manager is installed on ``app.state``
    directly and no database is opened.
    """
    limiter.enabled = False
    app.state.cache_manager = cache
    use_repositories(products, categories)
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
