"""Handlers keep answering from the repositories while every cache call fails."""

from unittest.mock import AsyncMock

import pytest

from catalog.handlers import Mediator
from catalog.models import CategoryDB, ProductDB
from catalog.repositories.protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol
from catalog.schemas import (
    CreateCategoryCommand,
    CreateProductCommand,
    DeleteCategoryCommand,
    DeleteProductCommand,
    GetAllCategoriesQuery,
    GetAllProductsQuery,
    GetFilteredProductsQuery,
    UpdateCategoryCommand,
    UpdateProductCommand,
)


@pytest.fixture
def keyboard(products: ProductRepositoryProtocol, electronics: CategoryDB) -> ProductDB:
    product = ProductDB(title="Keyboard", category_id=electronics.id, stock_quantity=30)
    product.refresh_liveness(electronics)
    products.rows[product.id] = product
    return product


class TestProductWritesWithoutCache:
    @pytest.mark.asyncio
    async def test_create(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        electronics: CategoryDB,
        failing_client: AsyncMock,
    ) -> None:
        result = await degraded_mediator.send(
            CreateProductCommand(title="Webcam", category_id=electronics.id, stock_quantity=12),
        )

        assert result.is_success
        assert result.data.is_live is True
        assert result.data.id in products.rows
        assert products.calls["commit"] == 1
        failing_client.delete_pattern.assert_awaited()

    @pytest.mark.asyncio
    async def test_update(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        keyboard: ProductDB,
    ) -> None:
        result = await degraded_mediator.send(UpdateProductCommand(id=keyboard.id, stock_quantity=4))

        assert result.is_success
        assert result.data.stock_quantity == 4
        assert products.rows[keyboard.id].is_live is False

    @pytest.mark.asyncio
    async def test_delete(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        keyboard: ProductDB,
    ) -> None:
        result = await degraded_mediator.send(DeleteProductCommand(id=keyboard.id))

        assert result.data is True
        assert products.rows == {}


class TestCategoryWritesWithoutCache:
    @pytest.mark.asyncio
    async def test_create(
        self,
        degraded_mediator: Mediator,
        categories: CategoryRepositoryProtocol,
        failing_client: AsyncMock,
    ) -> None:
        result = await degraded_mediator.send(CreateCategoryCommand(name="Garden", minimum_stock_quantity=5))

        assert result.is_success
        assert result.data.id in categories.rows
        assert categories.calls["commit"] == 1
        # Both namespaces were attempted even though the first one failed
        assert failing_client.delete_pattern.await_count == 2

    @pytest.mark.asyncio
    async def test_update_recomputes_liveness(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        electronics: CategoryDB,
        keyboard: ProductDB,
    ) -> None:
        result = await degraded_mediator.send(
            UpdateCategoryCommand(id=electronics.id, minimum_stock_quantity=50),
        )

        assert result.is_success
        assert result.data.minimum_stock_quantity == 50
        assert products.rows[keyboard.id].is_live is False

    @pytest.mark.asyncio
    async def test_delete(
        self,
        degraded_mediator: Mediator,
        categories: CategoryRepositoryProtocol,
        books: CategoryDB,
    ) -> None:
        result = await degraded_mediator.send(DeleteCategoryCommand(id=books.id))

        assert result.data is True
        assert books.id not in categories.rows


class TestListReadsWithoutCache:
    @pytest.mark.asyncio
    async def test_all_products_come_from_repository(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        keyboard: ProductDB,
    ) -> None:
        for _ in range(2):
            result = await degraded_mediator.send(GetAllProductsQuery())
            assert [p.title for p in result.data] == ["Keyboard"]
        assert products.calls["get_all"] == 2

    @pytest.mark.asyncio
    async def test_filtered_products_come_from_repository(
        self,
        degraded_mediator: Mediator,
        products: ProductRepositoryProtocol,
        keyboard: ProductDB,
    ) -> None:
        query = GetFilteredProductsQuery(search_term="key", is_live=True)
        for _ in range(2):
            result = await degraded_mediator.send(query)
            assert [p.title for p in result.data.data] == ["Keyboard"]
        assert products.calls["get_all"] == 2

    @pytest.mark.asyncio
    async def test_category_pages_come_from_repository(
        self,
        degraded_mediator: Mediator,
        categories: CategoryRepositoryProtocol,
        electronics: CategoryDB,
        books: CategoryDB,
    ) -> None:
        for _ in range(2):
            result = await degraded_mediator.send(GetAllCategoriesQuery(page=1, page_size=10))
            assert [c.name for c in result.data.data] == ["Books", "Electronics"]
        assert categories.calls["get_all"] == 2

    @pytest.mark.asyncio
    async def test_read_after_write_sees_the_write(
        self,
        degraded_mediator: Mediator,
        keyboard: ProductDB,
    ) -> None:
        await degraded_mediator.send(GetAllProductsQuery())
        await degraded_mediator.send(UpdateProductCommand(id=keyboard.id, title="Mechanical Keyboard"))

        result = await degraded_mediator.send(GetAllProductsQuery())
        assert [p.title for p in result.data] == ["Mechanical Keyboard"]
