"""Tests for the category endpoints."""

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from catalog.models import CategoryDB

CATEGORIES = "/api/v1/categories"
PRODUCTS = "/api/v1/products"


class TestCreateCategory:
    @pytest.mark.asyncio
    async def test_created(self, client: AsyncClient) -> None:
        response = await client.post(CATEGORIES, json={"name": "Garden", "minimumStockQuantity": 3})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Garden"
        assert data["minimumStockQuantity"] == 3
        assert response.headers["location"] == f"{CATEGORIES}/{data['id']}"

    @pytest.mark.asyncio
    async def test_duplicate_name_case_insensitive(
        self,
        client: AsyncClient,
        electronics: CategoryDB,
    ) -> None:
        response = await client.post(CATEGORIES, json={"name": "ELECTRONICS"})

        assert response.status_code == 400
        assert "already exists" in response.json()["errorMessage"]

    @pytest.mark.asyncio
    async def test_invalid(self, client: AsyncClient) -> None:
        response = await client.post(CATEGORIES, json={"name": "", "minimumStockQuantity": -5})

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert "Name is required." in errors
        assert "Minimum stock quantity cannot be negative." in errors


class TestReadCategories:
    @pytest.mark.asyncio
    async def test_paged_list(self, client: AsyncClient, electronics: CategoryDB, books: CategoryDB) -> None:
        response = await client.get(CATEGORIES, params={"page": 1, "pageSize": 1})

        assert response.status_code == 200
        page = response.json()["data"]
        assert len(page["data"]) == 1
        assert page["metadata"]["totalCount"] == 2
        assert page["metadata"]["totalPages"] == 2
        assert page["metadata"]["nextPage"] == 2

    @pytest.mark.asyncio
    async def test_get_by_id(self, client: AsyncClient, books: CategoryDB) -> None:
        response = await client.get(f"{CATEGORIES}/{books.id}")

        assert response.status_code == 200
        assert response.json()["data"]["minimumStockQuantity"] == 500

    @pytest.mark.asyncio
    async def test_get_unknown(self, client: AsyncClient) -> None:
        assert (await client.get(f"{CATEGORIES}/{uuid4()}")).status_code == 404


class TestWriteCategories:
    @pytest.mark.asyncio
    async def test_new_minimum_reevaluates_products(
        self,
        client: AsyncClient,
        electronics: CategoryDB,
    ) -> None:
        created = await client.post(
            PRODUCTS,
            json={"title": "Mouse", "categoryId": str(electronics.id), "stockQuantity": 15},
        )
        product_id = created.json()["data"]["id"]
        assert created.json()["data"]["isLive"] is True

        response = await client.put(f"{CATEGORIES}/{electronics.id}", json={"minimumStockQuantity": 20})
        assert response.status_code == 200

        product = (await client.get(f"{PRODUCTS}/{product_id}")).json()["data"]
        assert product["isLive"] is False

    @pytest.mark.asyncio
    async def test_rename_shows_on_products(
        self,
        client: AsyncClient,
        electronics: CategoryDB,
    ) -> None:
        created = await client.post(PRODUCTS, json={"title": "Mouse", "categoryId": str(electronics.id)})
        product_id = created.json()["data"]["id"]
        await client.get(f"{PRODUCTS}/{product_id}")

        await client.put(f"{CATEGORIES}/{electronics.id}", json={"name": "Gadgets"})

        product = (await client.get(f"{PRODUCTS}/{product_id}")).json()["data"]
        assert product["categoryName"] == "Gadgets"

    @pytest.mark.asyncio
    async def test_update_unknown(self, client: AsyncClient) -> None:
        assert (await client.put(f"{CATEGORIES}/{uuid4()}", json={"name": "X"})).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_empty(self, client: AsyncClient, books: CategoryDB, categories: Any) -> None:
        response = await client.delete(f"{CATEGORIES}/{books.id}")

        assert response.status_code == 200
        assert response.json()["data"] is True
        assert books.id not in categories.rows

    @pytest.mark.asyncio
    async def test_delete_in_use(self, client: AsyncClient, electronics: CategoryDB) -> None:
        await client.post(PRODUCTS, json={"title": "Mouse", "categoryId": str(electronics.id)})

        response = await client.delete(f"{CATEGORIES}/{electronics.id}")

        assert response.status_code == 400
        assert "still has 1 products" in response.json()["errorMessage"]
