"""
PWAcommerce Backend - Catalog Service Unit Tests
==================================================

What we test:
    ✅ Exact resource paths and query shapes for every catalog call
    ✅ Category listing never triggers the featured/fallback calls
    ✅ A non-empty featured list (even of one product) suppresses the fallback
    ✅ An empty featured list triggers exactly one fallback call
    ✅ Store errors propagate unchanged
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, call

from pwacommerce.services.catalog_service import CatalogService


@pytest.fixture
def client():
    client = MagicMock()
    client.get = AsyncMock()
    return client


class TestListProducts:

    def setup_method(self):
        self.service = CatalogService()

    @pytest.mark.asyncio
    async def test_category_issues_single_category_query(self, client):
        client.get.return_value = [{"id": 11}]

        result = await self.service.list_products(client, category_id=5)

        assert result == [{"id": 11}]
        client.get.assert_awaited_once_with(
            "products",
            {"category": 5, "per_page": 100, "orderby": "date"},
        )

    @pytest.mark.asyncio
    async def test_empty_category_does_not_fall_back(self, client):
        client.get.return_value = []

        result = await self.service.list_products(client, category_id=5)

        assert result == []
        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_single_featured_product_suppresses_fallback(self, client):
        client.get.return_value = [{"id": 1, "featured": True}]

        result = await self.service.list_products(client)

        assert result == [{"id": 1, "featured": True}]
        client.get.assert_awaited_once_with(
            "products",
            {"featured": True, "per_page": 100, "orderby": "date"},
        )

    @pytest.mark.asyncio
    async def test_empty_featured_falls_back_to_latest_ten(self, client):
        latest = [{"id": n} for n in range(10)]
        client.get.side_effect = [[], latest]

        result = await self.service.list_products(client)

        assert result == latest
        assert client.get.await_args_list == [
            call("products", {"featured": True, "per_page": 100, "orderby": "date"}),
            call("products", {"per_page": 10, "orderby": "date"}),
        ]

    @pytest.mark.asyncio
    async def test_category_zero_is_still_a_category(self, client):
        """categId=0 is present, so it takes the category branch."""
        client.get.return_value = []

        await self.service.list_products(client, category_id=0)

        client.get.assert_awaited_once_with(
            "products",
            {"category": 0, "per_page": 100, "orderby": "date"},
        )


class TestPassthroughQueries:

    def setup_method(self):
        self.service = CatalogService()

    @pytest.mark.asyncio
    async def test_categories(self, client):
        client.get.return_value = [{"id": 3, "name": "Shirts"}]

        result = await self.service.list_categories(client)

        assert result == [{"id": 3, "name": "Shirts"}]
        client.get.assert_awaited_once_with("products/categories", {"per_page": 100})

    @pytest.mark.asyncio
    async def test_single_product(self, client):
        client.get.return_value = {"id": 42}

        result = await self.service.get_product(client, 42)

        assert result == {"id": 42}
        client.get.assert_awaited_once_with("products/42")

    @pytest.mark.asyncio
    async def test_reviews(self, client):
        await self.service.list_reviews(client, 42)
        client.get.assert_awaited_once_with(
            "products/42/reviews",
            {"per_page": 100, "orderby": "date"},
        )

    @pytest.mark.asyncio
    async def test_variations(self, client):
        await self.service.list_variations(client, 42)
        client.get.assert_awaited_once_with("products/42/variations", {"per_page": 100})

    @pytest.mark.asyncio
    async def test_store_error_propagates_unchanged(self, client):
        request = httpx.Request("GET", "https://shop.test/wp-json/wc/v2/products/9")
        error = httpx.HTTPStatusError(
            "404 Not Found",
            request=request,
            response=httpx.Response(404, request=request),
        )
        client.get.side_effect = error

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await self.service.get_product(client, 9)

        assert exc_info.value is error
