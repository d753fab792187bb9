"""
PWAcommerce Backend - Catalog Service
=======================================

What:  Read-only catalog queries forwarded to the store's REST API.
How:   Each method issues fixed resource paths and query parameters through
       a CommerceClient and returns the decoded JSON unchanged.
Who:   Called by the commerce routes; the client is injected per request.

Product listing policy (list_products):
    1. category given    → latest 100 products of that category
    2. no category       → latest 100 featured products
    3. featured is empty → latest 10 products of the whole store

    A featured list with a single product still suppresses step 3.
"""

import logging
from typing import Any, Optional

from pwacommerce.services.commerce_client import CommerceClient

logger = logging.getLogger(__name__)

# Largest page the store API serves in one call
PAGE_SIZE = 100

# How many recent products stand in for an empty featured list
FALLBACK_PAGE_SIZE = 10


class CatalogService:
    """Stateless; one instance is shared by all requests."""

    async def list_categories(self, client: CommerceClient) -> Any:
        return await client.get("products/categories", {"per_page": PAGE_SIZE})

    async def list_products(
        self,
        client: CommerceClient,
        category_id: Optional[int] = None,
    ) -> Any:
        """
        Return the product list for the storefront's home or a category page.

        Exactly one remote call when category_id is given; otherwise one call,
        plus a second one only when the featured list comes back empty.
        """
        if category_id is not None:
            return await client.get(
                "products",
                {"category": category_id, "per_page": PAGE_SIZE, "orderby": "date"},
            )

        featured = await client.get(
            "products",
            {"featured": True, "per_page": PAGE_SIZE, "orderby": "date"},
        )
        if featured:
            return featured

        logger.info("No featured products; falling back to the %d latest", FALLBACK_PAGE_SIZE)
        return await client.get(
            "products",
            {"per_page": FALLBACK_PAGE_SIZE, "orderby": "date"},
        )

    async def get_product(self, client: CommerceClient, product_id: int) -> Any:
        return await client.get(f"products/{product_id}")

    async def list_reviews(self, client: CommerceClient, product_id: int) -> Any:
        return await client.get(
            f"products/{product_id}/reviews",
            {"per_page": PAGE_SIZE, "orderby": "date"},
        )

    async def list_variations(self, client: CommerceClient, product_id: int) -> Any:
        return await client.get(
            f"products/{product_id}/variations",
            {"per_page": PAGE_SIZE},
        )


catalog_service = CatalogService()
