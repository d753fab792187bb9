"""
PWAcommerce Backend - Commerce Route Handlers
===============================================

What:  The storefront endpoints under the API namespace (default /pwacommerce).
How:   build_commerce_router() assembles them once, at app creation. Every
       endpoint carries the require_credentials gate, so while the REST
       credentials are missing all seven answer the generic 404.

Route Inventory:
    GET  /export-manifest            web app manifest
    GET  /categories                 store passthrough
    GET  /products?categId=N         store passthrough (category/featured/latest)
    GET  /product/{id}               store passthrough
    GET  /reviews/{id}               store passthrough
    GET  /product-variations/{id}    store passthrough
    POST /proceed-checkout           fill the session cart, 302 to checkout

Any other path or method under the namespace gets the same plain 404 as
an unknown URL, including ids that are not all digits.

Store errors are not caught here; they reach the global catch-all handler.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from pwacommerce.config import settings
from pwacommerce.routes.dependencies import (
    get_cart_service,
    get_commerce_client,
    get_store_options,
    require_credentials,
)
from pwacommerce.schemas.store import StoreOptions
from pwacommerce.services.cart_base import CartService
from pwacommerce.services.catalog_service import catalog_service
from pwacommerce.services.checkout_service import checkout_service
from pwacommerce.services.commerce_client import CommerceClient
from pwacommerce.services.manifest_service import manifest_service
from pwacommerce.services.session_cart import CART_COOKIE_MAX_AGE, CART_COOKIE_NAME

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# OPTIONS stays with the CORS middleware
UNROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


async def read_items_field(request: Request) -> Any:
    """
    Raw `items` value of a checkout request.

    Looked up in the JSON body, then the form body, then the query string.
    Returns None when no source carries the field.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "items" in body:
            return body["items"]
    elif content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        if "items" in form:
            return form["items"]

    return request.query_params.get("items")


def build_commerce_router() -> APIRouter:
    """Create the commerce router; called once by create_app()."""
    router = APIRouter(
        prefix=settings.api_namespace,
        tags=["Commerce"],
        dependencies=[Depends(require_credentials)],
    )

    @router.get("/export-manifest", summary="Web app manifest")
    async def export_manifest(
        options: StoreOptions = Depends(get_store_options),
    ) -> JSONResponse:
        manifest = manifest_service.build_manifest(options)
        return JSONResponse(content=manifest.export())

    @router.get("/categories", summary="Latest 100 product categories")
    async def view_categories(
        client: CommerceClient = Depends(get_commerce_client),
    ) -> Any:
        return await catalog_service.list_categories(client)

    @router.get(
        "/products",
        summary="Products of a category, or featured/latest products",
        description=(
            "With categId: the latest 100 products of that category. Without it: "
            "the latest 100 featured products, or the latest 10 products when "
            "nothing is featured."
        ),
    )
    async def view_products(
        categ_id: Optional[int] = Query(default=None, alias="categId"),
        client: CommerceClient = Depends(get_commerce_client),
    ) -> Any:
        return await catalog_service.list_products(client, category_id=categ_id)

    # int convertor: an id that is not all digits matches no route (plain 404)
    @router.get("/product/{product_id:int}", summary="One product")
    async def view_product(
        product_id: int,
        client: CommerceClient = Depends(get_commerce_client),
    ) -> Any:
        return await catalog_service.get_product(client, product_id)

    @router.get("/reviews/{product_id:int}", summary="Latest 100 reviews of a product")
    async def view_reviews(
        product_id: int,
        client: CommerceClient = Depends(get_commerce_client),
    ) -> Any:
        return await catalog_service.list_reviews(client, product_id)

    @router.get("/product-variations/{product_id:int}", summary="Variations of a product")
    async def view_product_variations(
        product_id: int,
        client: CommerceClient = Depends(get_commerce_client),
    ) -> Any:
        return await catalog_service.list_variations(client, product_id)

    @router.post(
        "/proceed-checkout",
        status_code=302,
        summary="Add the posted items to the cart and redirect to checkout",
        response_class=RedirectResponse,
    )
    async def checkout_redirect(
        request: Request,
        cart: CartService = Depends(get_cart_service),
    ) -> RedirectResponse:
        raw_items = await read_items_field(request)
        checkout_url = await checkout_service.fill_cart(cart, raw_items)

        response = RedirectResponse(url=checkout_url, status_code=302)
        if cart.session_id:
            response.set_cookie(
                CART_COOKIE_NAME,
                cart.session_id,
                max_age=CART_COOKIE_MAX_AGE,
                httponly=True,
                samesite="lax",
            )
        return response

    # Registered last: a known path with the wrong method is a plain 404, not a 405
    @router.api_route("/{path:path}", methods=UNROUTED_METHODS, include_in_schema=False)
    async def no_route(path: str) -> None:
        raise HTTPException(status_code=404, detail="Not Found")

    return router
