"""
PWAcommerce Backend - Shared Route Dependencies
=================================================

What:  FastAPI dependencies that give handlers their per-request
       collaborators: the options snapshot, the store client and the cart.

Per-request lifecycle:
    get_store_options          one options query per request; FastAPI caches
        │                      the result, so every dependency below shares it
        ├── require_credentials     404 when key or secret is missing
        ├── get_commerce_client     built only by handlers that need it,
        │                           closed when the response is sent
        └── get_cart_service        session cart bound to the request cookie
"""

import hmac
import logging
from typing import AsyncGenerator, Optional

from fastapi import Cookie, Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from pwacommerce.config import settings
from pwacommerce.database import get_db_session
from pwacommerce.exceptions import AuthorizationError
from pwacommerce.schemas.store import StoreOptions
from pwacommerce.services.cart_base import CartService
from pwacommerce.services.commerce_client import CommerceClient
from pwacommerce.services.options_service import options_service
from pwacommerce.services.session_cart import CART_COOKIE_NAME, SessionCartService

logger = logging.getLogger(__name__)


async def get_store_options(db: AsyncSession = Depends(get_db_session)) -> StoreOptions:
    return await options_service.load(db)


async def require_credentials(options: StoreOptions = Depends(get_store_options)) -> None:
    """
    Make the commerce endpoints indistinguishable from unknown paths while
    the REST credentials are not configured.

    The raised 404 renders exactly like an unmatched route.
    """
    if not options.has_credentials:
        logger.debug("Store credentials missing; commerce endpoints hidden")
        raise HTTPException(status_code=404, detail="Not Found")


async def get_commerce_client(
    options: StoreOptions = Depends(get_store_options),
) -> AsyncGenerator[CommerceClient, None]:
    async with CommerceClient(
        settings.site_url,
        options.consumer_key,
        options.consumer_secret,
        version=settings.api_version,
        wp_api=settings.wp_api,
        verify_ssl=settings.verify_ssl,
        query_string_auth=settings.query_string_auth,
    ) as client:
        yield client


async def get_cart_service(
    db: AsyncSession = Depends(get_db_session),
    cart_session: Optional[str] = Cookie(default=None, alias=CART_COOKIE_NAME),
) -> CartService:
    return SessionCartService(
        db=db,
        checkout_url=settings.default_checkout_url,
        session_id=cart_session,
    )


async def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """
    Gate for the admin router.

    No ADMIN_API_KEY configured → 404 (the admin surface does not exist).
    Wrong or missing header    → 403 AuthorizationError.
    """
    if not settings.admin_api_key:
        raise HTTPException(status_code=404, detail="Not Found")
    if x_admin_key is None or not hmac.compare_digest(
        x_admin_key.encode("utf-8"), settings.admin_api_key.encode("utf-8")
    ):
        raise AuthorizationError()
