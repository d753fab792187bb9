"""
PWAcommerce Backend - Session Cart
====================================

What:  Cart lines stored per visitor session in the `cart_items` table.
How:   The session is identified by the pwacommerce_cart_session cookie. A
       visitor without the cookie gets a fresh uuid4 hex id on
       set_cookies(); the route sets the cookie on its response.

Cart rules (storefront behaviour):
    - product ids, variation ids and quantities must be positive and fit the
      32-bit INTEGER columns; a line that breaks this is rejected with a
      warning, not an exception
    - adding the same (product, variation) twice adds up the quantities
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pwacommerce.exceptions import DatabaseError
from pwacommerce.models.cart import CartItem
from pwacommerce.services.cart_base import CartService

logger = logging.getLogger(__name__)

CART_COOKIE_NAME = "pwacommerce_cart_session"

# 48 hours, the usual lifetime of a storefront cart session
CART_COOKIE_MAX_AGE = 48 * 3600

# Largest value the INTEGER columns of cart_items hold on every backend
MAX_COLUMN_INT = 2**31 - 1


def _in_range(value: Optional[int]) -> bool:
    return value is None or 0 < value <= MAX_COLUMN_INT


class SessionCartService(CartService):

    def __init__(self, db: AsyncSession, checkout_url: str, session_id: Optional[str] = None):
        self.db = db
        self.checkout_url = checkout_url
        self._session_id = session_id or None

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    async def set_cookies(self) -> None:
        if self._session_id is None:
            self._session_id = uuid.uuid4().hex
            logger.debug("New cart session %s", self._session_id[:8])

    async def add_to_cart(
        self,
        product_id: int,
        quantity: int,
        variation_id: Optional[int] = None,
    ) -> bool:
        if self._session_id is None:
            await self.set_cookies()

        if not (_in_range(product_id) and _in_range(quantity) and _in_range(variation_id)):
            logger.warning(
                "Rejected cart line product=%s variation=%s qty=%s",
                product_id,
                variation_id,
                quantity,
            )
            return False

        query = select(CartItem).where(
            CartItem.session_id == self._session_id,
            CartItem.product_id == product_id,
            CartItem.variation_id.is_(None) if variation_id is None
            else CartItem.variation_id == variation_id,
        )

        try:
            result = await self.db.execute(query)
            line = result.scalar_one_or_none()
            if line is None:
                self.db.add(CartItem(
                    session_id=self._session_id,
                    product_id=product_id,
                    variation_id=variation_id,
                    quantity=quantity,
                ))
            else:
                line.quantity += quantity
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to add product %d to cart: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id, "db_error": str(e)})

        logger.info(
            "Cart %s: added product=%d variation=%s qty=%d",
            self._session_id[:8],
            product_id,
            variation_id,
            quantity,
        )
        return True

    async def get_checkout_url(self) -> str:
        return self.checkout_url
