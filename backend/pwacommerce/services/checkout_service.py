"""
PWAcommerce Backend - Checkout Aggregator
===========================================

What:  Turns the `items` payload of POST /proceed-checkout into cart calls.
How:   Decode the JSON array, keep the entries with a numeric id and a
       numeric quantity, and add them to the cart one by one, in order.

Payload example:
    items = '[{"id": 1, "quantity": 2},
              {"id": 3, "quantity": 1, "variationId": 7}]'

Lenient by contract:
    - a payload that is missing, not JSON, or not a JSON array adds nothing
    - an entry without a numeric id/quantity is skipped, not reported
    - a variationId that is not numeric is ignored (simple product add)
    - cart calls are not batched, deduplicated or rolled back; a line the
      cart rejects or fails to store is skipped and the rest still go in
    The caller redirects to checkout whatever happens here.
"""

import json
import logging
import math
from typing import Any, List, Optional

from pwacommerce.exceptions import DatabaseError
from pwacommerce.schemas.store import CartLineItem
from pwacommerce.services.cart_base import CartService

logger = logging.getLogger(__name__)


def is_numeric(value: Any) -> bool:
    """
    True for numbers and numeric strings ("5", " 5", "2.0", "1e3").

    Booleans, None, empty strings, NaN/infinity and containers are not
    numeric.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def to_int(value: Any) -> int:
    """Numeric value (see is_numeric) truncated to an int."""
    if isinstance(value, int):
        return value
    return int(float(str(value).strip()))


class CheckoutService:

    def decode_items(self, raw: Any) -> List[Any]:
        """
        Decode the raw `items` value into a list of entries.

        A list passes through untouched (JSON bodies may send one directly);
        anything that does not decode to a list becomes [].
        """
        if raw is None:
            return []
        if isinstance(raw, list):
            return raw
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        if not isinstance(raw, str):
            logger.warning("Checkout items payload has type %s; ignoring", type(raw).__name__)
            return []

        try:
            decoded = json.loads(raw)
        except ValueError:
            logger.warning("Checkout items payload is not valid JSON; nothing added")
            return []

        if not isinstance(decoded, list):
            logger.warning("Checkout items payload is not a JSON array; nothing added")
            return []
        return decoded

    def parse_line(self, entry: Any) -> Optional[CartLineItem]:
        """A CartLineItem for a valid entry, None for one to skip."""
        if not isinstance(entry, dict):
            return None
        product_id = entry.get("id")
        quantity = entry.get("quantity")
        if not (is_numeric(product_id) and is_numeric(quantity)):
            return None

        variation = entry.get("variationId")
        return CartLineItem(
            product_id=to_int(product_id),
            quantity=to_int(quantity),
            variation_id=to_int(variation) if is_numeric(variation) else None,
        )

    def parse_items(self, raw: Any) -> List[CartLineItem]:
        lines = []
        for entry in self.decode_items(raw):
            line = self.parse_line(entry)
            if line is None:
                logger.debug("Skipping invalid checkout entry: %r", entry)
                continue
            lines.append(line)
        return lines

    async def fill_cart(self, cart: CartService, raw_items: Any) -> str:
        """
        Add every valid entry to the cart and return the checkout URL.

        Returns:
            The URL to redirect to; returned even when nothing was added.
        """
        lines = self.parse_items(raw_items)

        await cart.set_cookies()

        added = 0
        for line in lines:
            try:
                if line.variation_id is not None:
                    ok = await cart.add_to_cart(line.product_id, line.quantity, line.variation_id)
                else:
                    ok = await cart.add_to_cart(line.product_id, line.quantity)
            except DatabaseError as e:
                # One failed line never cancels the redirect
                logger.error(
                    "Cart add failed for product=%d variation=%s: %s | Context: %s",
                    line.product_id,
                    line.variation_id,
                    e.message,
                    e.context,
                )
                continue
            added += 1 if ok else 0

        logger.info("Checkout: %d of %d valid lines added to cart", added, len(lines))
        return await cart.get_checkout_url()


checkout_service = CheckoutService()
