"""
PWAcommerce Backend - Abstract Cart Interface
===============================================

What:  The cart capability the checkout redirect needs.
How:   Concrete carts implement the four members below; CheckoutService is
       handed one per request and never looks behind the interface.

Implementations:
    - SessionCartService: cookie-identified cart lines in the database
    - Test doubles: MagicMock/AsyncMock objects with the same members
"""

from abc import ABC, abstractmethod
from typing import Optional


class CartService(ABC):
    """
    Contract:
        - set_cookies() is called once, before any add_to_cart() call
        - add_to_cart() never raises for a rejected line; it returns False
        - get_checkout_url() is always available, even for an empty cart
    """

    @property
    @abstractmethod
    def session_id(self) -> Optional[str]:
        """Identifier the response must carry back as the cart cookie."""
        ...

    @abstractmethod
    async def set_cookies(self) -> None:
        """Make sure the cart has a session identifier."""
        ...

    @abstractmethod
    async def add_to_cart(
        self,
        product_id: int,
        quantity: int,
        variation_id: Optional[int] = None,
    ) -> bool:
        """
        Add a product, or one variation of a variable product, to the cart.

        Returns:
            True if the line was added, False if the cart rejected it.
        """
        ...

    @abstractmethod
    async def get_checkout_url(self) -> str:
        ...
