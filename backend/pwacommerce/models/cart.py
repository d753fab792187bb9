"""
PWAcommerce Backend - Session Cart Line Model
===============================================

What:  One row per (session, product, variation) line in a visitor's cart.
Who:   Written by SessionCartService during the checkout redirect.

Query Patterns:
    - Find a line to merge into: WHERE session_id = :sid AND product_id = :pid
      AND variation_id IS (NOT DISTINCT FROM) :vid
      → idx_cart_items_session index
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pwacommerce.database import Base


class CartItem(Base):
    __tablename__ = "cart_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Value of the pwacommerce_cart_session cookie (uuid4 hex)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)

    product_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # NULL for simple products
    variation_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_cart_items_session", "session_id", "product_id"),
        CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<CartItem(session={self.session_id[:8]}, product={self.product_id}, "
            f"variation={self.variation_id}, qty={self.quantity})>"
        )
