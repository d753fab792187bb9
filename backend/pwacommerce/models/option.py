"""
PWAcommerce Backend - Store Option Model
==========================================

What:  Key/value rows holding the store options edited from the admin API.
How:   One row per option name; missing rows read as the empty string.

Known options:
    consumer_key     REST API consumer key
    consumer_secret  REST API consumer secret
    icon             Base file name of the uploaded app icon (e.g. "logo.png");
                     the stored files are "48logo.png", "72logo.png", ...
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pwacommerce.database import Base


class Option(Base):
    __tablename__ = "options"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)

    value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        # Never print values; two of the three options are secrets
        return f"<Option(name={self.name})>"
