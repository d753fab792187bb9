"""
PWAcommerce Backend - Store Options Service
=============================================

What:  Reads and writes the `options` table (REST credentials, app icon).
How:   `load()` reads every known option in one query and returns a frozen
       StoreOptions snapshot; `get_setting()` reads a single value and
       returns "" when the row is missing.
Who:   load() runs once per request through routes/dependencies; the admin
       routes call update_settings() and set_icon().
"""

import logging
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pwacommerce.exceptions import DatabaseError
from pwacommerce.models.option import Option
from pwacommerce.schemas.store import StoreOptions

logger = logging.getLogger(__name__)

KNOWN_OPTIONS = ("consumer_key", "consumer_secret", "icon")


class OptionsService:

    async def get_setting(self, db: AsyncSession, name: str) -> str:
        try:
            result = await db.execute(select(Option.value).where(Option.name == name))
        except SQLAlchemyError as e:
            logger.error("Failed to read option %s: %s", name, str(e))
            raise DatabaseError(context={"option": name, "db_error": str(e)})
        value = result.scalar_one_or_none()
        return value or ""

    async def load(self, db: AsyncSession) -> StoreOptions:
        """Snapshot of all known options; missing rows become ""."""
        try:
            result = await db.execute(
                select(Option.name, Option.value).where(Option.name.in_(KNOWN_OPTIONS))
            )
        except SQLAlchemyError as e:
            logger.error("Failed to load store options: %s", str(e))
            raise DatabaseError(context={"db_error": str(e)})

        values: Dict[str, str] = {name: value or "" for name, value in result.all()}
        return StoreOptions(**values)

    async def _set(self, db: AsyncSession, name: str, value: str) -> None:
        option = await db.get(Option, name)
        if option is None:
            db.add(Option(name=name, value=value))
        else:
            option.value = value

    async def update_settings(
        self,
        db: AsyncSession,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
    ) -> StoreOptions:
        """Upsert the credentials that were given; None leaves a value as is."""
        changes = {
            name: value.strip()
            for name, value in (("consumer_key", consumer_key), ("consumer_secret", consumer_secret))
            if value is not None
        }
        try:
            for name, value in changes.items():
                await self._set(db, name, value)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to update store options: %s", str(e))
            raise DatabaseError(context={"options": list(changes), "db_error": str(e)})

        logger.info("Store options updated: %s", ", ".join(sorted(changes)) or "none")
        return await self.load(db)

    async def set_icon(self, db: AsyncSession, icon: str) -> None:
        """
        Save and commit the icon option.

        The previous icon files may be deleted only after this returns.
        """
        try:
            await self._set(db, "icon", icon)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to save icon option: %s", str(e))
            raise DatabaseError(context={"option": "icon", "db_error": str(e)})


options_service = OptionsService()
