"""
Wrapped Backend - Wrap Service
================================

What:  Listing, creation, item appends and deletion of a user's wraps.
How:   Every wrap-scoped query filters on both the wrap id and the caller's
       user id. A wrap owned by someone else is indistinguishable from a
       missing one: both raise NotFoundError("Wrap no existe").
Who:   Called by the wraps routes with the request's AsyncSession and the
       AuthContext user id.

Delete cascade:
    Items are deleted first, then the wrap. Both statements run in the
    request transaction, which get_db_session commits once, so no partial
    cascade is ever visible.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wrapped.exceptions import NotFoundError
from wrapped.models.wrap import Wrap, WrapItem
from wrapped.schemas.wrap import (
    WrapCreate,
    WrapItemCreate,
    WrapItemResponse,
    WrapResponse,
    WrapWithItemsResponse,
)

logger = logging.getLogger(__name__)

WRAP_NOT_FOUND = "Wrap no existe"


class WrapService:
    """Stateless service; ownership is checked on every wrap-scoped call."""

    async def get_owned_wrap(self, db: AsyncSession, user_id: str, wrap_id: str) -> Wrap:
        """
        Fetch a wrap only if `user_id` owns it.

        Raises:
            NotFoundError: no such wrap, or it belongs to another user
        """
        result = await db.execute(
            select(Wrap).where(Wrap.id == wrap_id, Wrap.user_id == user_id)
        )
        wrap = result.scalar_one_or_none()
        if wrap is None:
            raise NotFoundError(WRAP_NOT_FOUND, resource="wrap", resource_id=wrap_id)
        return wrap

    async def list_wraps(self, db: AsyncSession, user_id: str) -> List[WrapWithItemsResponse]:
        """
        All wraps of `user_id`, newest first, each with items ordered by date.

        Query plan:
            SELECT ... FROM wraps WHERE user_id = :uid ORDER BY created_at DESC
            SELECT ... FROM wrap_items WHERE wrap_id IN (...) ORDER BY date
        """
        result = await db.execute(
            select(Wrap)
            .where(Wrap.user_id == user_id)
            .options(selectinload(Wrap.items))
            .order_by(Wrap.created_at.desc())
        )
        wraps = result.scalars().all()
        return [WrapWithItemsResponse.model_validate(wrap) for wrap in wraps]

    async def create_wrap(self, db: AsyncSession, user_id: str, data: WrapCreate) -> WrapResponse:
        wrap = Wrap(title=data.title, kind=data.kind, year=data.year, user_id=user_id)
        db.add(wrap)
        await db.flush()
        logger.info("Created wrap %s for user %s", wrap.id, user_id)
        return WrapResponse.model_validate(wrap)

    async def add_item(
        self,
        db: AsyncSession,
        wrap: Wrap,
        data: WrapItemCreate,
    ) -> WrapItemResponse:
        """Append an item to a wrap already resolved by get_owned_wrap."""
        item = WrapItem(
            wrap_id=wrap.id,
            name=data.name,
            date=data.date,
            notes=data.notes,
        )
        db.add(item)
        await db.flush()
        logger.debug("Added item %s to wrap %s", item.id, wrap.id)
        return WrapItemResponse.model_validate(item)

    async def delete_wrap(self, db: AsyncSession, user_id: str, wrap_id: str) -> None:
        """
        Delete an owned wrap and all of its items.

        Raises:
            NotFoundError: no such wrap, or it belongs to another user
        """
        wrap = await self.get_owned_wrap(db, user_id, wrap_id)

        items = await db.execute(delete(WrapItem).where(WrapItem.wrap_id == wrap.id))
        await db.execute(delete(Wrap).where(Wrap.id == wrap.id))
        logger.info(
            "Deleted wrap %s (%d items) for user %s", wrap.id, items.rowcount, user_id
        )


wrap_service = WrapService()
