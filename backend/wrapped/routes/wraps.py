"""
Wrapped Backend - Wraps Route Handlers
========================================

What:  CRUD endpoints for the caller's wraps and their items.
How:   Every handler requires a session (require_auth) and passes the
       resolved user id to WrapService, which scopes each query to it.

Route Inventory:
    GET    /api/wraps               → [Wrap with items]
    POST   /api/wraps               {title, kind, year}   → Wrap
    POST   /api/wraps/{id}/items    {name, date, notes?}  → WrapItem
    DELETE /api/wraps/{id}          → {ok: true}

Wraps owned by other users answer 404, exactly like missing ones.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped.database import get_db_session
from wrapped.dependencies import AuthContext, require_auth
from wrapped.schemas.common import ErrorResponse, OkResponse
from wrapped.schemas.wrap import (
    WrapCreate,
    WrapItemCreate,
    WrapItemResponse,
    WrapResponse,
    WrapWithItemsResponse,
)
from wrapped.services.wrap_service import wrap_service
from wrapped.validation import parse_body

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/wraps",
    tags=["Wraps"],
    responses={401: {"description": "No valid session", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=List[WrapWithItemsResponse],
    summary="List the caller's wraps with their items",
)
async def list_wraps(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
) -> List[WrapWithItemsResponse]:
    """Newest wraps first; items inside each wrap ordered by date ascending."""
    return await wrap_service.list_wraps(db, auth.user_id)


@router.post(
    "",
    response_model=WrapResponse,
    responses={400: {"description": "Invalid wrap body", "model": ErrorResponse}},
    summary="Create a wrap",
)
async def create_wrap(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
) -> WrapResponse:
    data = await parse_body(request, WrapCreate)
    return await wrap_service.create_wrap(db, auth.user_id, data)


@router.post(
    "/{wrap_id}/items",
    response_model=WrapItemResponse,
    responses={
        400: {"description": "Invalid item body", "model": ErrorResponse},
        404: {"description": "Wrap not found", "model": ErrorResponse},
    },
    summary="Add an item to one of the caller's wraps",
)
async def add_item(
    wrap_id: str,
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
) -> WrapItemResponse:
    # Ownership before body validation: an unknown wrap is 404 even with a bad body
    wrap = await wrap_service.get_owned_wrap(db, auth.user_id, wrap_id)
    data = await parse_body(request, WrapItemCreate)
    return await wrap_service.add_item(db, wrap, data)


@router.delete(
    "/{wrap_id}",
    response_model=OkResponse,
    responses={404: {"description": "Wrap not found", "model": ErrorResponse}},
    summary="Delete a wrap and all of its items",
)
async def delete_wrap(
    wrap_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await wrap_service.delete_wrap(db, auth.user_id, wrap_id)
    return OkResponse()
