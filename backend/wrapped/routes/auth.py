"""
Wrapped Backend - Auth Route Handlers
=======================================

What:  Handles register, login, logout and whoami.
How:   Validates the JSON body, delegates to AuthService, then issues the
       session token and sets/clears the `token` cookie.

Route Inventory:
    POST /api/auth/register   {email, username, password} → {id, email, username}
    POST /api/auth/login      {username, password}        → {id, username}
    POST /api/auth/logout     → {ok: true}
    GET  /api/me              → {id, email, username}      (session required)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped.config import Settings
from wrapped.database import get_db_session
from wrapped.dependencies import (
    AuthContext,
    clear_session_cookie,
    get_sessions,
    get_settings,
    require_auth,
    set_session_cookie,
)
from wrapped.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from wrapped.schemas.common import ErrorResponse, OkResponse
from wrapped.security.sessions import SessionManager
from wrapped.services.auth_service import auth_service
from wrapped.validation import parse_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/auth/register",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid email, username or password", "model": ErrorResponse},
        409: {"description": "Email or username already taken", "model": ErrorResponse},
    },
    summary="Create an account and start a session",
)
async def register(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    sessions: SessionManager = Depends(get_sessions),
) -> UserResponse:
    data = await parse_body(request, RegisterRequest)
    user = await auth_service.register(db, data, bcrypt_rounds=settings.bcrypt_rounds)

    set_session_cookie(response, sessions.issue(user.id), settings)
    return UserResponse.model_validate(user)


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing username or password", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Start a session with username and password",
)
async def login(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    sessions: SessionManager = Depends(get_sessions),
) -> LoginResponse:
    data = await parse_body(request, LoginRequest)
    user = await auth_service.authenticate(db, data)

    set_session_cookie(response, sessions.issue(user.id), settings)
    logger.info("User %s logged in", user.id)
    return LoginResponse.model_validate(user)


@router.post(
    "/auth/logout",
    response_model=OkResponse,
    summary="Clear the session cookie",
)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> OkResponse:
    """Always succeeds, with or without a valid session."""
    clear_session_cookie(response, settings)
    return OkResponse()


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "No valid session", "model": ErrorResponse}},
    summary="Return the logged-in user",
)
async def whoami(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await auth_service.get_user(db, auth.user_id)
    return UserResponse.model_validate(user)
