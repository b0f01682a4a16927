"""
Wrapped Backend - Request Dependencies
========================================

What:  FastAPI dependencies shared by the routers, plus the session cookie
       transport helpers.

    get_settings     → Settings stored on app.state by create_app()
    get_sessions     → SessionManager signing with the configured secret
    require_auth     → AuthContext for protected routes (401 otherwise)

Cookie contract:
    name `token`, HttpOnly, path `/`.
    Production:  Secure + SameSite=None (client served from another origin)
    Otherwise:   SameSite=Lax
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Depends, Request, Response

from wrapped.config import Settings
from wrapped.exceptions import AuthError, InvalidSessionError
from wrapped.middleware.request_id import request_id_var
from wrapped.security.sessions import SESSION_COOKIE, SessionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a verified session, handed to protected handlers."""
    user_id: str


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sessions(settings: Settings = Depends(get_settings)) -> SessionManager:
    return SessionManager(
        secret=settings.jwt_secret,
        ttl=timedelta(days=settings.session_ttl_days),
    )


async def require_auth(
    request: Request,
    sessions: SessionManager = Depends(get_sessions),
) -> AuthContext:
    """
    Resolve the caller from the `token` cookie.

    Raises:
        AuthError("No auth"):      no cookie was sent
        AuthError("Invalid auth"): signature, expiry or format check failed
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise AuthError("No auth")

    try:
        user_id = sessions.verify(token)
    except InvalidSessionError as e:
        logger.info("[%s] Rejected session: %s", request_id_var.get(""), e.message)
        raise AuthError("Invalid auth") from e

    return AuthContext(user_id=user_id)


def _cookie_attributes(settings: Settings) -> dict:
    return {
        "path": "/",
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
    }


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token to the response as an HttpOnly cookie."""
    response.set_cookie(SESSION_COOKIE, token, **_cookie_attributes(settings))


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Expire the session cookie (same attributes, so cross-site clears work)."""
    response.delete_cookie(SESSION_COOKIE, **_cookie_attributes(settings))
