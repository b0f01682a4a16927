"""
Wrapped Backend - Auth Service
================================

What:  Registration, credential checks and identity lookup over the users table.
How:   Uses the request's AsyncSession; password hashing runs in Starlette's
       threadpool because bcrypt deliberately burns CPU.
Who:   Called by the auth routes and GET /api/me. Session tokens and cookies
       are HTTP concerns and stay in the routes.

Error mapping:
    email or username taken         → ConflictError (409)
    unknown username / bad password → AuthError (401), same message for both
    session user no longer exists   → AuthError (401)
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from wrapped.exceptions import AuthError, ConflictError
from wrapped.models.user import User
from wrapped.schemas.auth import LoginRequest, RegisterRequest
from wrapped.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email ya existe"
USERNAME_TAKEN = "Username ya existe"
INVALID_CREDENTIALS = "Credenciales inválidas"


class AuthService:
    """Stateless service; every method receives the request's session."""

    async def _find_by(self, db: AsyncSession, **criteria) -> Optional[User]:
        result = await db.execute(select(User).filter_by(**criteria))
        return result.scalar_one_or_none()

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
        bcrypt_rounds: int = 10,
    ) -> User:
        """
        Create a user after checking that email and username are free.

        Raises:
            ConflictError: email (checked first) or username already taken
        """
        if await self._find_by(db, email=data.email) is not None:
            raise ConflictError(EMAIL_TAKEN, field="email")
        if await self._find_by(db, username=data.username) is not None:
            raise ConflictError(USERNAME_TAKEN, field="username")

        password_hash = await run_in_threadpool(hash_password, data.password, bcrypt_rounds)
        user = User(email=data.email, username=data.username, password=password_hash)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            # A concurrent registration won the unique constraint
            raise ConflictError(
                "Email o username ya existe",
                context={"original_error": type(e).__name__},
            ) from e

        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    async def authenticate(self, db: AsyncSession, data: LoginRequest) -> User:
        """
        Return the user whose username and password match.

        Raises:
            AuthError: unknown username or wrong password (one message for both)
        """
        user = await self._find_by(db, username=data.username)
        if user is None:
            logger.info("Login failed: unknown username '%s'", data.username)
            raise AuthError(INVALID_CREDENTIALS)

        matches = await run_in_threadpool(verify_password, data.password, user.password)
        if not matches:
            logger.info("Login failed: wrong password for '%s'", data.username)
            raise AuthError(INVALID_CREDENTIALS)

        return user

    async def get_user(self, db: AsyncSession, user_id: str) -> User:
        """
        Resolve the user behind a verified session.

        Raises:
            AuthError: the user was removed after the token was issued
        """
        user = await db.get(User, user_id)
        if user is None:
            raise AuthError("No auth", context={"user_id": user_id})
        return user


auth_service = AuthService()
