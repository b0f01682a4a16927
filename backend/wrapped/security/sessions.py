"""
Wrapped Backend - Session Tokens
==================================

What:  Issues and verifies the signed, time-limited bearer credential that
       identifies a logged-in user.
How:   HS256 JSON Web Tokens via PyJWT. The payload carries the user id in
       `sub`, plus `iat` and `exp` (issuance + TTL, 30 days by default).
Who:   AuthService issues tokens on register/login; the `require_auth`
       dependency verifies the `token` cookie on protected routes.

Tokens are never stored server-side. Logging out only clears the cookie.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from wrapped.exceptions import InvalidSessionError

ALGORITHM = "HS256"

# Cookie that carries the token between browser and API
SESSION_COOKIE = "token"


@dataclass(frozen=True)
class SessionManager:
    """
    Signs and verifies session tokens with a shared secret.

    Attributes:
        secret:  HMAC signing key (JWT_SECRET)
        ttl:     Validity window measured from issuance
    """

    secret: str
    ttl: timedelta = timedelta(days=30)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Return a signed token for `user_id`, valid until now + ttl."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """
        Return the user id embedded in `token`.

        Raises:
            InvalidSessionError: bad signature, expired, malformed, or no subject.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidSessionError("Session expired") from e
        except jwt.PyJWTError as e:
            raise InvalidSessionError("Session token rejected", context={"reason": str(e)}) from e

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidSessionError("Session token has no subject")
        return user_id
