"""
Wrapped Backend - Session Token Tests
=======================================

What:  SessionManager issue/verify behavior: round trip, expiry, tampering.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from wrapped.exceptions import InvalidSessionError
from wrapped.security.sessions import ALGORITHM, SessionManager


class TestSessionManager:

    def setup_method(self):
        self.sessions = SessionManager(secret="unit-secret")

    def test_round_trip(self):
        token = self.sessions.issue("user-123")
        assert self.sessions.verify(token) == "user-123"

    def test_token_expires_after_thirty_days(self):
        issued = datetime.now(timezone.utc) - timedelta(days=30, minutes=1)
        token = self.sessions.issue("user-123", now=issued)

        with pytest.raises(InvalidSessionError, match="expired"):
            self.sessions.verify(token)

    def test_token_valid_just_before_expiry(self):
        issued = datetime.now(timezone.utc) - timedelta(days=29, hours=23)
        token = self.sessions.issue("user-123", now=issued)

        assert self.sessions.verify(token) == "user-123"

    def test_expiry_claim_matches_ttl(self):
        issued = datetime(2024, 1, 1, tzinfo=timezone.utc)
        token = self.sessions.issue("user-123", now=issued)

        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims["exp"] - claims["iat"] == 30 * 24 * 3600

    def test_wrong_secret_rejected(self):
        token = SessionManager(secret="other-secret").issue("user-123")

        with pytest.raises(InvalidSessionError):
            self.sessions.verify(token)

    def test_tampered_payload_rejected(self):
        header, payload, signature = self.sessions.issue("user-123").split(".")
        forged = jwt.encode(
            {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "unit-secret",
            algorithm=ALGORITHM,
        ).split(".")[1]

        with pytest.raises(InvalidSessionError):
            self.sessions.verify(f"{header}.{forged}.{signature}")

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidSessionError):
            self.sessions.verify(token)

    def test_token_without_subject_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "unit-secret",
            algorithm=ALGORITHM,
        )

        with pytest.raises(InvalidSessionError):
            self.sessions.verify(token)

    def test_unsigned_token_rejected(self):
        token = jwt.encode(
            {"sub": "user-123", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            None,
            algorithm="none",
        )

        with pytest.raises(InvalidSessionError):
            self.sessions.verify(token)
