"""
Wrapped Backend - Auth Endpoint Tests
=======================================

What:  HTTP-level tests for register, login, logout and /api/me.
How:   HTTPX AsyncClient over ASGITransport against an app wired to a
       per-test SQLite database.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from conftest import TEST_PASSWORD, register_user
from wrapped.config import Settings
from wrapped.main import create_app
from wrapped.models import User
from wrapped.security.sessions import SessionManager


async def count_users(database) -> int:
    async with database.session_factory() as session:
        result = await session.execute(select(func.count(User.id)))
        return result.scalar_one()


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_user_and_sets_cookie(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "username": "ana_99", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "email", "username"}
        assert body["email"] == "ana@example.com"
        assert body["username"] == "ana_99"

        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("token=")
        assert "httponly" in set_cookie
        assert "path=/" in set_cookie
        assert "samesite=lax" in set_cookie
        assert "secure" not in set_cookie

    @pytest.mark.asyncio
    async def test_register_never_returns_password(self, test_client):
        body = await register_user(test_client, "ana")
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, make_client, database):
        await register_user(make_client(), "ana", email="shared@example.com")

        response = await make_client().post(
            "/api/auth/register",
            json={"email": "shared@example.com", "username": "bruno", "password": TEST_PASSWORD},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Email ya existe"}
        assert await count_users(database) == 1

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, make_client, database):
        await register_user(make_client(), "ana")

        response = await make_client().post(
            "/api/auth/register",
            json={"email": "other@example.com", "username": "ana", "password": TEST_PASSWORD},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Username ya existe"}
        assert await count_users(database) == 1

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, test_client, database):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "username": "ana", "password": "12345"},
        )

        assert response.status_code == 400
        errors = response.json()["error"]
        assert list(errors["fieldErrors"]) == ["password"]
        assert "at least 6 characters" in errors["fieldErrors"]["password"][0]
        assert await count_users(database) == 0

    @pytest.mark.asyncio
    async def test_username_pattern_rejected(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "username": "ana-maria", "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        assert response.json()["error"]["fieldErrors"] == {"username": ["Solo letras/números/_"]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["ab", "a" * 25])
    async def test_username_length_rejected(self, test_client, username):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "username": username, "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        assert "username" in response.json()["error"]["fieldErrors"]

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "username": "ana", "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        assert "email" in response.json()["error"]["fieldErrors"]

    @pytest.mark.asyncio
    async def test_missing_body_reports_every_field(self, test_client):
        response = await test_client.post("/api/auth/register")

        assert response.status_code == 400
        field_errors = response.json()["error"]["fieldErrors"]
        assert set(field_errors) == {"email", "username", "password"}

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == {
            "formErrors": ["Malformed JSON body"],
            "fieldErrors": {},
        }


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_id_and_username(self, make_client):
        registered = await register_user(make_client(), "ana")

        client = make_client()
        response = await client.post(
            "/api/auth/login", json={"username": "ana", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json() == {"id": registered["id"], "username": "ana"}
        assert "token" in response.cookies

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_identical(self, make_client):
        await register_user(make_client(), "ana")
        client = make_client()

        wrong_password = await client.post(
            "/api/auth/login", json={"username": "ana", "password": "wrong-password"}
        )
        unknown_user = await client.post(
            "/api/auth/login", json={"username": "nobody", "password": TEST_PASSWORD}
        )

        assert wrong_password.status_code == 401
        assert unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {"error": "Credenciales inválidas"}
        assert "set-cookie" not in wrong_password.headers

    @pytest.mark.asyncio
    async def test_empty_credentials_are_400(self, test_client):
        response = await test_client.post("/api/auth/login", json={"username": "", "password": ""})

        assert response.status_code == 400
        assert set(response.json()["error"]["fieldErrors"]) == {"username", "password"}


class TestSession:

    @pytest.mark.asyncio
    async def test_me_after_login_then_logout(self, make_client):
        registered = await register_user(make_client(), "ana")

        client = make_client()
        await client.post("/api/auth/login", json={"username": "ana", "password": TEST_PASSWORD})

        me = await client.get("/api/me")
        assert me.status_code == 200
        assert me.json() == registered

        logout = await client.post("/api/auth/logout")
        assert logout.status_code == 200
        assert logout.json() == {"ok": True}

        after = await client.get("/api/me")
        assert after.status_code == 401
        assert after.json() == {"error": "No auth"}

    @pytest.mark.asyncio
    async def test_logout_without_session_succeeds(self, test_client):
        response = await test_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_me_without_cookie(self, test_client):
        response = await test_client.get("/api/me")

        assert response.status_code == 401
        assert response.json() == {"error": "No auth"}

    @pytest.mark.asyncio
    async def test_me_with_garbage_token(self, test_client):
        response = await test_client.get("/api/me", headers={"Cookie": "token=not-a-jwt"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid auth"}

    @pytest.mark.asyncio
    async def test_me_with_expired_token(self, make_client):
        registered = await register_user(make_client(), "ana")
        issued = datetime.now(timezone.utc) - timedelta(days=31)
        token = SessionManager(secret="test-secret").issue(registered["id"], now=issued)

        response = await make_client().get("/api/me", headers={"Cookie": f"token={token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid auth"}

    @pytest.mark.asyncio
    async def test_me_with_token_for_deleted_user(self, test_client):
        token = SessionManager(secret="test-secret").issue("no-such-user")

        response = await test_client.get("/api/me", headers={"Cookie": f"token={token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "No auth"}


class TestProductionCookies:

    @pytest.mark.asyncio
    async def test_cookie_is_secure_and_cross_site(self, test_settings, database, make_client):
        prod_settings = Settings(**{**test_settings.model_dump(), "app_env": "production"})
        client = make_client(create_app(prod_settings, database))

        response = await client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "username": "ana", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"].lower()
        assert "secure" in set_cookie
        assert "samesite=none" in set_cookie
        assert "httponly" in set_cookie
