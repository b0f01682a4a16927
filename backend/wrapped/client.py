"""
Wrapped Backend - API Client
==============================

What:  Async Python client for the Wrapped API, plus the helpers the browser
       client uses to turn error bodies into readable messages.
How:   httpx.AsyncClient with a cookie jar: login/register store the
       HttpOnly `token` cookie and every later call sends it back. Non-2xx
       responses raise ApiError carrying a formatted message.

Example:
    async with WrappedClient("http://localhost:3001") as client:
        await client.login("ana", "secret1")
        wrap = await client.create_wrap("2024 Recap", "burgers", 2024)
        await client.add_item(wrap["id"], "Big Mac", "2024-03-01T12:00:00.000Z")
        print(wrap_stats((await client.list_wraps())[0]))
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import httpx

FIELD_LABELS = {
    "email": "Email",
    "username": "Username",
    "password": "Password",
    "title": "Titulo",
    "kind": "Tipo",
    "year": "Ano",
    "name": "Nombre",
    "date": "Fecha",
    "notes": "Notas",
}


class ApiError(Exception):
    """A non-2xx API response."""

    def __init__(self, message: str, status: int, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


def normalize_message(message: str) -> str:
    """Translate the common validator messages into short Spanish phrases."""
    lower = message.lower()
    if "at least 6 characters" in lower:
        return "debe tener al menos 6 caracteres"
    if "at least 1 character" in lower:
        return "no puede estar vacio"
    if "valid email address" in lower:
        return "email invalido"
    return message


def format_field_errors(field_errors: Mapping[str, Optional[List[str]]]) -> str:
    """Render `{field: [messages]}` as "Label: message • Label: message"."""
    parts = []
    for name, messages in field_errors.items():
        label = FIELD_LABELS.get(name, name)
        for message in messages or []:
            parts.append(f"{label}: {normalize_message(message)}")
    return " • ".join(parts)


def extract_error_message(payload: Any) -> Optional[str]:
    """
    Pick the most useful human-readable message out of an error body.

    Order: plain string body, string `error`, field errors, form errors,
    `message`. Returns None when nothing usable is found.
    """
    if not payload:
        return None
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, dict):
        return None

    error = payload.get("error")
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        if error.get("fieldErrors"):
            formatted = format_field_errors(error["fieldErrors"])
            if formatted:
                return formatted
        form_errors = error.get("formErrors")
        if isinstance(form_errors, list) and form_errors:
            return " ".join(str(e) for e in form_errors)
    if isinstance(payload.get("message"), str):
        return payload["message"]
    return None


def to_api_error(response: httpx.Response) -> ApiError:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = response.json()
        except ValueError:
            data = None
        message = extract_error_message(data) or "Request failed"
        return ApiError(message, response.status_code, data)
    return ApiError(
        response.text or response.reason_phrase or "Request failed",
        response.status_code,
    )


@dataclass
class WrapStats:
    total: int
    by_month: Dict[str, int] = field(default_factory=dict)


def wrap_stats(wrap: Mapping[str, Any]) -> WrapStats:
    """Item count overall and per month ("2024-03") for a listed wrap."""
    months: Counter = Counter()
    items = wrap.get("items") or []
    for item in items:
        moment = datetime.fromisoformat(item["date"])
        months[moment.strftime("%Y-%m")] += 1
    return WrapStats(total=len(items), by_month=dict(sorted(months.items())))


class WrappedClient:
    """
    Session-keeping client for the Wrapped API.

    Args:
        base_url:  API origin, e.g. "http://localhost:3001"
        transport: Optional httpx transport (tests pass an ASGITransport)
    """

    def __init__(self, base_url: str = "", transport: Optional[httpx.AsyncBaseTransport] = None):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> "WrappedClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        response = await self._http.request(method, path, json=body)
        if response.is_error:
            raise to_api_error(response)
        return response.json()

    # ── Auth ──────────────────────────────────────────────────────────────

    async def register(self, email: str, username: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/auth/register",
            {"email": email, "username": username, "password": password},
        )

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/auth/login", {"username": username, "password": password}
        )

    async def logout(self) -> Dict[str, Any]:
        return await self._request("POST", "/api/auth/logout")

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/me")

    # ── Wraps ─────────────────────────────────────────────────────────────

    async def list_wraps(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/wraps")

    async def create_wrap(self, title: str, kind: str, year: int) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/wraps", {"title": title, "kind": kind, "year": year}
        )

    async def add_item(
        self,
        wrap_id: str,
        name: str,
        date: str,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": name, "date": date}
        if notes:
            body["notes"] = notes
        return await self._request("POST", f"/api/wraps/{wrap_id}/items", body)

    async def delete_wrap(self, wrap_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/wraps/{wrap_id}")
