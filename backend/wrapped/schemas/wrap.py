"""
Wrapped Backend - Wrap Schemas
================================

What:  Request bodies for creating wraps and items, and their response shapes.

Coercion rules:
    - year: 32-bit integer; numeric strings ("2024") are accepted and stored as 2024
    - date: ISO-8601 string only (no epoch numbers). Offsets are converted
      to UTC; values without an offset are taken as UTC.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from wrapped.schemas.common import ApiModel, UtcTimestamp

# Bounds of the INTEGER year column on PostgreSQL
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 date or datetime string into an aware UTC datetime.

    Accepts "2024-03-01", "2024-03-01T12:00:00", "2024-03-01T12:00:00.000Z"
    and explicit offsets such as "+02:00".
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class WrapCreate(BaseModel):
    """POST /api/wraps body."""
    title: str = Field(min_length=1)
    kind: str = Field(min_length=1)
    year: int = Field(ge=INT32_MIN, le=INT32_MAX)


class WrapItemCreate(BaseModel):
    """POST /api/wraps/{id}/items body."""
    name: str = Field(min_length=1)
    date: datetime
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        if not isinstance(v, str):
            raise ValueError("Expected an ISO-8601 date string")
        try:
            return parse_iso_datetime(v)
        except (ValueError, OverflowError):
            raise ValueError("Invalid ISO-8601 date") from None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WrapItemResponse(ApiModel):
    id: str
    name: str
    date: UtcTimestamp
    notes: Optional[str] = None
    wrap_id: str
    created_at: UtcTimestamp


class WrapResponse(ApiModel):
    """A wrap without its items (returned by create)."""
    id: str
    title: str
    kind: str
    year: int
    user_id: str
    created_at: UtcTimestamp


class WrapWithItemsResponse(WrapResponse):
    """A wrap with its items ordered by date (returned by list)."""
    items: List[WrapItemResponse] = Field(default_factory=list)
