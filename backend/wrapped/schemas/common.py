"""
Wrapped Backend - Shared Schema Building Blocks
=================================================

What:  Base model for API responses, timestamp serialization, and the small
       bodies shared by several routes (errors, `{ok: true}`, health).

Wire conventions:
    - Response keys are camelCase (`createdAt`, `wrapId`) because the
      browser client consumes them directly. Python attributes stay snake_case.
    - Timestamps serialize as UTC ISO-8601 with milliseconds and a `Z`
      suffix: 2024-03-01T12:00:00.000Z
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def format_timestamp(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision."""
    # SQLite hands back naive values; everything is stored in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


UtcTimestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]


class ApiModel(BaseModel):
    """Response base: built from ORM objects, serialized with camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class OkResponse(BaseModel):
    """Acknowledgement body for logout and delete."""
    ok: bool = True


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    `error` is a plain message for auth/not-found/conflict errors and a
    `{formErrors, fieldErrors}` object for validation errors.
    """
    error: Any = Field(description="Error message or per-field validation report")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
