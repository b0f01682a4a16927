"""
Wrapped Backend - Auth Schemas
================================

Request bodies for register/login and the user shapes returned by the
auth endpoints and GET /api/me.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from wrapped.schemas.common import ApiModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MESSAGE = "Solo letras/números/_"


class RegisterRequest(BaseModel):
    """POST /api/auth/register body."""
    email: EmailStr
    username: str = Field(min_length=3, max_length=24)
    password: str = Field(min_length=6)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not USERNAME_PATTERN.fullmatch(v):
            raise ValueError(USERNAME_MESSAGE)
        return v


class LoginRequest(BaseModel):
    """POST /api/auth/login body."""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(ApiModel):
    """Returned by register and GET /api/me."""
    id: str
    email: str
    username: str


class LoginResponse(ApiModel):
    """Returned by login."""
    id: str
    username: str
