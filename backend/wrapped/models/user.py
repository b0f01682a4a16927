"""
Wrapped Backend - User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table (the credential store).
Who:   Used by AuthService for registration, login and whoami lookups.

Table design:
    - id: opaque UUID4 string generated in Python (portable across SQLite/PostgreSQL)
    - email, username: each carries a UNIQUE constraint; AuthService also
      checks both before inserting so conflicts map to 409 with a clear message
    - password: bcrypt hash only, never the plaintext
    - created_at: UTC, set on insert

Users are never updated or deleted through the API.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wrapped.database import Base

if TYPE_CHECKING:
    from wrapped.models.wrap import Wrap


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account. Owns zero or more wraps."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Login email, unique across users",
    )

    username: Mapped[str] = mapped_column(
        String(24),
        nullable=False,
        unique=True,
        comment="Public handle, 3-24 chars of [A-Za-z0-9_]",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash (salt embedded)",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    wraps: Mapped[List["Wrap"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
