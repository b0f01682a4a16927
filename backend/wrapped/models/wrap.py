"""
Wrapped Backend - Wrap and WrapItem SQLAlchemy Models
=======================================================

What:  ORM models for the `wraps` and `wrap_items` tables.
Who:   Used by WrapService for listing, creating, appending and deleting.

Ownership:
    A wrap belongs to exactly one user (`user_id`). The store does not
    filter by owner; WrapService adds `user_id == caller` to every
    wrap-scoped query.

Lifecycle:
    Wrap:     created by POST /api/wraps, deleted by DELETE /api/wraps/{id}
    WrapItem: appended by POST /api/wraps/{id}/items, removed only when its
              wrap is deleted (items first, then the wrap, in one transaction)

Query patterns:
    - List a user's wraps newest first: idx_wraps_user_created
    - Load items of many wraps ordered by date: idx_wrap_items_wrap_date
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wrapped.database import Base
from wrapped.models.user import new_id, utcnow

if TYPE_CHECKING:
    from wrapped.models.user import User


class Wrap(Base):
    """A named, yearly collection of items (e.g. "2024 Recap" of burgers)."""

    __tablename__ = "wraps"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Free-form category chosen by the user ("burgers", "movies", ...)
    kind: Mapped[str] = mapped_column(Text, nullable=False)

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped["User"] = relationship(back_populates="wraps")

    # Only ever loaded eagerly (selectinload) in WrapService.list_wraps
    items: Mapped[List["WrapItem"]] = relationship(
        back_populates="wrap",
        order_by="WrapItem.date",
    )

    __table_args__ = (
        Index("idx_wraps_user_created", "user_id", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Wrap(id={self.id}, title='{self.title}', year={self.year})>"


class WrapItem(Base):
    """A dated entry inside a wrap, with optional free-text notes."""

    __tablename__ = "wrap_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # User-supplied moment the item happened (stored in UTC)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    wrap_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("wraps.id"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    wrap: Mapped["Wrap"] = relationship(back_populates="items")

    __table_args__ = (
        Index("idx_wrap_items_wrap_date", "wrap_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<WrapItem(id={self.id}, name='{self.name}', wrap_id={self.wrap_id})>"
