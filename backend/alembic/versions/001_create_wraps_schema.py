"""Create users, wraps and wrap_items tables

Revision ID: 001
Revises: None
Create Date: 2026-01-10 00:00:00.000000+00:00

What:  Initial schema: accounts, their wraps, and the items inside each wrap.
How:   Portable column types (String ids, DateTime with timezone) so the same
       revision runs on SQLite and PostgreSQL.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, comment="Login email, unique across users"),
        sa.Column("username", sa.String(24), nullable=False, comment="Public handle, 3-24 chars of [A-Za-z0-9_]"),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash (salt embedded)"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "wraps",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("kind", sa.Text(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_wraps_user_created",
        "wraps",
        ["user_id", sa.text("created_at DESC")],
    )

    op.create_table(
        "wrap_items",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("wrap_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["wrap_id"], ["wraps.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_wrap_items_wrap_date", "wrap_items", ["wrap_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_wrap_items_wrap_date", table_name="wrap_items")
    op.drop_table("wrap_items")
    op.drop_index("idx_wraps_user_created", table_name="wraps")
    op.drop_table("wraps")
    op.drop_table("users")
