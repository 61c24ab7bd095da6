"""Shared model mixins and column helpers."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def new_identifier() -> uuid.UUID:
    """Generate a fresh primary key; uuid4 values are unique across concurrent writers."""
    return uuid.uuid4()


class TimestampMixin(SQLModel, table=False):
    """Mixin that provides created/updated timestamp columns."""

    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )

    def touch(self) -> None:
        """Mark the row as modified now."""
        self.updated_at = utcnow()


__all__ = ["TimestampMixin", "new_identifier", "utcnow"]
