"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- RecordMixin: Adds an insertion-ordered key, a string UUID id and audit timestamps

Timestamps are assigned in Python rather than by the server so that a freshly
flushed row can be serialised without another round trip.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values (SQLite drops tzinfo) and convert aware ones."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value: datetime | None) -> str | None:
    value = as_utc(value)
    return value.isoformat() if value else None


class Base(DeclarativeBase):
    """Declarative base for all TaskDesk models."""
    pass


class RecordMixin:
    """Mixin providing identity and standard audit columns.

    Adds:
    - pk: Autoincrement primary key; its order is insertion order
    - id: Public UUID stored as a 36-char string
    - created_at: Timestamp set on insert
    - updated_at: Timestamp refreshed on every change
    """

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        index=True,
        nullable=False,
        default=lambda: str(uuid.uuid4()),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
