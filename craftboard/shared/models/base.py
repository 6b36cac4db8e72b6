"""
Base Model Classes

The declarative base and common mixins for timestamps and soft deletion.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── TimestampMixin   ← Automatic created_at/updated_at
       │
       └── SoftDeleteMixin  ← is_deleted flag + deleted_at

Soft delete and publication status are two separate columns:

    ┌────────────┬───────────┬──────────────────────────────────────┐
    │ is_deleted │ status    │ visible to                           │
    ├────────────┼───────────┼──────────────────────────────────────┤
    │ false      │ published │ everyone                             │
    │ false      │ draft /   │ principals with can_view_drafts      │
    │            │ archived  │                                      │
    │ true       │ any       │ nobody (row kept, excluded by query) │
    └────────────┴───────────┴──────────────────────────────────────┘

Usage:
======
    from craftboard.shared.models.base import Base, TimestampMixin, SoftDeleteMixin

    class ForumPost(Base, TimestampMixin, SoftDeleteMixin):
        __tablename__ = "forum_posts"
        ...
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utc_now() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps ``dict[str, Any]`` and ``list[Any]`` annotations to JSON columns
    (JSONB on PostgreSQL).
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
        list[Any]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: set on INSERT (Python side, with a database fallback)
    - updated_at: refreshed by SQLAlchemy on every UPDATE unless the
      statement sets it explicitly (counter updates pin it to itself)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utc_now,
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Mixin that adds soft delete capability to models.

    Deleting sets ``is_deleted`` and stamps ``deleted_at``; the row stays in
    the table. Every default query must filter ``is_deleted.is_(False)``.
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=text("false"),
        nullable=False,
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
