"""
UserInteraction Entity Model

One row per active interaction of a user with a content item.

- like / bookmark / share / helpful: the row exists while the toggle is on
  and is hard-deleted when toggled off
- view: first-view marker, never deleted; decides whether a view bumps the
  item's views_count

The unique constraint on (user_id, content_type, content_id, action) is the
guard that makes concurrent toggles from the same user safe: only one INSERT
or DELETE can win, and only the winner adjusts the counter.

SAMPLE USER_INTERACTIONS RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ content_type     │ forum                                                     │
│ content_id       │ 770e8400-e29b-41d4-a716-446655440000                      │
│ action           │ like                                                      │
│ created_at       │ 2025-03-02T18:04:11Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
import uuid

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from craftboard.shared.models.base import Base, utc_now
from craftboard.shared.models.enums import ContentModule, InteractionAction
from craftboard.shared.models.user import enum_values


class UserInteraction(Base):
    """
    UserInteraction model.

    content_id is not a foreign key: it points into one of four tables,
    selected by content_type.
    """

    __tablename__ = "user_interactions"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "content_type",
            "content_id",
            "action",
            name="uq_user_interactions_user_content_action",
        ),
        Index("ix_user_interactions_content", "content_type", "content_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    content_type: Mapped[ContentModule] = mapped_column(
        SQLEnum(ContentModule, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )

    content_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    action: Mapped[InteractionAction] = mapped_column(
        SQLEnum(InteractionAction, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<UserInteraction(user_id={self.user_id}, content={self.content_type}:"
            f"{self.content_id}, action={self.action})>"
        )
