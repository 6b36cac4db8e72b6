"""
User Entity Model

A community member, created on first OAuth sign-in.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 550e8400-e29b-41d4-a716-446655440000                   │
│ provider            │ "discord"                                              │
│ provider_account_id │ "80351110224678912"                                    │
│ name                │ "Steve"                                                │
│ email               │ "steve@example.com"                                    │
│ avatar              │ "https://cdn.example.com/avatars/steve.png"            │
│ role                │ member                                                 │
│ last_active_at      │ 2025-03-02T18:04:11Z                                   │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, Enum as SQLEnum, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from craftboard.shared.models.base import Base, TimestampMixin
from craftboard.shared.models.enums import Role


def enum_values(enum_cls) -> list[str]:
    """Store enum *values* (lowercase strings) rather than member names."""
    return [member.value for member in enum_cls]


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4), carried in access tokens
        provider / provider_account_id: OAuth identity (unique together)
        name, email, avatar: Profile snapshot from the provider
        role: Permission role; re-read on every request
        last_active_at: Last time a token for this user was resolved
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("provider", "provider_account_id", name="uq_users_provider_account"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # OAUTH IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    provider: Mapped[str] = mapped_column(String(50), nullable=False)

    provider_account_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCESS
    # ═══════════════════════════════════════════════════════════════════════════

    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, native_enum=False, length=20, values_callable=enum_values),
        default=Role.MEMBER,
        nullable=False,
    )

    last_active_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, name={self.name}, role={self.role})>"
