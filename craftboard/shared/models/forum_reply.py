"""
ForumReply Entity Model

A reply in a forum thread. Replies are flat and ordered oldest first;
``reply_to_id`` optionally points at the reply being quoted.
"""

from typing import Optional
import uuid

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from craftboard.shared.models.base import Base, SoftDeleteMixin, TimestampMixin


class ForumReply(Base, TimestampMixin, SoftDeleteMixin):
    """
    ForumReply model.

    Attributes:
        id: Unique identifier (UUID v4)
        post_id: Thread this reply belongs to
        reply_to_id: Optional reply being answered (same thread)
        content: Reply text (1-5000 chars)
        author_id / author_name / author_avatar: Author snapshot
    """

    __tablename__ = "forum_replies"
    __table_args__ = (Index("ix_forum_replies_thread", "post_id", "is_deleted", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("forum_posts.id", ondelete="CASCADE"),
        nullable=False,
    )

    reply_to_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("forum_replies.id", ondelete="SET NULL"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    author_name: Mapped[str] = mapped_column(String(100), nullable=False)

    author_avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ForumReply(id={self.id}, post_id={self.post_id})>"
