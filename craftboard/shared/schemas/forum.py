"""
Forum Reply Schemas

Request/response models for thread replies.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import StringConstraints, field_validator

from craftboard.shared.models.forum_reply import ForumReply
from craftboard.shared.schemas.common import BaseSchema
from craftboard.shared.schemas.content import AuthorInfo
from craftboard.shared.utils.text import TextUtils


ReplyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)]


class ReplyCreate(BaseSchema):
    """Body of POST /api/forum/posts/{slug}/replies."""

    content: ReplyText
    reply_to_id: Optional[UUID] = None

    @field_validator("content")
    @classmethod
    def content_has_text(cls, value: str) -> str:
        if not TextUtils.has_text(value):
            raise ValueError("Reply must contain text, not just HTML tags")
        return value


class ReplyUpdate(BaseSchema):
    """Body of PUT /api/forum/replies/{id}."""

    content: ReplyText

    @field_validator("content")
    @classmethod
    def content_has_text(cls, value: str) -> str:
        if not TextUtils.has_text(value):
            raise ValueError("Reply must contain text, not just HTML tags")
        return value


class ReplyResponse(BaseSchema):
    id: str
    post_id: str
    reply_to_id: Optional[str] = None
    content: str
    author: AuthorInfo
    can_edit: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_reply(cls, reply: ForumReply, can_edit: bool = False) -> "ReplyResponse":
        return cls(
            id=str(reply.id),
            post_id=str(reply.post_id),
            reply_to_id=str(reply.reply_to_id) if reply.reply_to_id else None,
            content=reply.content,
            author=AuthorInfo(
                id=str(reply.author_id),
                name=reply.author_name,
                avatar=reply.author_avatar,
            ),
            can_edit=can_edit,
            created_at=reply.created_at,
            updated_at=reply.updated_at,
        )
