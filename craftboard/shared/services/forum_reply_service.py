"""
Forum Reply Service

Thread replies: listing, posting (with the lock rule), editing and soft
deleting. Reply authorship follows the forum policy of the permission engine,
so a member may edit or delete their own replies and staff may manage any.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ContentNotFoundError,
    ReplyNotFoundError,
    ValidationError,
)
from craftboard.shared.core.logging import get_logger
from craftboard.shared.core.permissions import Principal, can_delete, can_edit, can_view_drafts
from craftboard.shared.models.base import utc_now
from craftboard.shared.models.content import ForumPost
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.models.forum_reply import ForumReply
from craftboard.shared.repositories.content_repository import ForumPostRepository
from craftboard.shared.repositories.forum_reply_repository import ForumReplyRepository
from craftboard.shared.schemas.forum import ReplyCreate


logger = get_logger("craftboard.forum")

FORUM = ContentModule.FORUM


class ForumReplyService:
    """
    Service for forum replies.

    Attributes:
        session: Database session
        posts: ForumPostRepository instance
        replies: ForumReplyRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.posts = ForumPostRepository(session)
        self.replies = ForumReplyRepository(session)

    async def _visible_post(self, principal: Optional[Principal], slug: str) -> ForumPost:
        post = await self.posts.get_by_slug(slug, include_all_statuses=can_view_drafts(principal, FORUM))
        if post is None:
            raise ContentNotFoundError(FORUM.value, slug)
        return post

    async def _live_reply(self, reply_id: UUID) -> ForumReply:
        reply = await self.replies.get_active(reply_id)
        if reply is None:
            raise ReplyNotFoundError(str(reply_id))
        return reply

    async def list_replies(
        self,
        principal: Optional[Principal],
        slug: str,
        *,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[ForumReply], int]:
        """
        Page of live replies of the thread at ``slug``, oldest first.

        Raises:
            ContentNotFoundError: Thread missing or hidden
        """
        post = await self._visible_post(principal, slug)
        return await self.replies.list_for_post(post.id, offset=(page - 1) * limit, limit=limit)

    async def create_reply(
        self,
        principal: Optional[Principal],
        slug: str,
        data: ReplyCreate,
    ) -> ForumReply:
        """
        Post a reply to the thread at ``slug``.

        Raises:
            AuthenticationError: Anonymous caller
            AuthorizationError: Banned, or the thread is locked for non-staff
            ContentNotFoundError: Thread missing or hidden
            ValidationError: ``reply_to_id`` is not a live reply of this thread
        """
        if principal is None:
            raise AuthenticationError("Authentication required to reply")
        if principal.is_banned:
            raise AuthorizationError("Banned users cannot reply")

        post = await self._visible_post(principal, slug)
        if post.is_locked and not principal.is_staff:
            raise AuthorizationError("This thread is locked")

        if data.reply_to_id is not None:
            parent = await self.replies.get_active(data.reply_to_id)
            if parent is None or parent.post_id != post.id:
                raise ValidationError(
                    "replyToId must reference a reply in this thread",
                    details={"replyToId": str(data.reply_to_id)},
                )

        reply = await self.replies.create(
            post_id=post.id,
            reply_to_id=data.reply_to_id,
            content=data.content,
            author_id=UUID(str(principal.id)),
            author_name=principal.name or "Unknown User",
            author_avatar=principal.avatar,
            is_deleted=False,
        )
        await self.posts.record_reply(post.id, utc_now())

        logger.info("Reply created", slug=slug, reply_id=str(reply.id), user_id=principal.id)
        return reply

    async def update_reply(
        self,
        principal: Optional[Principal],
        reply_id: UUID,
        content: str,
    ) -> ForumReply:
        if principal is None:
            raise AuthenticationError()

        reply = await self._live_reply(reply_id)
        if not can_edit(principal, FORUM, reply):
            raise AuthorizationError("You do not have permission to edit this reply")

        updated = await self.replies.update_content(reply_id, content)
        if updated is None:
            raise ReplyNotFoundError(str(reply_id))
        return updated

    async def delete_reply(self, principal: Optional[Principal], reply_id: UUID) -> None:
        """Soft delete; the thread's replies_count drops by one (floor 0)."""
        if principal is None:
            raise AuthenticationError()

        reply = await self._live_reply(reply_id)
        if not can_delete(principal, FORUM, reply):
            raise AuthorizationError("You do not have permission to delete this reply")

        if not await self.replies.soft_delete(reply_id):
            raise ReplyNotFoundError(str(reply_id))
        await self.posts.adjust_counter(reply.post_id, "replies_count", -1)

        logger.info("Reply deleted", reply_id=str(reply_id), user_id=principal.id)
