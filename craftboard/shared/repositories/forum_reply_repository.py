"""
Forum Reply Repository

Replies are listed oldest first and soft-deleted like content items.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from craftboard.shared.models.base import utc_now
from craftboard.shared.models.forum_reply import ForumReply
from craftboard.shared.repositories.base import BaseRepository


class ForumReplyRepository(BaseRepository[ForumReply]):
    """Repository for ForumReply rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ForumReply, session)

    async def get_active(self, reply_id: UUID) -> Optional[ForumReply]:
        result = await self.session.execute(
            select(ForumReply).where(ForumReply.id == reply_id, ForumReply.is_deleted.is_(False))
        )
        return result.scalar_one_or_none()

    async def list_for_post(
        self,
        post_id: UUID,
        *,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ForumReply], int]:
        """
        Page of live replies in thread order.

        SQL Generated:
            SELECT * FROM forum_replies
            WHERE post_id = '...' AND is_deleted = false
            ORDER BY created_at ASC
            OFFSET 0 LIMIT 20
        """
        conditions = (ForumReply.post_id == post_id, ForumReply.is_deleted.is_(False))

        total = (
            await self.session.execute(select(sql_count()).select_from(ForumReply).where(*conditions))
        ).scalar() or 0

        result = await self.session.execute(
            select(ForumReply)
            .where(*conditions)
            .order_by(ForumReply.created_at.asc(), ForumReply.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def update_content(self, reply_id: UUID, content: str) -> Optional[ForumReply]:
        """Rewrite a live reply's text; None if it is gone."""
        result = await self.session.execute(
            update(ForumReply)
            .where(ForumReply.id == reply_id, ForumReply.is_deleted.is_(False))
            .values(content=content, updated_at=utc_now())
            .returning(ForumReply.id)
            .execution_options(synchronize_session=False)
        )
        if result.scalar_one_or_none() is None:
            return None

        refreshed = await self.session.execute(
            select(ForumReply)
            .where(ForumReply.id == reply_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    async def soft_delete(self, reply_id: UUID) -> bool:
        now = utc_now()
        result = await self.session.execute(
            update(ForumReply)
            .where(ForumReply.id == reply_id, ForumReply.is_deleted.is_(False))
            .values(is_deleted=True, deleted_at=now, updated_at=now)
            .returning(ForumReply.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None
