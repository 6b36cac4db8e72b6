"""
Interaction Repository

Rows of the interaction ledger. Every write here is a single conditional
statement whose outcome (row inserted / row deleted / nothing) tells the
caller whether to move the parent item's counter.

    ┌────────────────────┬─────────────────────────────┬───────────────────────┐
    │ operation          │ SQL                         │ True means            │
    ├────────────────────┼─────────────────────────────┼───────────────────────┤
    │ add()              │ INSERT .. ON CONFLICT       │ this call created it  │
    │                    │ DO NOTHING RETURNING id     │                       │
    │ remove()           │ DELETE .. RETURNING id      │ this call removed it  │
    └────────────────────┴─────────────────────────────┴───────────────────────┘
"""

from typing import Iterable
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.models.enums import ContentModule, InteractionAction
from craftboard.shared.models.user_interaction import UserInteraction
from craftboard.shared.repositories.base import BaseRepository


class InteractionRepository(BaseRepository[UserInteraction]):
    """Repository for UserInteraction rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UserInteraction, session)

    async def add(
        self,
        user_id: UUID,
        content_type: ContentModule,
        content_id: UUID,
        action: InteractionAction,
    ) -> bool:
        """Insert the record; False if it already existed."""
        return await self.insert_ignore(
            user_id=user_id,
            content_type=content_type,
            content_id=content_id,
            action=action,
        )

    async def remove(
        self,
        user_id: UUID,
        content_type: ContentModule,
        content_id: UUID,
        action: InteractionAction,
    ) -> bool:
        """Delete the record; False if there was nothing to delete."""
        result = await self.session.execute(
            delete(UserInteraction)
            .where(
                UserInteraction.user_id == user_id,
                UserInteraction.content_type == content_type,
                UserInteraction.content_id == content_id,
                UserInteraction.action == action,
            )
            .returning(UserInteraction.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None

    async def actions_for(
        self,
        user_id: UUID,
        content_type: ContentModule,
        content_id: UUID,
    ) -> set[InteractionAction]:
        """Active actions of one user on one item."""
        result = await self.session.execute(
            select(UserInteraction.action).where(
                UserInteraction.user_id == user_id,
                UserInteraction.content_type == content_type,
                UserInteraction.content_id == content_id,
            )
        )
        return set(result.scalars().all())

    async def actions_for_many(
        self,
        user_id: UUID,
        content_type: ContentModule,
        content_ids: Iterable[UUID],
    ) -> dict[UUID, set[InteractionAction]]:
        """Active actions of one user across a page of items (one query)."""
        ids = list(content_ids)
        if not ids:
            return {}

        result = await self.session.execute(
            select(UserInteraction.content_id, UserInteraction.action).where(
                UserInteraction.user_id == user_id,
                UserInteraction.content_type == content_type,
                UserInteraction.content_id.in_(ids),
            )
        )
        actions: dict[UUID, set[InteractionAction]] = {content_id: set() for content_id in ids}
        for content_id, action in result.all():
            actions.setdefault(content_id, set()).add(action)
        return actions
