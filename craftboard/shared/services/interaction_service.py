"""
Interaction Service (the interaction ledger)

Toggles likes / bookmarks / shares / helpful marks and records views, keeping
the denormalized counters on the content row in step with the ledger rows.

Toggle Flow:
============
    DELETE ledger row RETURNING id
        │
        ├── row deleted  → counter - 1 (floor 0)      → "removed"
        │
        └── nothing      → INSERT .. ON CONFLICT DO NOTHING RETURNING id
                               │
                               ├── row inserted → counter + 1 → "added"
                               └── conflict     → (a concurrent request of the
                                                  same user already added it)
                                                  no counter change → "added"

Each branch moves the counter only when this call changed the ledger, so two
concurrent toggles by one user can never double-count, and the ledger row and
the counter change commit (or roll back) in the same transaction.

Retries:
========
A toggle is not idempotent: a client that times out and retries may flip the
state twice. The response always carries the post-mutation state, and
``get_state()`` lets a client converge with a follow-up read.
"""

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.core.exceptions import (
    AuthenticationError,
    ContentNotFoundError,
    ValidationError,
)
from craftboard.shared.core.logging import get_logger
from craftboard.shared.core.permissions import Principal, can_view_drafts
from craftboard.shared.models.content import COUNTER_COLUMNS, ContentMixin
from craftboard.shared.models.enums import ContentModule, InteractionAction, InteractionResult
from craftboard.shared.repositories.content_repository import get_content_repository
from craftboard.shared.repositories.interaction_repository import InteractionRepository
from craftboard.shared.schemas.interaction import InteractionState


logger = get_logger("craftboard.ledger")


class InteractionService:
    """
    Service for the interaction ledger.

    Attributes:
        session: Database session
        repo: InteractionRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = InteractionRepository(session)

    async def _visible_item(
        self,
        principal: Optional[Principal],
        module: ContentModule,
        slug: str,
    ) -> ContentMixin:
        repo = get_content_repository(module, self.session)
        item = await repo.get_by_slug(
            slug,
            include_all_statuses=can_view_drafts(principal, module),
        )
        if item is None:
            raise ContentNotFoundError(module.value, slug)
        return item

    # ═══════════════════════════════════════════════════════════════════════════
    # TOGGLES
    # ═══════════════════════════════════════════════════════════════════════════

    async def record_interaction(
        self,
        principal: Optional[Principal],
        module: ContentModule,
        slug: str,
        action: InteractionAction,
    ) -> tuple[InteractionResult, ContentMixin, InteractionState]:
        """
        Toggle ``action`` for the principal on the item at ``slug``.

        Args:
            principal: Acting user (anonymous is rejected)
            module: Content module of the item
            slug: Item slug
            action: like | bookmark | share | helpful

        Returns:
            Tuple of (result, refreshed_item, interaction_state)

        Raises:
            AuthenticationError: No principal
            ValidationError: Non-toggle action, or helpful outside the wiki
            ContentNotFoundError: Item missing, deleted or hidden
        """
        if principal is None:
            raise AuthenticationError("Authentication required to interact with content")

        module = ContentModule(module)
        action = InteractionAction(action)
        if not action.is_toggle:
            raise ValidationError(f"'{action.value}' cannot be toggled")
        if action == InteractionAction.HELPFUL and module != ContentModule.WIKI:
            raise ValidationError("Only wiki guides can be marked helpful")

        item = await self._visible_item(principal, module, slug)
        content_repo = get_content_repository(module, self.session)
        user_id = UUID(str(principal.id))
        column = COUNTER_COLUMNS[action.value]

        if await self.repo.remove(user_id, module, item.id, action):
            await content_repo.adjust_counter(item.id, column, -1)
            result = InteractionResult.REMOVED
        else:
            if await self.repo.add(user_id, module, item.id, action):
                await content_repo.adjust_counter(item.id, column, 1)
            result = InteractionResult.ADDED

        refreshed = await content_repo.get_fresh(item.id)
        actions = await self.repo.actions_for(user_id, module, item.id)

        logger.info(
            "Interaction toggled",
            module=module.value,
            slug=slug,
            action=action.value,
            result=result.value,
            user_id=str(user_id),
        )
        return result, refreshed, InteractionState.from_actions(actions)

    # ═══════════════════════════════════════════════════════════════════════════
    # VIEWS
    # ═══════════════════════════════════════════════════════════════════════════

    async def record_view(
        self,
        user_id: Optional[UUID],
        module: ContentModule,
        item: ContentMixin,
    ) -> bool:
        """
        Count a view of ``item``.

        Anonymous views always count. A signed-in user's view counts only the
        first time: the "viewed" ledger row is inserted with ON CONFLICT DO
        NOTHING and the counter moves only if that insert landed.

        Returns:
            True if views_count was incremented
        """
        content_repo = get_content_repository(module, self.session)

        if user_id is not None:
            first_view = await self.repo.add(user_id, ContentModule(module), item.id, InteractionAction.VIEW)
            if not first_view:
                return False

        await content_repo.adjust_counter(item.id, COUNTER_COLUMNS[InteractionAction.VIEW.value], 1)
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_state(
        self,
        principal: Optional[Principal],
        module: ContentModule,
        slug: str,
    ) -> InteractionState:
        """
        Current toggle state of the principal on the item at ``slug``.

        All false for anonymous callers (the item must still exist).
        """
        module = ContentModule(module)
        item = await self._visible_item(principal, module, slug)
        return await self.state_for_item(principal, module, item.id)

    async def state_for_item(
        self,
        principal: Optional[Principal],
        module: ContentModule,
        item_id: UUID,
    ) -> InteractionState:
        if principal is None:
            return InteractionState()
        actions = await self.repo.actions_for(UUID(str(principal.id)), ContentModule(module), item_id)
        return InteractionState.from_actions(actions)

    async def states_for_items(
        self,
        principal: Optional[Principal],
        module: ContentModule,
        item_ids: Iterable[UUID],
    ) -> dict[UUID, InteractionState]:
        """Toggle state for a page of items, one query."""
        if principal is None:
            return {}
        actions = await self.repo.actions_for_many(
            UUID(str(principal.id)), ContentModule(module), item_ids
        )
        return {item_id: InteractionState.from_actions(found) for item_id, found in actions.items()}
