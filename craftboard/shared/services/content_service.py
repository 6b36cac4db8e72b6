"""
Content Service

Business rules for forum posts, blog posts, wiki guides and dex monsters.
One ContentService instance serves one module; the permission engine gates
every operation before the repository is touched.

Visibility:
===========
    ┌───────────────┬──────────────┬─────────────────────────────────────┐
    │ is_deleted    │ status       │ visible to                          │
    ├───────────────┼──────────────┼─────────────────────────────────────┤
    │ false         │ published    │ everyone                            │
    │ false         │ draft/arch.  │ principals with can_view_drafts     │
    │ true          │ any          │ nobody (404)                        │
    └───────────────┴──────────────┴─────────────────────────────────────┘

A hidden item raises the same ContentNotFoundError as a missing one on
reads. On PUT/DELETE the current item is resolved across all statuses and a
principal without rights gets 403, since the route already names the item.

Usage:
======
    from craftboard.shared.services.content_service import ContentService

    service = ContentService(db, ContentModule.WIKI)
    view = await service.get_item(principal, "getting-started")
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ContentNotFoundError,
)
from craftboard.shared.core.logging import get_logger
from craftboard.shared.core.permissions import (
    Principal,
    can_create,
    can_delete,
    can_edit,
    can_view_drafts,
    get_content_permissions,
)
from craftboard.shared.models.content import ContentMixin
from craftboard.shared.models.enums import ContentModule, ContentStatus, SortOption
from craftboard.shared.repositories.content_repository import (
    ContentFilters,
    SlugExhaustedError,
    get_content_repository,
)
from craftboard.shared.schemas.content import ContentWriteSchema
from craftboard.shared.schemas.interaction import InteractionState
from craftboard.shared.services.interaction_service import InteractionService
from craftboard.shared.utils.text import TextUtils


logger = get_logger("craftboard.content")

# Forum moderation flags only staff may set
STAFF_ONLY_FIELDS = ("is_pinned", "is_locked")


@dataclass
class ContentView:
    """An item as one principal sees it."""

    item: ContentMixin
    interactions: Optional[InteractionState] = None
    permissions: Optional[dict[str, bool]] = None


@dataclass
class ContentPage:
    """One page of a listing."""

    items: list[ContentView]
    total: int
    page: int
    limit: int
    filters: dict[str, Any] = field(default_factory=dict)


class ContentService:
    """
    Service for one content module.

    Handles:
    - Listing with filters, the draft gate and per-viewer interaction state
    - Detail reads (which count a view)
    - Create / update / soft delete behind the permission engine
    - Category counts

    Attributes:
        session: Database session
        module: Content module served
        repo: Module repository
        interactions: Interaction ledger
    """

    def __init__(self, session: AsyncSession, module: ContentModule) -> None:
        self.session = session
        self.module = ContentModule(module)
        self.repo = get_content_repository(self.module, session)
        self.interactions = InteractionService(session)

    def _require_principal(self, principal: Optional[Principal]) -> Principal:
        if principal is None:
            raise AuthenticationError()
        return principal

    def _deny(self, principal: Principal, operation: str, slug: Optional[str] = None) -> None:
        logger.warning(
            "Permission denied",
            module=self.module.value,
            operation=operation,
            slug=slug,
            user_id=principal.id,
            role=principal.role.value,
        )
        raise AuthorizationError(f"You do not have permission to {operation} this content")

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_items(
        self,
        principal: Optional[Principal],
        *,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
        tags: Optional[list[str]] = None,
        author: Optional[str] = None,
        sort: SortOption = SortOption.LATEST,
    ) -> ContentPage:
        """
        Filtered page of items.

        A ``status`` other than published is honoured only for principals who
        may view drafts; everyone else silently gets published items.
        """
        effective_status: Optional[str] = None
        if status and status != ContentStatus.PUBLISHED.value:
            if can_view_drafts(principal, self.module):
                effective_status = status

        filters = ContentFilters(
            category=category or None,
            search=search or None,
            status=effective_status,
            tags=list(tags or []),
            author=author or None,
            sort=sort,
        )
        items, total = await self.repo.list_items(filters, offset=(page - 1) * limit, limit=limit)

        states = await self.interactions.states_for_items(
            principal, self.module, [item.id for item in items]
        )
        views = [
            ContentView(
                item=item,
                interactions=states.get(item.id, InteractionState()) if principal else None,
            )
            for item in items
        ]

        applied = {
            "category": filters.category,
            "search": filters.search,
            "status": effective_status or ContentStatus.PUBLISHED.value,
            "tags": filters.tags,
            "author": filters.author,
            "sortBy": sort.value,
        }
        return ContentPage(
            items=views,
            total=total,
            page=page,
            limit=limit,
            filters={key: value for key, value in applied.items() if value},
        )

    async def get_item(self, principal: Optional[Principal], slug: str) -> ContentView:
        """
        Detail read by slug. Counts a view (first view only for signed-in users).

        Raises:
            ContentNotFoundError: Missing, deleted, or a draft the principal cannot see
        """
        item = await self.repo.get_by_slug(
            slug, include_all_statuses=can_view_drafts(principal, self.module)
        )
        if item is None:
            raise ContentNotFoundError(self.module.value, slug)

        viewer_id = UUID(str(principal.id)) if principal else None
        if await self.interactions.record_view(viewer_id, self.module, item):
            item = await self.repo.get_fresh(item.id)

        state = None
        if principal is not None:
            state = await self.interactions.state_for_item(principal, self.module, item.id)

        return ContentView(
            item=item,
            interactions=state,
            permissions=get_content_permissions(principal, self.module, item).to_dict(),
        )

    async def categories(self) -> list[dict[str, Any]]:
        counts = await self.repo.category_counts()
        return [{"name": name, "count": total} for name, total in counts.items()]

    def permissions(self, principal: Optional[Principal]) -> dict[str, bool]:
        return get_content_permissions(principal, self.module).to_dict()

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_item(
        self,
        principal: Optional[Principal],
        data: ContentWriteSchema,
    ) -> ContentView:
        """
        Create an item authored by ``principal``.

        Raises:
            AuthenticationError: Anonymous caller
            AuthorizationError: can_create refused
            ConflictError: No free slug could be found
        """
        principal = self._require_principal(principal)
        if not can_create(principal, self.module):
            self._deny(principal, "create")

        values = data.to_columns()
        if not values.get("excerpt"):
            values["excerpt"] = TextUtils.generate_excerpt(values.get("body", ""))

        try:
            item = await self.repo.create_item(values, principal)
        except SlugExhaustedError as e:
            raise ConflictError(f"Could not allocate a unique slug for '{e.base_slug}'") from e

        logger.info(
            "Content created",
            module=self.module.value,
            slug=item.slug,
            user_id=principal.id,
        )
        return ContentView(
            item=item,
            permissions=get_content_permissions(principal, self.module, item).to_dict(),
        )

    async def update_item(
        self,
        principal: Optional[Principal],
        slug: str,
        patch: ContentWriteSchema,
    ) -> tuple[ContentView, bool]:
        """
        Partial update of the item at ``slug``.

        Returns:
            Tuple of (view, slug_changed)

        Raises:
            AuthenticationError: Anonymous caller
            ContentNotFoundError: No live item at ``slug`` (before or during the write)
            AuthorizationError: can_edit refused, or a non-staff principal set a
                moderation flag
        """
        principal = self._require_principal(principal)

        current = await self.repo.get_by_slug(slug, include_all_statuses=True)
        if current is None:
            raise ContentNotFoundError(self.module.value, slug)
        if not can_edit(principal, self.module, current):
            self._deny(principal, "edit", slug)

        values = patch.to_columns()
        if not principal.is_staff and any(name in values for name in STAFF_ONLY_FIELDS):
            self._deny(principal, "pin or lock", slug)

        try:
            item = await self.repo.update_by_slug(slug, values)
        except SlugExhaustedError as e:
            raise ConflictError(f"Could not allocate a unique slug for '{e.base_slug}'") from e
        if item is None:
            raise ContentNotFoundError(self.module.value, slug)

        slug_changed = item.slug != slug
        logger.info(
            "Content updated",
            module=self.module.value,
            slug=slug,
            new_slug=item.slug if slug_changed else None,
            fields=sorted(values),
            user_id=principal.id,
        )
        return (
            ContentView(
                item=item,
                permissions=get_content_permissions(principal, self.module, item).to_dict(),
            ),
            slug_changed,
        )

    async def delete_item(self, principal: Optional[Principal], slug: str) -> None:
        """
        Soft delete the item at ``slug``.

        Raises:
            AuthenticationError: Anonymous caller
            ContentNotFoundError: No live item at ``slug``
            AuthorizationError: can_delete refused
        """
        principal = self._require_principal(principal)

        current = await self.repo.get_by_slug(slug, include_all_statuses=True)
        if current is None:
            raise ContentNotFoundError(self.module.value, slug)
        if not can_delete(principal, self.module, current):
            self._deny(principal, "delete", slug)

        if not await self.repo.soft_delete_by_slug(slug):
            raise ContentNotFoundError(self.module.value, slug)

        logger.info("Content deleted", module=self.module.value, slug=slug, user_id=principal.id)
