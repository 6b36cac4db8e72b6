"""
Content Repository

CRUD, slug management, counters and listing for one content table. The same
class serves all four modules; ForumPostRepository adds reply bookkeeping.

Visibility Rules (applied here):
================================
- Soft-deleted rows are excluded from every query in this module.
- Non-published rows are excluded unless the caller passes
  ``include_all_statuses=True`` (or an explicit status filter). This class
  never checks roles: the service decides, with the permission engine,
  whether the caller may ask for drafts.

Slug Disambiguation:
====================
    "Hello World"  → hello-world          (free)
    "Hello World"  → hello-world-1        (hello-world taken)
    "Hello World"  → hello-world-2        (hello-world, hello-world-1 taken)

Counter Updates:
================
Counters are adjusted with a single field-level UPDATE
(``SET likes_count = likes_count + 1``), never by reading the row, changing
the Python attribute and writing it back. Concurrent interactions touching
different counters of the same row therefore cannot overwrite each other.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence, Union
from uuid import UUID

from sqlalchemy import String, case, cast, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from craftboard.shared.core.permissions import Principal
from craftboard.shared.models.base import utc_now
from craftboard.shared.models.content import MODELS_BY_MODULE, ContentMixin, ForumPost
from craftboard.shared.models.enums import ContentModule, ContentStatus, SortOption
from craftboard.shared.repositories.base import BaseRepository
from craftboard.shared.utils.text import TextUtils


# Upper bound on "-N" suffixes tried before giving up with a conflict
MAX_SLUG_ATTEMPTS = 1000


@dataclass
class ContentFilters:
    """
    Listing filters.

    ``status`` of None means "published only"; "all" means every status
    (the service only passes "all" to principals who may view drafts).
    """

    category: Optional[str] = None
    search: Optional[str] = None
    status: Union[ContentStatus, str, None] = None
    tags: list[str] = field(default_factory=list)
    author: Optional[str] = None
    sort: SortOption = SortOption.LATEST


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SlugExhaustedError(Exception):
    """Raised when no free slug was found within MAX_SLUG_ATTEMPTS."""

    def __init__(self, base_slug: str) -> None:
        self.base_slug = base_slug
        super().__init__(f"No free slug for '{base_slug}'")


class ContentRepository(BaseRepository[ContentMixin]):
    """
    Repository for one module's content table.

    Example:
        repo = ContentRepository(WikiGuide, db)
        guide = await repo.get_by_slug("getting-started")
    """

    def __init__(self, model: type, session: AsyncSession) -> None:
        super().__init__(model, session)

    def _active(self):
        return select(self.model).where(self.model.is_deleted.is_(False))

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_slug(
        self,
        slug: str,
        include_all_statuses: bool = False,
    ) -> Optional[ContentMixin]:
        """
        Get a non-deleted item by slug.

        Args:
            slug: URL slug
            include_all_statuses: Also return drafts/archived items

        Returns:
            The item, or None when missing, deleted, or hidden by status
        """
        query = self._active().where(self.model.slug == slug)
        if not include_all_statuses:
            query = query.where(self.model.status == ContentStatus.PUBLISHED)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_fresh(self, item_id: UUID) -> Optional[ContentMixin]:
        """Re-read a row, overwriting whatever the session has cached for it."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == item_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        query = (
            select(sql_count())
            .select_from(self.model)
            .where(self.model.slug == slug, self.model.is_deleted.is_(False))
        )
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.session.execute(query)
        return (result.scalar() or 0) > 0

    async def generate_unique_slug(self, title: str, exclude_id: Optional[UUID] = None) -> str:
        """
        Slug for ``title`` that no other non-deleted item uses.

        Args:
            title: Source title
            exclude_id: Item being renamed (its own slug does not count)

        Raises:
            SlugExhaustedError: After MAX_SLUG_ATTEMPTS taken suffixes
        """
        base_slug = TextUtils.slugify(title)
        if not await self.slug_exists(base_slug, exclude_id):
            return base_slug

        for counter in range(1, MAX_SLUG_ATTEMPTS + 1):
            candidate = TextUtils.slug_with_counter(base_slug, counter)
            if not await self.slug_exists(candidate, exclude_id):
                return candidate

        raise SlugExhaustedError(base_slug)

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_item(self, data: dict[str, Any], author: Principal) -> ContentMixin:
        """
        Insert a new item authored by ``author``.

        The caller must already have passed can_create. Counters start at
        zero; status defaults to published.
        """
        values = dict(data)
        values["slug"] = await self.generate_unique_slug(values["title"])
        values.setdefault("status", ContentStatus.PUBLISHED)
        if not values.get("meta_description"):
            values["meta_description"] = TextUtils.generate_meta_description(
                values.get("body", ""), values.get("excerpt")
            )

        return await self.create(
            **values,
            author_id=UUID(str(author.id)),
            author_name=author.name or "Unknown User",
            author_avatar=author.avatar,
            is_deleted=False,
        )

    async def update_by_slug(self, slug: str, patch: dict[str, Any]) -> Optional[ContentMixin]:
        """
        Apply a partial update to the item currently at ``slug``.

        The item is re-resolved here and the UPDATE is conditional on the row
        still being undeleted, so a delete that lands between the caller's
        permission check and this write turns the update into "not found".
        A changed title moves the item to a fresh unique slug.

        Returns:
            The updated item, or None when no live item matched
        """
        current = await self.get_by_slug(slug, include_all_statuses=True)
        if current is None:
            return None

        values = {key: value for key, value in patch.items() if hasattr(self.model, key)}
        if "title" in values and values["title"] != current.title:
            values["slug"] = await self.generate_unique_slug(values["title"], exclude_id=current.id)
        if "body" in values or "excerpt" in values:
            if "meta_description" not in values:
                values["meta_description"] = TextUtils.generate_meta_description(
                    values.get("body", current.body),
                    values.get("excerpt", current.excerpt),
                )

        values["updated_at"] = utc_now()
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == current.id, self.model.is_deleted.is_(False))
            .values(**values)
            .returning(self.model.id)
            .execution_options(synchronize_session=False)
        )
        if result.scalar_one_or_none() is None:
            return None

        return await self.get_fresh(current.id)

    async def soft_delete_by_slug(self, slug: str) -> bool:
        """
        Mark the live item at ``slug`` deleted. Status is left as it was.

        Returns:
            True if a row was marked, False if none matched
        """
        now = utc_now()
        result = await self.session.execute(
            update(self.model)
            .where(self.model.slug == slug, self.model.is_deleted.is_(False))
            .values(is_deleted=True, deleted_at=now, updated_at=now)
            .returning(self.model.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None

    async def adjust_counter(self, item_id: UUID, column: str, delta: int) -> None:
        """
        Atomically add ``delta`` to a counter column, flooring at zero.

        ``updated_at`` is pinned to itself so counters do not count as edits.

        SQL Generated:
            UPDATE wiki_guides
            SET helpfuls_count = CASE WHEN helpfuls_count + -1 < 0 THEN 0
                                      ELSE helpfuls_count + -1 END,
                updated_at = updated_at
            WHERE id = '...'
        """
        counter = getattr(self.model, column)
        new_value = counter + delta
        if delta < 0:
            new_value = case((counter + delta < 0, 0), else_=counter + delta)

        await self.session.execute(
            update(self.model)
            .where(self.model.id == item_id)
            .values({column: new_value, "updated_at": self.model.updated_at})
            .execution_options(synchronize_session=False)
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING
    # ═══════════════════════════════════════════════════════════════════════════

    def _apply_filters(self, query, filters: ContentFilters):
        model = self.model
        query = query.where(model.is_deleted.is_(False))

        if filters.status is None:
            query = query.where(model.status == ContentStatus.PUBLISHED)
        elif filters.status != "all":
            query = query.where(model.status == ContentStatus(filters.status))

        if filters.category:
            query = query.where(model.category == filters.category)

        if filters.search:
            pattern = f"%{_escape_like(filters.search.strip())}%"
            query = query.where(
                or_(
                    model.title.ilike(pattern, escape="\\"),
                    model.excerpt.ilike(pattern, escape="\\"),
                    model.body.ilike(pattern, escape="\\"),
                )
            )

        for tag in filters.tags:
            # tags is a JSON array of strings; match the quoted element
            pattern = f'%"{_escape_like(tag)}"%'
            query = query.where(cast(model.tags, String).like(pattern, escape="\\"))

        if filters.author:
            conditions = [func.lower(model.author_name) == filters.author.lower()]
            try:
                conditions.append(model.author_id == UUID(filters.author))
            except ValueError:
                pass
            query = query.where(or_(*conditions))

        return query

    def _order_by(self, sort: SortOption) -> Sequence[Any]:
        model = self.model
        if sort == SortOption.OLDEST:
            return [model.created_at.asc(), model.id.asc()]
        if sort == SortOption.POPULAR:
            return [model.likes_count.desc(), model.views_count.desc(), model.created_at.desc()]
        if sort == SortOption.VIEWS:
            return [model.views_count.desc(), model.created_at.desc()]
        return [model.created_at.desc(), model.id.desc()]

    async def list_items(
        self,
        filters: ContentFilters,
        *,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ContentMixin], int]:
        """
        Filtered, sorted page of items plus the total match count.

        Returns:
            (items, total)
        """
        total_query = self._apply_filters(select(sql_count()).select_from(self.model), filters)
        total = (await self.session.execute(total_query)).scalar() or 0

        query = (
            self._apply_filters(select(self.model), filters)
            .order_by(*self._order_by(filters.sort))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def category_counts(self) -> dict[str, int]:
        """Published, non-deleted items per category."""
        result = await self.session.execute(
            select(self.model.category, sql_count())
            .where(
                self.model.is_deleted.is_(False),
                self.model.status == ContentStatus.PUBLISHED,
                self.model.category.is_not(None),
            )
            .group_by(self.model.category)
            .order_by(self.model.category)
        )
        return {category: total for category, total in result.all()}

    async def aggregate_stats(self) -> dict[str, int]:
        """Item count and counter sums over published, non-deleted items."""
        columns = [
            sql_count().label("totalPosts"),
            func.coalesce(func.sum(self.model.views_count), 0).label("totalViews"),
            func.coalesce(func.sum(self.model.likes_count), 0).label("totalLikes"),
            func.coalesce(func.sum(self.model.bookmarks_count), 0).label("totalBookmarks"),
            func.coalesce(func.sum(self.model.shares_count), 0).label("totalShares"),
        ]
        if hasattr(self.model, "helpfuls_count"):
            columns.append(
                func.coalesce(func.sum(self.model.helpfuls_count), 0).label("totalHelpfuls")
            )
        if hasattr(self.model, "replies_count"):
            columns.append(
                func.coalesce(func.sum(self.model.replies_count), 0).label("totalReplies")
            )

        result = await self.session.execute(
            select(*columns).where(
                self.model.is_deleted.is_(False),
                self.model.status == ContentStatus.PUBLISHED,
            )
        )
        row = result.one()
        return {key: int(value or 0) for key, value in row._mapping.items()}


class ForumPostRepository(ContentRepository):
    """Forum threads: pinned first, plus reply counters."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ForumPost, session)

    def _order_by(self, sort: SortOption) -> Sequence[Any]:
        if sort == SortOption.POPULAR:
            ordering = [
                ForumPost.likes_count.desc(),
                ForumPost.replies_count.desc(),
                ForumPost.created_at.desc(),
            ]
        else:
            ordering = list(super()._order_by(sort))
        return [ForumPost.is_pinned.desc(), *ordering]

    async def record_reply(self, post_id: UUID, replied_at: datetime) -> None:
        """replies_count + 1 and last_reply_at, in one UPDATE."""
        await self.session.execute(
            update(ForumPost)
            .where(ForumPost.id == post_id)
            .values(
                replies_count=ForumPost.replies_count + 1,
                last_reply_at=replied_at,
                updated_at=ForumPost.updated_at,
            )
            .execution_options(synchronize_session=False)
        )


def get_content_repository(module: ContentModule, session: AsyncSession) -> ContentRepository:
    """Repository for ``module``."""
    module = ContentModule(module)
    if module == ContentModule.FORUM:
        return ForumPostRepository(session)
    return ContentRepository(MODELS_BY_MODULE[module], session)
