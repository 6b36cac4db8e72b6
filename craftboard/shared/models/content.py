"""
Content Entity Models

One table per module, all sharing the ContentMixin columns.

Model Hierarchy:
================
    ContentMixin (slug, title, body, author snapshot, status, counters, soft delete)
       ├── ForumPost    ← + is_pinned, is_locked, replies_count, last_reply_at
       ├── BlogPost     ← + featured_image
       ├── WikiGuide    ← + difficulty, helpfuls_count
       └── DexMonster   ← + model_path, behaviors, drops, spawning, combat stats
                          (title is exposed as ``name``, body as ``description``)

SAMPLE FORUM_POSTS RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ slug             │ "hello-world-1"                                           │
│ title            │ "Hello World"                                             │
│ category         │ "General Discussion"                                      │
│ tags             │ ["intro", "new player"]                                   │
│ author_id        │ 660e8400-e29b-41d4-a716-446655440000                      │
│ author_name      │ "Alex"                                                    │
│ status           │ published                                                 │
│ is_deleted       │ false                                                     │
│ likes_count      │ 1                                                         │
│ views_count      │ 12                                                        │
└──────────────────────────────────────────────────────────────────────────────┘

Slug uniqueness:
================
A partial unique index covers ``slug`` only where ``is_deleted`` is false,
so a soft-deleted item releases its slug.
"""

from datetime import datetime
from typing import Any, ClassVar, Optional, Type
import uuid

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SQLEnum,
    Float,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, synonym

from craftboard.shared.models.base import Base, JSONType, SoftDeleteMixin, TimestampMixin
from craftboard.shared.models.enums import ContentModule, ContentStatus, WikiDifficulty
from craftboard.shared.models.user import enum_values


# Counter columns that the interaction ledger may adjust, per action
COUNTER_COLUMNS = {
    "like": "likes_count",
    "bookmark": "bookmarks_count",
    "share": "shares_count",
    "helpful": "helpfuls_count",
    "view": "views_count",
}


class ContentMixin(TimestampMixin, SoftDeleteMixin):
    """
    Columns shared by every content table.

    Attributes:
        id: UUID primary key
        slug: URL identifier, unique among non-deleted rows
        title: Title (monster name for the dex)
        body: Main HTML/markdown content
        excerpt / meta_description: Short plain-text summaries
        category / tags: Classification
        author_id / author_name / author_avatar: Author snapshot at creation
        status: published | draft | archived
        *_count: Denormalized counters, changed only through the ledger
    """

    module: ClassVar[ContentModule]

    @declared_attr.directive
    def __table_args__(cls) -> tuple:
        return (
            Index(
                f"uq_{cls.__tablename__}_slug_active",
                "slug",
                unique=True,
                postgresql_where=text("is_deleted = false"),
                sqlite_where=text("is_deleted = 0"),
            ),
            Index(f"ix_{cls.__tablename__}_listing", "is_deleted", "status", "created_at"),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    slug: Mapped[str] = mapped_column(String(220), nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    excerpt: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    meta_description: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)

    tags: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHOR SNAPSHOT
    # ═══════════════════════════════════════════════════════════════════════════

    author_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    author_name: Mapped[str] = mapped_column(String(100), nullable=False)

    author_avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    status: Mapped[ContentStatus] = mapped_column(
        SQLEnum(ContentStatus, native_enum=False, length=20, values_callable=enum_values),
        default=ContentStatus.PUBLISHED,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    views_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    likes_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    bookmarks_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )

    shares_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED

    def stats(self) -> dict[str, int]:
        """Counter snapshot in response shape."""
        data = {
            "viewsCount": self.views_count,
            "likesCount": self.likes_count,
            "bookmarksCount": self.bookmarks_count,
            "sharesCount": self.shares_count,
        }
        helpfuls = getattr(self, "helpfuls_count", None)
        if helpfuls is not None:
            data["helpfulsCount"] = helpfuls
        replies = getattr(self, "replies_count", None)
        if replies is not None:
            data["repliesCount"] = replies
        return data

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{type(self).__name__}(id={self.id}, slug={self.slug}, status={self.status})>"


# ═══════════════════════════════════════════════════════════════════════════════
# MODULE TABLES
# ═══════════════════════════════════════════════════════════════════════════════


class ForumPost(Base, ContentMixin):
    """Community discussion thread."""

    __tablename__ = "forum_posts"
    module = ContentModule.FORUM

    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    is_locked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    replies_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )

    last_reply_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class BlogPost(Base, ContentMixin):
    """Staff-written news / blog article."""

    __tablename__ = "blog_posts"
    module = ContentModule.BLOG

    featured_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class WikiGuide(Base, ContentMixin):
    """Wiki guide; the only module that accepts "helpful" votes."""

    __tablename__ = "wiki_guides"
    module = ContentModule.WIKI

    difficulty: Mapped[WikiDifficulty] = mapped_column(
        SQLEnum(WikiDifficulty, native_enum=False, length=20, values_callable=enum_values),
        default=WikiDifficulty.BEGINNER,
        nullable=False,
    )

    helpfuls_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )


class DexMonster(Base, ContentMixin):
    """
    Monster catalog entry.

    ``drops`` is a list of ``{itemName, dropChance, minQuantity, maxQuantity,
    isRare}``; ``spawning`` is ``{worlds, biomes, structures, lightLevel,
    timeOfDay, spawnRate}``.
    """

    __tablename__ = "dex_monsters"
    module = ContentModule.DEX

    name = synonym("title")
    description = synonym("body")

    model_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    behaviors: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    drops: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    spawning: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    health: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    damage: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    speed: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    xp_drop: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


ContentModel = Type[ContentMixin]

MODELS_BY_MODULE: dict[ContentModule, Any] = {
    ContentModule.FORUM: ForumPost,
    ContentModule.BLOG: BlogPost,
    ContentModule.WIKI: WikiGuide,
    ContentModule.DEX: DexMonster,
}
