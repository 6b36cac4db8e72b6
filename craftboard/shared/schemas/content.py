"""
Content Schemas

Request/response models for forum posts, blog posts, wiki guides and dex
monsters.

Validation Rules:
=================
- title: 3-200 chars after trimming
- content: up to 50000 chars, must contain text outside HTML tags
- excerpt: up to 500 chars
- tags: up to 10, each 1-30 chars of letters, digits, spaces and hyphens
- status: published | draft | archived (default published)

Write schemas expose ``to_columns()`` which maps API field names onto model
columns (``content`` → ``body``; for the dex ``name`` → ``title`` and
``description`` → ``body``).
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional

from pydantic import AfterValidator, Field, SerializeAsAny, StringConstraints, model_validator

from craftboard.shared.models.content import ContentMixin
from craftboard.shared.models.enums import (
    ContentStatus,
    SpawnRate,
    TimeOfDay,
    WikiCategory,
    WikiDifficulty,
)
from craftboard.shared.schemas.common import BaseSchema
from craftboard.shared.schemas.interaction import InteractionState
from craftboard.shared.utils.text import TextUtils


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Excerpt = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Tag = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=30, pattern=r"^[a-zA-Z0-9\s-]+$"),
]
ForumCategory = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100, pattern=r"^[a-zA-Z0-9\s&-]+$"),
]
PlainCategory = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


def _require_text(value: str) -> str:
    if not TextUtils.has_text(value):
        raise ValueError("Content must contain text, not just HTML tags")
    return value


Body = Annotated[str, StringConstraints(max_length=50000), AfterValidator(_require_text)]


# ═══════════════════════════════════════════════════════════════════════════════
# WRITE SCHEMAS (shared behaviour)
# ═══════════════════════════════════════════════════════════════════════════════


class ContentWriteSchema(BaseSchema):
    """
    Base for create/update bodies.

    Create schemas dump every field; update schemas dump only fields the
    client actually sent (and not null), giving partial-update semantics.
    """

    COLUMN_MAP: ClassVar[dict[str, str]] = {"content": "body"}
    PARTIAL: ClassVar[bool] = False

    def to_columns(self) -> dict[str, Any]:
        data = self.model_dump(
            mode="json",
            exclude_unset=self.PARTIAL,
            exclude_none=self.PARTIAL,
        )
        return {self.COLUMN_MAP.get(key, key): value for key, value in data.items()}


class ContentCreateBase(ContentWriteSchema):
    title: Title
    content: Body
    excerpt: Optional[Excerpt] = None
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    status: ContentStatus = ContentStatus.PUBLISHED


class ContentUpdateBase(ContentWriteSchema):
    PARTIAL: ClassVar[bool] = True

    title: Optional[Title] = None
    content: Optional[Body] = None
    excerpt: Optional[Excerpt] = None
    tags: Optional[list[Tag]] = Field(default=None, max_length=10)
    status: Optional[ContentStatus] = None


# ═══════════════════════════════════════════════════════════════════════════════
# FORUM
# ═══════════════════════════════════════════════════════════════════════════════


class ForumPostCreate(ContentCreateBase):
    category: ForumCategory


class ForumPostUpdate(ContentUpdateBase):
    """``is_pinned`` / ``is_locked`` are honoured only for admin and moderator."""

    category: Optional[ForumCategory] = None
    is_pinned: Optional[bool] = None
    is_locked: Optional[bool] = None


# ═══════════════════════════════════════════════════════════════════════════════
# BLOG
# ═══════════════════════════════════════════════════════════════════════════════


class BlogPostCreate(ContentCreateBase):
    category: Optional[PlainCategory] = None
    featured_image: Optional[str] = Field(default=None, max_length=500)


class BlogPostUpdate(ContentUpdateBase):
    category: Optional[PlainCategory] = None
    featured_image: Optional[str] = Field(default=None, max_length=500)


# ═══════════════════════════════════════════════════════════════════════════════
# WIKI
# ═══════════════════════════════════════════════════════════════════════════════


class WikiGuideCreate(ContentCreateBase):
    category: WikiCategory
    difficulty: WikiDifficulty = WikiDifficulty.BEGINNER


class WikiGuideUpdate(ContentUpdateBase):
    category: Optional[WikiCategory] = None
    difficulty: Optional[WikiDifficulty] = None


# ═══════════════════════════════════════════════════════════════════════════════
# DEX
# ═══════════════════════════════════════════════════════════════════════════════


class MonsterDrop(BaseSchema):
    item_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    drop_chance: float = Field(ge=0, le=1)
    min_quantity: int = Field(default=1, ge=0)
    max_quantity: int = Field(default=1, ge=0)
    is_rare: bool = False

    @model_validator(mode="after")
    def quantities_ordered(self) -> "MonsterDrop":
        if self.max_quantity < self.min_quantity:
            raise ValueError("maxQuantity must be greater than or equal to minQuantity")
        return self


class LightLevel(BaseSchema):
    min: int = Field(default=0, ge=0, le=15)
    max: int = Field(default=15, ge=0, le=15)

    @model_validator(mode="after")
    def range_ordered(self) -> "LightLevel":
        if self.max < self.min:
            raise ValueError("lightLevel.max must be greater than or equal to lightLevel.min")
        return self


class MonsterSpawning(BaseSchema):
    worlds: list[str] = Field(default_factory=list)
    biomes: list[str] = Field(default_factory=list)
    structures: list[str] = Field(default_factory=list)
    light_level: LightLevel = Field(default_factory=LightLevel)
    time_of_day: TimeOfDay = TimeOfDay.ANY
    spawn_rate: SpawnRate = SpawnRate.COMMON


class CombatStats(BaseSchema):
    health: float = Field(default=0, ge=0)
    damage: float = Field(default=0, ge=0)
    speed: float = Field(default=0, ge=0)
    xp_drop: int = Field(default=0, ge=0)


class DexWriteMixin:
    """Maps dex field names onto the shared content columns."""

    COLUMN_MAP: ClassVar[dict[str, str]] = {"name": "title", "description": "body"}

    def to_columns(self) -> dict[str, Any]:
        columns = super().to_columns()  # type: ignore[misc]
        combat = columns.pop("combat_stats", None)
        if combat:
            columns.update(combat)
        return columns


class DexMonsterCreate(DexWriteMixin, ContentWriteSchema):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    description: Body
    excerpt: Optional[Excerpt] = None
    category: PlainCategory
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    status: ContentStatus = ContentStatus.PUBLISHED
    model_path: Optional[str] = Field(default=None, max_length=500)
    behaviors: list[str] = Field(default_factory=list)
    drops: list[MonsterDrop] = Field(default_factory=list)
    spawning: MonsterSpawning = Field(default_factory=MonsterSpawning)
    combat_stats: CombatStats = Field(default_factory=CombatStats)


class DexMonsterUpdate(DexWriteMixin, ContentWriteSchema):
    PARTIAL: ClassVar[bool] = True

    name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]] = None
    description: Optional[Body] = None
    excerpt: Optional[Excerpt] = None
    category: Optional[PlainCategory] = None
    tags: Optional[list[Tag]] = Field(default=None, max_length=10)
    status: Optional[ContentStatus] = None
    model_path: Optional[str] = Field(default=None, max_length=500)
    behaviors: Optional[list[str]] = None
    drops: Optional[list[MonsterDrop]] = None
    spawning: Optional[MonsterSpawning] = None
    combat_stats: Optional[CombatStats] = None


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class AuthorInfo(BaseSchema):
    id: str
    name: str
    avatar: Optional[str] = None


class ContentItemResponse(BaseSchema):
    """
    Content item as returned by detail and listing endpoints.

    ``interactions`` is present only for authenticated viewers;
    ``permissions`` only on detail responses.
    """

    id: str
    slug: str
    title: str
    content: str
    excerpt: Optional[str] = None
    meta_description: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    author: AuthorInfo
    status: ContentStatus
    stats: dict[str, int]
    interactions: Optional[InteractionState] = None
    permissions: Optional[dict[str, bool]] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def item_fields(cls, item: ContentMixin) -> dict[str, Any]:
        return {
            "id": str(item.id),
            "slug": item.slug,
            "title": item.title,
            "content": item.body,
            "excerpt": item.excerpt,
            "meta_description": item.meta_description,
            "category": item.category,
            "tags": list(item.tags or []),
            "author": AuthorInfo(
                id=str(item.author_id),
                name=item.author_name,
                avatar=item.author_avatar,
            ),
            "status": item.status,
            "stats": item.stats(),
            "created_at": item.created_at,
            "updated_at": item.updated_at,
        }

    @classmethod
    def from_item(
        cls,
        item: ContentMixin,
        interactions: Optional[InteractionState] = None,
        permissions: Optional[dict[str, bool]] = None,
    ) -> "ContentItemResponse":
        return cls(**cls.item_fields(item), interactions=interactions, permissions=permissions)


class ForumPostResponse(ContentItemResponse):
    is_pinned: bool = False
    is_locked: bool = False
    last_reply_at: Optional[datetime] = None

    @classmethod
    def item_fields(cls, item: ContentMixin) -> dict[str, Any]:
        fields = super().item_fields(item)
        fields.update(
            is_pinned=item.is_pinned,
            is_locked=item.is_locked,
            last_reply_at=item.last_reply_at,
        )
        return fields


class BlogPostResponse(ContentItemResponse):
    featured_image: Optional[str] = None

    @classmethod
    def item_fields(cls, item: ContentMixin) -> dict[str, Any]:
        fields = super().item_fields(item)
        fields["featured_image"] = item.featured_image
        return fields


class WikiGuideResponse(ContentItemResponse):
    difficulty: WikiDifficulty

    @classmethod
    def item_fields(cls, item: ContentMixin) -> dict[str, Any]:
        fields = super().item_fields(item)
        fields["difficulty"] = item.difficulty
        return fields


class DexMonsterResponse(ContentItemResponse):
    name: str
    description: str
    model_path: Optional[str] = None
    behaviors: list[str] = Field(default_factory=list)
    drops: list[MonsterDrop] = Field(default_factory=list)
    spawning: MonsterSpawning = Field(default_factory=MonsterSpawning)
    combat_stats: CombatStats

    @classmethod
    def item_fields(cls, item: ContentMixin) -> dict[str, Any]:
        fields = super().item_fields(item)
        fields.update(
            name=item.title,
            description=item.body,
            model_path=item.model_path,
            behaviors=list(item.behaviors or []),
            drops=[MonsterDrop.model_validate(drop) for drop in item.drops or []],
            spawning=MonsterSpawning.model_validate(item.spawning or {}),
            combat_stats=CombatStats(
                health=item.health,
                damage=item.damage,
                speed=item.speed,
                xp_drop=item.xp_drop,
            ),
        )
        return fields


class ContentMutationResponse(BaseSchema):
    """PUT payload: the updated item and whether its URL moved."""

    item: SerializeAsAny[ContentItemResponse]
    slug_changed: bool
    new_slug: str


class CategoryCount(BaseSchema):
    name: str
    count: int
