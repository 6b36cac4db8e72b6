"""
Craftboard SQLAlchemy Models

Models Overview:
================
- Base: Base class and mixins (timestamps, soft delete)
- User: OAuth-backed community member with a role
- ForumPost / BlogPost / WikiGuide / DexMonster: content, one table per module
- ForumReply: Reply inside a forum thread
- UserInteraction: Interaction ledger rows (toggles and first-view markers)

Usage:
======
    from craftboard.shared.models import ForumPost, MODELS_BY_MODULE

    model = MODELS_BY_MODULE[ContentModule.WIKI]   # → WikiGuide
"""

from craftboard.shared.models.base import Base, TimestampMixin, SoftDeleteMixin
from craftboard.shared.models.enums import (
    ContentModule,
    ContentStatus,
    InteractionAction,
    InteractionResult,
    Role,
    SortOption,
    SpawnRate,
    TimeOfDay,
    WikiCategory,
    WikiDifficulty,
)
from craftboard.shared.models.user import User
from craftboard.shared.models.content import (
    COUNTER_COLUMNS,
    MODELS_BY_MODULE,
    BlogPost,
    ContentMixin,
    DexMonster,
    ForumPost,
    WikiGuide,
)
from craftboard.shared.models.forum_reply import ForumReply
from craftboard.shared.models.user_interaction import UserInteraction

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "ContentMixin",
    # Enums
    "ContentModule",
    "ContentStatus",
    "InteractionAction",
    "InteractionResult",
    "Role",
    "SortOption",
    "SpawnRate",
    "TimeOfDay",
    "WikiCategory",
    "WikiDifficulty",
    # Models
    "User",
    "ForumPost",
    "BlogPost",
    "WikiGuide",
    "DexMonster",
    "ForumReply",
    "UserInteraction",
    # Registries
    "COUNTER_COLUMNS",
    "MODELS_BY_MODULE",
]
