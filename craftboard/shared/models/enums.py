"""
Enums used across the application.
"""

from enum import Enum


class ContentModule(str, Enum):
    """The four content verticals."""

    FORUM = "forum"
    BLOG = "blog"
    WIKI = "wiki"
    DEX = "dex"


class Role(str, Enum):
    """
    User role.

    Stored on the user row and re-read on every request, so a role change
    (including a ban) applies to the next request the user makes.
    """

    ADMIN = "admin"
    MODERATOR = "moderator"
    VIP = "vip"
    MEMBER = "member"
    BANNED = "banned"


class ContentStatus(str, Enum):
    """Publication state. Orthogonal to soft deletion."""

    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


class InteractionAction(str, Enum):
    """
    Kinds of user interaction recorded in the ledger.

    Every action except VIEW is a toggle; VIEW is a first-view marker.
    """

    LIKE = "like"
    BOOKMARK = "bookmark"
    SHARE = "share"
    HELPFUL = "helpful"
    VIEW = "view"

    @property
    def is_toggle(self) -> bool:
        return self is not InteractionAction.VIEW


class InteractionResult(str, Enum):
    """Outcome of a toggle."""

    ADDED = "added"
    REMOVED = "removed"


class SortOption(str, Enum):
    """Listing sort orders."""

    LATEST = "latest"
    POPULAR = "popular"
    VIEWS = "views"
    OLDEST = "oldest"


class WikiCategory(str, Enum):
    """Fixed wiki sections."""

    GETTING_STARTED = "getting-started"
    GAMEPLAY = "gameplay"
    FEATURES = "features"
    COMMUNITY = "community"


class WikiDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TimeOfDay(str, Enum):
    DAY = "day"
    NIGHT = "night"
    ANY = "any"


class SpawnRate(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"
