"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data
access. They flush but never commit.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← get / create / update / insert_ignore
         │
         ├── UserRepository             ← OAuth identity lookup
         ├── ContentRepository          ← Slugs, visibility, counters, listing
         │      └── ForumPostRepository ← Pinned ordering, reply counters
         ├── ForumReplyRepository       ← Thread replies
         └── InteractionRepository      ← Interaction ledger rows

Usage Example:
==============
    from craftboard.shared.repositories import get_content_repository

    repo = get_content_repository(ContentModule.BLOG, db)
    post = await repo.get_by_slug("patch-notes-1-2")
"""

from craftboard.shared.repositories.base import BaseRepository
from craftboard.shared.repositories.user_repository import UserRepository
from craftboard.shared.repositories.content_repository import (
    ContentFilters,
    ContentRepository,
    ForumPostRepository,
    SlugExhaustedError,
    get_content_repository,
)
from craftboard.shared.repositories.forum_reply_repository import ForumReplyRepository
from craftboard.shared.repositories.interaction_repository import InteractionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ContentFilters",
    "ContentRepository",
    "ForumPostRepository",
    "SlugExhaustedError",
    "get_content_repository",
    "ForumReplyRepository",
    "InteractionRepository",
]
