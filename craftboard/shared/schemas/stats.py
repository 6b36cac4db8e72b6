"""
Stats Schemas

Module-wide aggregate counters for dashboards.
"""

from typing import Optional

from craftboard.shared.models.enums import ContentModule
from craftboard.shared.schemas.common import BaseSchema


class ModuleStats(BaseSchema):
    """Totals over live published items of one module."""

    module: ContentModule
    total_posts: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_bookmarks: int = 0
    total_shares: int = 0
    total_helpfuls: Optional[int] = None
    total_replies: Optional[int] = None
