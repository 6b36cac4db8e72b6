"""
Stats Service

Module-wide totals for dashboards. These numbers are telemetry: if computing
them fails, the failure is logged and zeros are returned instead of an error.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.core.logging import get_logger
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.repositories.content_repository import get_content_repository


logger = get_logger("craftboard.stats")

BASE_TOTALS = ("totalPosts", "totalViews", "totalLikes", "totalBookmarks", "totalShares")

# Extra totals only some modules carry
MODULE_TOTALS = {
    ContentModule.FORUM: ("totalReplies",),
    ContentModule.WIKI: ("totalHelpfuls",),
}


def empty_stats(module: ContentModule) -> dict[str, int]:
    keys = BASE_TOTALS + MODULE_TOTALS.get(module, ())
    return {key: 0 for key in keys}


class StatsService:
    """Service for module aggregates."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def module_stats(self, module: ContentModule) -> dict[str, int]:
        module = ContentModule(module)
        repo = get_content_repository(module, self.session)
        try:
            return await repo.aggregate_stats()
        except Exception as e:
            logger.warning("Stats aggregation failed", module=module.value, error=str(e))
            return empty_stats(module)
