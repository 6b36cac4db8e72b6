"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per-request with the request's session; they hold no
state beyond it. ContentService is module-specific, so routers get it from
the ``content_service_for(module)`` factory.

Usage:
======
    from craftboard.api.dependencies.services import get_interaction_service

    @router.post("/{content_type}/{slug}")
    async def toggle(
        ...,
        service: InteractionService = Depends(get_interaction_service),
    ):
        ...
"""

from typing import Callable

from craftboard.api.dependencies.database import DbSession
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.services.auth_service import AuthService
from craftboard.shared.services.content_service import ContentService
from craftboard.shared.services.forum_reply_service import ForumReplyService
from craftboard.shared.services.interaction_service import InteractionService
from craftboard.shared.services.stats_service import StatsService


async def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(db)


async def get_interaction_service(db: DbSession) -> InteractionService:
    return InteractionService(db)


async def get_forum_reply_service(db: DbSession) -> ForumReplyService:
    return ForumReplyService(db)


async def get_stats_service(db: DbSession) -> StatsService:
    return StatsService(db)


def content_service_for(module: ContentModule) -> Callable:
    """
    Dependency factory for the ContentService of one module.

    Example:
        service: ContentService = Depends(content_service_for(ContentModule.BLOG))
    """

    async def get_content_service(db: DbSession) -> ContentService:
        return ContentService(db, module)

    return get_content_service
