"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories and
the permission engine.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Permission engine

Services should:
- Gate every operation with the permission engine
- Coordinate multiple repositories if needed
- Raise typed exceptions (translated to HTTP by the middleware)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: OAuth sync, tokens, principal resolution
- ContentService: Listing, detail, create/update/delete for one module
- InteractionService: The interaction ledger (toggles and views)
- ForumReplyService: Thread replies
- StatsService: Module aggregates

Usage:
======
    from craftboard.shared.services import ContentService

    service = ContentService(db, ContentModule.FORUM)
    view = await service.create_item(principal, ForumPostCreate(...))
"""

from craftboard.shared.services.auth_service import AuthService
from craftboard.shared.services.content_service import ContentPage, ContentService, ContentView
from craftboard.shared.services.forum_reply_service import ForumReplyService
from craftboard.shared.services.interaction_service import InteractionService
from craftboard.shared.services.stats_service import StatsService

__all__ = [
    "AuthService",
    "ContentPage",
    "ContentService",
    "ContentView",
    "ForumReplyService",
    "InteractionService",
    "StatsService",
]
