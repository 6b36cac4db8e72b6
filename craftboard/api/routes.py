"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live          → Health probes
    /api/auth                       → OAuth sync, current user
    /api/forum/posts[/{slug}]       → Forum threads
    /api/forum/posts/{slug}/replies → Thread replies
    /api/forum/replies/{id}         → Reply edit/delete
    /api/blog/posts[/{slug}]        → Blog posts
    /api/wiki/guides[/{slug}]       → Wiki guides
    /api/dex/monsters[/{slug}]      → Dex monsters
    /api/{module}/categories        → Category counts
    /api/interactions/{type}/{slug} → Interaction ledger
    /api/stats/{module}             → Module totals

Usage:
======
    from craftboard.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from craftboard.api.handlers import (
    auth_handler,
    content_handler,
    forum_handler,
    health_handler,
    interaction_handler,
    stats_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(health_handler.router, tags=["Health"])

    app.include_router(auth_handler.router, prefix="/api/auth", tags=["Authentication"])

    # Content modules
    app.include_router(content_handler.forum_router, prefix="/api/forum", tags=["Forum"])
    app.include_router(forum_handler.router, prefix="/api/forum", tags=["Forum"])
    app.include_router(content_handler.blog_router, prefix="/api/blog", tags=["Blog"])
    app.include_router(content_handler.wiki_router, prefix="/api/wiki", tags=["Wiki"])
    app.include_router(content_handler.dex_router, prefix="/api/dex", tags=["Dex"])

    app.include_router(
        interaction_handler.router,
        prefix="/api/interactions",
        tags=["Interactions"],
    )
    app.include_router(stats_handler.router, prefix="/api/stats", tags=["Stats"])
