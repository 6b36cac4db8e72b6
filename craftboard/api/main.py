"""
Craftboard API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                             CRAFTBOARD API                                  │
├─────────────────────────────────────────────────────────────────────────────┤
│   Middleware: CORS                                                          │
│   Exception handlers: application errors, validation, storage, fallback    │
│                              │                                              │
│                              ▼                                              │
│   Routers: Health │ Auth │ Forum │ Blog │ Wiki │ Dex │ Interactions │ Stats │
│                              │                                              │
│                              ▼                                              │
│   Dependencies: DbSession │ Principal resolver │ Services │ Rate limit      │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database and Redis connections closed

Usage:
======
    # Run with uvicorn
    uvicorn craftboard.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from craftboard.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from craftboard.config.settings import settings
from craftboard.shared.adapters.redis_adapter import get_redis_adapter
from craftboard.shared.db import init_db, close_db
from craftboard.shared.core.logging import logger
from craftboard.api.middleware import setup_exception_handlers, setup_request_context
from craftboard.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup verifies the database; shutdown disposes the engine and the
    Redis client.
    """
    logger.info(
        "Starting Craftboard API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    logger.info("Craftboard API started successfully")

    yield

    logger.info("Shutting down Craftboard API")
    await get_redis_adapter().close()
    await close_db()
    logger.info("Craftboard API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Community forum, blog, wiki and monster dex",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_request_context(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
