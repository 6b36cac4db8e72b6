"""
Database Dependency

Yields the request's AsyncSession. Everything a handler does through its
services runs in that one session: committed when the handler returns,
rolled back if it raises.

Usage:
======
    from craftboard.api.dependencies.database import DbSession

    @router.get("/api/stats/{module}")
    async def module_stats(module: ContentModule, db: DbSession):
        return await StatsService(db).module_stats(module)

Tests replace ``get_db`` through ``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for the per-request database session."""
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
