"""
Database Module

Database connectivity and session management for Craftboard.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (session.py)     one per request, commit / rollback / close
        │
        ▼
    Repositories                  ContentRepository, InteractionRepository,
        │                         ForumReplyRepository, UserRepository
        ▼
    PostgreSQL (SQLite in tests)

Usage in FastAPI:
=================
    from craftboard.shared.db import get_db

    @router.get("/things")
    async def list_things(db: AsyncSession = Depends(get_db)):
        ...
"""

from craftboard.shared.db.session import (
    get_db,
    init_db,
    ping_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "ping_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
