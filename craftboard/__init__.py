"""
Craftboard Backend

Community platform API for a game server: forum, blog, wiki and monster dex.

Package Structure:
==================
    craftboard/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn craftboard.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
