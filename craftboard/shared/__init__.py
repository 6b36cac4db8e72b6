"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions, the permission engine
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions, permissions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Redis rate limiter
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← JWT and text helpers

Usage:
======
    from craftboard.shared.models import ForumPost, User
    from craftboard.shared.services import ContentService
    from craftboard.shared.schemas import ForumPostCreate
    from craftboard.shared.core.permissions import can_edit
"""
