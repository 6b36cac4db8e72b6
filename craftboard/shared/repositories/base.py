"""
Base Repository

Generic base repository with the CRUD operations every entity repository
shares, plus the dialect-aware ``insert_ignore`` primitive the interaction
ledger is built on.

What This Provides:
===================
- get(id)          → Fetch single record by UUID
- create()         → Create new record (add + flush + refresh)
- update()         → Update an existing record by id
- insert_ignore()  → INSERT ... ON CONFLICT DO NOTHING, returns whether a row landed

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        def __init__(self, session: AsyncSession):
            super().__init__(User, session)

    user = await UserRepository(db).get(user_id)   # typed as User

flush() vs commit():
====================
Repositories only flush. get_db() commits once the handler returns, so every
statement issued while serving one request belongs to one transaction.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        SQL Generated:
            SELECT * FROM <table> WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance, flushes to run the INSERT, and refreshes so
        server-side defaults are loaded.

        SQL Generated:
            INSERT INTO <table> (...) VALUES (...)
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, record_id: UUID, **kwargs: Any) -> Optional[ModelType]:
        """
        Update a record by ID.

        Only fields that exist on the model are applied; None values are
        skipped, so callers pass just the fields they mean to change.

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def insert_ignore(self, **values: Any) -> bool:
        """
        Insert a row unless it would violate a unique constraint.

        Compiles to ``INSERT ... ON CONFLICT DO NOTHING`` on PostgreSQL and
        SQLite. The database decides the race: of two concurrent callers with
        the same unique key, exactly one gets True.

        Returns:
            True if a row was inserted, False if it already existed
        """
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(self.model)
        elif dialect == "sqlite":
            stmt = sqlite.insert(self.model)
        else:
            raise NotImplementedError(f"insert_ignore is not supported on {dialect}")

        # Python-side column defaults (uuid ids, timestamps) are applied by Core.
        # RETURNING yields no row when the conflict branch was taken.
        stmt = stmt.values(**values).on_conflict_do_nothing().returning(self.model.id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
