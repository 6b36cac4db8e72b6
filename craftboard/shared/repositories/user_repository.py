"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_provider_account()  → Find the user behind an OAuth identity
- touch()                    → Stamp last_active_at

Usage Example:
==============
    repo = UserRepository(db)
    user = await repo.get_by_provider_account("discord", "80351110224678912")
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.shared.models.base import utc_now
from craftboard.shared.models.user import User
from craftboard.shared.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_provider_account(
        self,
        provider: str,
        provider_account_id: str,
    ) -> Optional[User]:
        """
        Get user by OAuth identity.

        SQL Generated:
            SELECT * FROM users
            WHERE provider = 'discord' AND provider_account_id = '8035...'
        """
        result = await self.session.execute(
            select(User).where(
                User.provider == provider,
                User.provider_account_id == provider_account_id,
            )
        )
        return result.scalar_one_or_none()

    async def touch(self, user_id: UUID) -> None:
        """Record activity without bumping updated_at."""
        await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(last_active_at=utc_now(), updated_at=User.updated_at)
            .execution_options(synchronize_session=False)
        )
