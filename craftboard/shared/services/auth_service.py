"""
Authentication Service

OAuth user sync, token issuance and the principal resolver.

Service Pattern:
================
Sign-in itself happens at the OAuth provider. The front end posts the
provider profile to /api/auth/oauth/callback; this service upserts the user
and issues a bearer JWT carrying ``user_id``. On every request the resolver
decodes that token and re-reads the user row, so role changes (a ban in
particular) apply immediately.

Usage:
======
    from craftboard.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires = await service.sync_oauth_user(profile)
    principal = await service.resolve_principal(token)
"""

from datetime import timedelta
from typing import Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from craftboard.config.settings import settings
from craftboard.shared.core.exceptions import AuthenticationError, UserNotFoundError
from craftboard.shared.core.logging import get_logger
from craftboard.shared.core.permissions import Principal
from craftboard.shared.models.enums import Role
from craftboard.shared.models.user import User
from craftboard.shared.repositories.user_repository import UserRepository
from craftboard.shared.schemas.user import OAuthCallbackRequest
from craftboard.shared.utils.security import SecurityUtils


logger = get_logger("craftboard.auth")


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - Creating or refreshing users from an OAuth profile
    - JWT token generation
    - Resolving a bearer token into a Principal

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    def issue_token(self, user: User) -> Tuple[str, int]:
        """
        Sign an access token for ``user``.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "provider": user.provider},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def sync_oauth_user(self, profile: OAuthCallbackRequest) -> Tuple[User, str, int]:
        """
        Upsert the user behind an OAuth profile and sign a token.

        New users start as members. Existing users keep their role; their
        name, email and avatar are refreshed from the provider.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)
        """
        provider = profile.provider or settings.OAUTH_PROVIDER
        user = await self.repo.get_by_provider_account(provider, profile.provider_account_id)

        if user is None:
            user = await self.repo.create(
                provider=provider,
                provider_account_id=profile.provider_account_id,
                name=profile.name,
                email=profile.email,
                avatar=profile.avatar,
                role=Role.MEMBER,
            )
            logger.info("User created", user_id=str(user.id), provider=provider)
        else:
            user = await self.repo.update(
                user.id,
                name=profile.name,
                email=profile.email,
                avatar=profile.avatar,
            )

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in

    async def resolve_principal(self, token: str) -> Principal:
        """
        Turn a bearer token into a Principal with the user's current role.

        Raises:
            AuthenticationError: Invalid/expired token or unknown user
        """
        try:
            payload = SecurityUtils.decode_access_token(
                token,
                settings.SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
            )
        except ValueError as e:
            raise AuthenticationError(str(e)) from e

        raw_user_id = payload.get("user_id")
        try:
            user_id = UUID(str(raw_user_id))
        except ValueError as e:
            raise AuthenticationError("Invalid token payload") from e

        user = await self.repo.get(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")

        await self.repo.touch(user.id)
        return Principal(id=str(user.id), role=user.role, name=user.name, avatar=user.avatar)

    async def get_user(self, user_id: str) -> User:
        user = await self.repo.get(UUID(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user
