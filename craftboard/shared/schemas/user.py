"""
User Schemas

Request/response models for the OAuth sign-in and profile endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from craftboard.shared.models.enums import Role
from craftboard.shared.schemas.common import BaseSchema


class OAuthCallbackRequest(BaseSchema):
    """
    Identity asserted by the OAuth front end after a provider sign-in.

    The provider defaults to the configured ``OAUTH_PROVIDER``.
    """

    provider: Optional[str] = Field(default=None, max_length=50)
    provider_account_id: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = Field(default=None, max_length=500)


class UserResponse(BaseSchema):
    """Schema for user response."""

    id: str
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    role: Role
    created_at: datetime


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
