"""
Authentication Handler

    POST /api/auth/oauth/callback   ← sync the OAuth profile, issue a token
    GET  /api/auth/me               ← the signed-in user

Handlers should ONLY parse the request, call AuthService and format the
response; user upsert and token signing live in the service.
"""

from fastapi import APIRouter, Depends

from craftboard.api.dependencies import CurrentPrincipal
from craftboard.api.dependencies.services import get_auth_service
from craftboard.shared.models.user import User
from craftboard.shared.schemas.common import ApiResponse
from craftboard.shared.schemas.user import AuthResponse, OAuthCallbackRequest, UserResponse
from craftboard.shared.services.auth_service import AuthService


router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        role=user.role,
        created_at=user.created_at,
    )


@router.post("/oauth/callback")
async def oauth_callback(
    profile: OAuthCallbackRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Create or refresh the user behind an OAuth profile.

    Returns:
        AuthResponse with the user and a bearer token
    """
    user, access_token, expires_in = await auth_service.sync_oauth_user(profile)
    return ApiResponse(
        data=AuthResponse(
            user=_user_response(user),
            access_token=access_token,
            expires_in=expires_in,
        ),
        message="Signed in successfully",
    )


@router.get("/me")
async def get_me(
    principal: CurrentPrincipal,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Profile of the signed-in user."""
    user = await auth_service.get_user(principal.id)
    return ApiResponse(data=_user_response(user))
