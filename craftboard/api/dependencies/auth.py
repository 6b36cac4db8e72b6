"""
Authentication Dependencies

The principal resolver as FastAPI dependencies.

Dependency Hierarchy:
=====================
    bearer_scheme                 ← Authorization: Bearer <jwt> (optional)
           │
           ▼
    get_optional_principal()      ← Principal, or None for anonymous/invalid
           │
           ▼
    get_current_principal()       ← Principal, or 401

Type Aliases:
=============
    OptionalPrincipal  - Routes that also serve anonymous visitors
    CurrentPrincipal   - Routes that require a signed-in user

FastAPI caches dependencies per request, so the token is decoded and the
user row loaded once even when several dependencies ask for the principal.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from craftboard.api.dependencies.database import DbSession
from craftboard.shared.core.exceptions import AuthenticationError
from craftboard.shared.core.logging import get_logger
from craftboard.shared.core.permissions import Principal
from craftboard.shared.services.auth_service import AuthService


logger = get_logger("craftboard.auth")

# auto_error=False: a missing header means "anonymous", not an immediate 403
bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


async def get_optional_principal(credentials: Credentials, db: DbSession) -> Optional[Principal]:
    """
    Resolve the bearer token if there is one.

    A missing, expired or otherwise invalid token yields None: optional-auth
    routes then serve the request as anonymous.
    """
    if credentials is None:
        return None
    try:
        return await AuthService(db).resolve_principal(credentials.credentials)
    except AuthenticationError as e:
        logger.info("Ignoring invalid bearer token", reason=e.message)
        return None


async def get_current_principal(
    principal: Annotated[Optional[Principal], Depends(get_optional_principal)],
) -> Principal:
    """
    Require a resolved principal.

    Raises:
        AuthenticationError: Missing or invalid token, or unknown user
    """
    if principal is None:
        raise AuthenticationError()
    return principal


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

OptionalPrincipal = Annotated[Optional[Principal], Depends(get_optional_principal)]

CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
