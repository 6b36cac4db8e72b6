"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: OptionalPrincipal, CurrentPrincipal
- Services: get_*_service(), content_service_for(module)
- Pagination: get_pagination()
- Rate limiting: rate_limit(group)

Usage:
======
    from craftboard.api.dependencies import DbSession, CurrentPrincipal

    @router.get("/me")
    async def me(principal: CurrentPrincipal, db: DbSession):
        ...
"""

from craftboard.api.dependencies.database import (
    get_db,
    DbSession,
)
from craftboard.api.dependencies.auth import (
    get_current_principal,
    get_optional_principal,
    CurrentPrincipal,
    OptionalPrincipal,
)
from craftboard.api.dependencies.pagination import get_pagination
from craftboard.api.dependencies.rate_limit import rate_limit

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_principal",
    "get_optional_principal",
    "CurrentPrincipal",
    "OptionalPrincipal",
    # Pagination
    "get_pagination",
    # Rate limiting
    "rate_limit",
]
