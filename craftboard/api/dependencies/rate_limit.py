"""
Rate Limit Dependency

Per-client fixed-window limits, one bucket per route group:

    ┌─────────┬──────────────┐
    │ group   │ per minute   │
    ├─────────┼──────────────┤
    │ read    │ 60           │
    │ create  │ 10           │
    │ update  │ 10           │
    │ delete  │ 5            │
    │ toggle  │ 30           │
    └─────────┴──────────────┘

Clients are keyed by principal id when signed in, by IP otherwise.

Usage:
======
    @router.post("", dependencies=[rate_limit("create")])
"""

from typing import Any

from fastapi import Depends, Request

from craftboard.api.dependencies.auth import OptionalPrincipal
from craftboard.config.settings import settings
from craftboard.shared.adapters.redis_adapter import get_redis_adapter
from craftboard.shared.core.exceptions import RateLimitError
from craftboard.shared.core.logging import get_logger


logger = get_logger("craftboard.ratelimit")

RATE_LIMITS = {
    "read": 60,
    "create": 10,
    "update": 10,
    "delete": 5,
    "toggle": 30,
}

WINDOW_SECONDS = 60


def client_key(request: Request, principal: Any) -> str:
    if principal is not None:
        return f"user:{principal.id}"
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


def rate_limit(group: str) -> Any:
    """Dependency enforcing the limit of ``group``."""
    limit = RATE_LIMITS[group]

    async def check(request: Request, principal: OptionalPrincipal) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return

        key = f"rate:{group}:{client_key(request, principal)}"
        result = await get_redis_adapter().check_rate_limit(key, limit, WINDOW_SECONDS)
        if not result.allowed:
            logger.warning("Rate limit exceeded", group=group, key=key, count=result.count)
            raise RateLimitError(
                f"Too many requests, limit is {limit} per minute",
                retry_after=result.retry_after,
            )

    return Depends(check)
