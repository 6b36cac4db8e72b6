"""
Redis adapter - Rate limiting.

Fixed-window counters: one key per (route group, client, window), INCR'd on
every request and expiring with the window.

    rate:toggle:user:550e8400-...:28719432   → 7   (TTL 41s)

Redis being unreachable never blocks a request: every failure is logged and
the request is allowed.
"""

import functools
import time
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from craftboard.config.settings import settings
from craftboard.shared.core.logging import get_logger


logger = get_logger("craftboard.redis")


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one rate limit check."""

    allowed: bool
    count: int
    limit: int
    retry_after: int = 0


class RedisAdapter:
    """
    Adapter for Redis operations.

    Handles:
    - Fixed-window rate limiting
    - Connectivity checks
    """

    def __init__(self, url: Optional[str] = None):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL (redis://host:port/db)
        """
        self.url = url or settings.REDIS_URL
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=1.0,
                socket_connect_timeout=1.0,
            )
        return self._client

    async def check_rate_limit(
        self,
        key: str,
        limit: int,
        window_seconds: int = 60,
    ) -> RateLimitResult:
        """
        Count one request against ``key`` and decide whether it is allowed.

        Args:
            key: Rate limit key without the window suffix (e.g. "rate:create:ip:10.0.0.1")
            limit: Maximum requests per window
            window_seconds: Window length

        Returns:
            RateLimitResult; allowed=True when Redis fails
        """
        now = int(time.time())
        window = now // window_seconds
        window_key = f"{key}:{window}"

        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.incr(window_key)
                pipe.expire(window_key, window_seconds)
                count, _ = await pipe.execute()
        except (RedisError, OSError) as e:
            logger.warning("Rate limit check failed, allowing request", key=key, error=str(e))
            return RateLimitResult(allowed=True, count=0, limit=limit)

        retry_after = (window + 1) * window_seconds - now
        return RateLimitResult(
            allowed=count <= limit,
            count=count,
            limit=limit,
            retry_after=max(retry_after, 1),
        )

    async def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
