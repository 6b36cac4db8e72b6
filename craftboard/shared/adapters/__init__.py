"""
Adapters Package

External service integrations.

Contents:
=========
- redis_adapter: Redis-backed fixed-window rate limiter

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from craftboard.shared.adapters.redis_adapter import get_redis_adapter

    result = await get_redis_adapter().check_rate_limit("rate:create:ip:10.0.0.1", 10)
"""

from craftboard.shared.adapters.redis_adapter import (
    RateLimitResult,
    RedisAdapter,
    get_redis_adapter,
)

__all__ = [
    "RateLimitResult",
    "RedisAdapter",
    "get_redis_adapter",
]
