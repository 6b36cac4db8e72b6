"""Rate limiting: the route dependency and the Redis fixed-window counter."""

import importlib

from craftboard.config.settings import settings
from craftboard.shared.adapters.redis_adapter import RateLimitResult, RedisAdapter
from tests.conftest import auth_headers


# The package re-exports the ``rate_limit`` factory under the module's name
rate_limit_module = importlib.import_module("craftboard.api.dependencies.rate_limit")


class FakeLimiter:
    """Counts calls per key in memory and refuses past ``cap``."""

    def __init__(self, cap: int = 1000):
        self.cap = cap
        self.counts = {}

    async def check_rate_limit(self, key, limit, window_seconds=60):
        self.counts[key] = self.counts.get(key, 0) + 1
        count = self.counts[key]
        return RateLimitResult(allowed=count <= self.cap, count=count, limit=limit, retry_after=42)


async def test_exceeding_the_limit_is_429(client, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    limiter = FakeLimiter(cap=2)
    monkeypatch.setattr(rate_limit_module, "get_redis_adapter", lambda: limiter)

    responses = [await client.get("/api/forum/posts") for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 429]
    refused = responses[-1]
    assert refused.headers["Retry-After"] == "42"
    assert refused.json()["code"] == "RATE_LIMIT_EXCEEDED"
    assert refused.json()["details"] == {"retryAfter": 42}


async def test_limits_are_keyed_per_group_and_client(client, users, monkeypatch):
    limiter = FakeLimiter()
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(rate_limit_module, "get_redis_adapter", lambda: limiter)

    await client.get("/api/forum/posts")
    await client.get("/api/forum/posts", headers=auth_headers(users["alice"]))
    await client.get("/api/stats/forum")

    assert limiter.counts == {
        "rate:read:ip:127.0.0.1": 2,
        f"rate:read:user:{users['alice'].id}": 1,
    }


async def test_disabled_limiter_never_calls_redis(client, monkeypatch):
    def unreachable():
        raise AssertionError("limiter should not be consulted")

    monkeypatch.setattr(rate_limit_module, "get_redis_adapter", unreachable)

    response = await client.get("/api/forum/posts")

    assert response.status_code == 200


async def test_unreachable_redis_allows_requests():
    adapter = RedisAdapter(url="redis://127.0.0.1:1/0")
    try:
        result = await adapter.check_rate_limit("rate:read:ip:10.0.0.1", limit=1)
        reachable = await adapter.ping()
    finally:
        await adapter.close()

    assert result.allowed is True
    assert reachable is False
