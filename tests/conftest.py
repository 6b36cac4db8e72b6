"""
Shared fixtures: an in-memory SQLite database per test, seeded users of
every role, and an httpx client bound to the app with ``get_db`` overridden.
"""

import os

# Settings are read once at import; point them at SQLite before anything loads.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_ENV"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from craftboard.api.dependencies.database import get_db
from craftboard.api.main import app
from craftboard.config.settings import settings
from craftboard.shared.core.permissions import Principal
from craftboard.shared.models import Base, Role, User
from craftboard.shared.utils.security import SecurityUtils


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(db, name: str, role: Role) -> User:
    user = User(
        provider="discord",
        provider_account_id=f"{name}-account",
        name=name,
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def users(db):
    """One user per role; members ``alice`` and ``bob`` for ownership checks."""
    return {
        "admin": await _make_user(db, "admin", Role.ADMIN),
        "moderator": await _make_user(db, "moderator", Role.MODERATOR),
        "vip": await _make_user(db, "vip", Role.VIP),
        "alice": await _make_user(db, "alice", Role.MEMBER),
        "bob": await _make_user(db, "bob", Role.MEMBER),
        "banned": await _make_user(db, "banned", Role.BANNED),
    }


def principal_of(user: User) -> Principal:
    return Principal(id=str(user.id), role=user.role, name=user.name, avatar=user.avatar)


def auth_headers(user: User) -> dict:
    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id)},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


def forum_post_body(title: str = "Hello World", **overrides) -> dict:
    body = {
        "title": title,
        "content": "<p>First post on the server.</p>",
        "category": "General",
        "tags": ["intro"],
    }
    body.update(overrides)
    return body
