"""Service test fixtures — async DB + FastAPI test client + auth headers.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so code that bypasses get_db uses the same engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks are a no-op there; concurrency has its own file-backed test)
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from sweetshop.config import get_settings
from sweetshop.core.domain_types import Role
from sweetshop.db.base import Base
from sweetshop.infrastructure.database import get_db, DatabaseSessionManager
from sweetshop.infrastructure.security import create_access_token, hash_password
from sweetshop.models.sweet import Sweet
from sweetshop.models.user import User
import sweetshop.infrastructure.database as db_module
from sweetshop.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _create_user(db, username: str, roles: list[str]) -> User:
    user = User(
        username=username,
        email=f"{username}@sweetshop.com",
        password_hash=hash_password("password123"),
        roles=roles,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def _bearer(user: User) -> dict:
    settings = get_settings()
    token = create_access_token(
        user.username, user.roles, settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def regular_user(test_db):
    return await _create_user(test_db, "customer", [Role.USER.value])


@pytest.fixture
async def admin_user(test_db):
    return await _create_user(
        test_db, "admin", [Role.USER.value, Role.ADMIN.value],
    )


@pytest.fixture
def user_headers(regular_user):
    return _bearer(regular_user)


@pytest.fixture
def admin_headers(admin_user):
    return _bearer(admin_user)


@pytest.fixture
async def seed_sweet(test_db):
    """Insert the canonical Chocolate Cake entry."""
    sweet = Sweet(
        name="Chocolate Cake", category="Cakes",
        price=Decimal("15.99"), quantity=10,
        description="Delicious chocolate cake",
    )
    test_db.add(sweet)
    await test_db.commit()
    await test_db.refresh(sweet)
    return sweet
