"""Health probes and admin bootstrap."""

from sqlalchemy import select

from sweetshop.config import Settings
from sweetshop.main import bootstrap_admin
from sweetshop.models.user import User
import sweetshop.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503


async def test_bootstrap_admin_created_once(client, test_session_factory):
    settings = Settings(
        bootstrap_admin_username="root", bootstrap_admin_password="rootpass1",
    )
    await bootstrap_admin(db_module.db_manager, settings)
    await bootstrap_admin(db_module.db_manager, settings)

    async with test_session_factory() as db:
        users = (
            await db.execute(select(User).where(User.username == "root"))
        ).scalars().all()
    assert len(users) == 1
    assert users[0].has_role("ADMIN")


async def test_bootstrap_admin_skipped_without_credentials(
    client, test_session_factory,
):
    await bootstrap_admin(db_module.db_manager, Settings())
    async with test_session_factory() as db:
        users = (await db.execute(select(User))).scalars().all()
    assert users == []


async def test_bootstrap_admin_can_login_and_restock(client, seed_sweet):
    settings = Settings(
        bootstrap_admin_username="root", bootstrap_admin_password="rootpass1",
    )
    await bootstrap_admin(db_module.db_manager, settings)
    res = await client.post(
        "/api/v1/auth/login",
        json={"username": "root", "password": "rootpass1"},
    )
    token = res.json()["data"]["token"]
    res = await client.post(
        f"/api/v1/sweets/{seed_sweet.id}/restock",
        json={"quantity": 5},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200
    assert res.json()["data"]["quantity"] == 15
