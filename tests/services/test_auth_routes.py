"""Auth Routes — registration, login and token use."""

import pytest

from sweetshop.config import get_settings
from sweetshop.infrastructure.security import decode_access_token


async def _register(client, **body):
    payload = {"username": "sweettooth", "password": "secret123", **body}
    return await client.post("/api/v1/auth/register", json=payload)


async def test_register_returns_token_and_user_role(client):
    res = await _register(client)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["username"] == "sweettooth"
    assert data["roles"] == ["USER"]
    assert data["token_type"] == "Bearer"
    claims = decode_access_token(data["token"], get_settings().jwt_secret_key)
    assert claims["sub"] == "sweettooth"


async def test_register_defaults_email_from_username(client):
    res = await _register(client)
    assert res.json()["data"]["email"] == "sweettooth@sweetshop.com"


async def test_register_keeps_given_email(client):
    res = await _register(client, email="Me@Example.com")
    assert res.json()["data"]["email"] == "me@example.com"


async def test_duplicate_username_rejected(client):
    await _register(client)
    res = await _register(client, email="other@example.com")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_RESOURCE"
    assert error["message"] == "Username already exists"


async def test_duplicate_email_rejected(client):
    await _register(client, email="shared@example.com")
    res = await _register(client, username="another", email="shared@example.com")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Email already exists"


@pytest.mark.parametrize("body", [
    {"username": "ab", "password": "secret123"},
    {"username": "valid_name", "password": "123"},
    {"password": "secret123"},
])
async def test_register_invalid_payload(client, body):
    res = await client.post("/api/v1/auth/register", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_login_with_valid_credentials(client):
    await _register(client)
    res = await client.post(
        "/api/v1/auth/login",
        json={"username": "sweettooth", "password": "secret123"},
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Login successful"
    assert res.json()["data"]["token"]


async def test_login_wrong_password_is_401(client):
    await _register(client)
    res = await client.post(
        "/api/v1/auth/login",
        json={"username": "sweettooth", "password": "wrong-password"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_login_unknown_user_is_indistinguishable(client):
    res = await client.post(
        "/api/v1/auth/login",
        json={"username": "nobody", "password": "secret123"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_registered_token_opens_catalog(client):
    token = (await _register(client)).json()["data"]["token"]
    res = await client.get(
        "/api/v1/sweets", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_registered_user_cannot_restock(client, seed_sweet):
    token = (await _register(client)).json()["data"]["token"]
    res = await client.post(
        f"/api/v1/sweets/{seed_sweet.id}/restock",
        json={"quantity": 1},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 403


async def test_case_variant_usernames_get_distinct_default_emails(client):
    first = await _register(client, username="Bob")
    second = await _register(client, username="bob")
    assert first.status_code == 201
    assert second.status_code == 201, second.text
    assert first.json()["data"]["email"] == "Bob@sweetshop.com"
    assert second.json()["data"]["email"] == "bob@sweetshop.com"
