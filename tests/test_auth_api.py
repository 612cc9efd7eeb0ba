"""Test the auth endpoints through the ASGI app."""
import pytest

from tests.conftest import sign_up


@pytest.mark.asyncio
async def test_signup_returns_token_and_user(client):
    resp = await client.post(
        "/api/auth/signup",
        json={"name": "Ada Lovelace", "email": "Ada@Example.com", "password": "secret1"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["name"] == "Ada Lovelace"
    assert body["user"]["email"] == "ada@example.com"
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_signup_existing_email_conflicts(client, token):
    resp = await client.post(
        "/api/auth/signup",
        json={"name": "Someone Else", "email": "ada@example.com", "password": "secret2"},
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "User already exists! Please signin"


@pytest.mark.asyncio
async def test_signup_validation(client):
    resp = await client.post(
        "/api/auth/signup", json={"name": "Al", "email": "not-an-email", "password": "123"}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_signin_success(client, token):
    resp = await client.post(
        "/api/auth/signin", json={"email": "ada@example.com", "password": "secret1"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"] != token
    assert body["user"]["name"] == "Ada Lovelace"


@pytest.mark.asyncio
async def test_signin_unknown_email(client):
    resp = await client.post(
        "/api/auth/signin", json={"email": "nobody@example.com", "password": "secret1"}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found! Please signup"


@pytest.mark.asyncio
async def test_signin_wrong_password(client, token):
    resp = await client.post(
        "/api/auth/signin", json={"email": "ada@example.com", "password": "wrong-password"}
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials!"


@pytest.mark.asyncio
async def test_me_with_bearer_token(client, auth_headers):
    resp = await client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_me_with_session_cookie(client, token):
    resp = await client.get("/api/auth/me", headers={"Cookie": f"taskdesk_session={token}"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_me_without_token(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authenticated"


@pytest.mark.asyncio
async def test_me_with_unknown_token(client):
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer bogus"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_signout_revokes_token(client, auth_headers):
    resp = await client.post("/api/auth/signout", headers=auth_headers)
    assert resp.status_code == 204

    resp = await client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_exists(client):
    resp = await client.get("/api/auth/exists", params={"email": "ada@example.com"})
    assert resp.json() == {"exists": False}

    await sign_up(client)
    resp = await client.get("/api/auth/exists", params={"email": "ADA@example.com"})
    assert resp.json() == {"exists": True}


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_signup_rejects_comma_in_name(client):
    resp = await client.post(
        "/api/auth/signup",
        json={"name": "Doe, Jane", "email": "jane@example.com", "password": "secret1"},
    )
    assert resp.status_code == 422
