"""Integration tests for the profile endpoints."""

import pytest
from httpx import AsyncClient

PREFIX = "/api/v1/users"


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, auth_headers):
    response = await client.get(f"{PREFIX}/profile", headers=auth_headers)

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_get_profile_requires_auth(client: AsyncClient):
    response = await client.get(f"{PREFIX}/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "TOKEN_REQUIRED"


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, auth_headers):
    response = await client.put(
        f"{PREFIX}/profile",
        json={"username": "alicia"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["username"] == "alicia"


@pytest.mark.asyncio
async def test_update_profile_empty_body(client: AsyncClient, auth_headers):
    response = await client.put(f"{PREFIX}/profile", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_update_profile_duplicate_email(client: AsyncClient, services, auth_headers):
    await services.auth.register("bob", "bob@example.com", "Password123!")

    response = await client.put(
        f"{PREFIX}/profile",
        json={"email": "bob@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_EMAIL"


@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, auth_headers, login_result):
    response = await client.put(
        f"{PREFIX}/change-password",
        json={"current_password": "Password123!", "new_password": "Brand-New-Pass1"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["sessions_revoked"] == 1

    refresh = await client.post(
        f"{PREFIX}/refresh",
        json={"refresh_token": login_result.refresh_token},
    )
    assert refresh.status_code == 401

    login = await client.post(
        f"{PREFIX}/login",
        json={"email": "alice@example.com", "password": "Brand-New-Pass1"},
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(client: AsyncClient, auth_headers):
    response = await client.put(
        f"{PREFIX}/change-password",
        json={"current_password": "Nope-Nope-1!", "new_password": "Brand-New-Pass1"},
        headers=auth_headers,
    )

    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_CURRENT_PASSWORD"


@pytest.mark.asyncio
async def test_change_password_weak(client: AsyncClient, auth_headers):
    response = await client.put(
        f"{PREFIX}/change-password",
        json={"current_password": "Password123!", "new_password": "weak"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert all(detail["field"] == "new_password" for detail in body["details"])
