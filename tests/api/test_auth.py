"""Tests for auth endpoints (validation and error responses; no DB needed)."""

import pytest
from httpx import AsyncClient

from app.infrastructure.security.jwt import create_access_token


async def test_login_missing_body_returns_422(client: AsyncClient) -> None:
    """POST /api/v1/auth/login with no body returns 422 in the standard error shape."""
    response = await client.post("/api/v1/auth/login", json={})
    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert data["message"] == "Request validation failed"
    assert isinstance(data["details"], list)


async def test_login_empty_domain_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"domain": "", "email": "owner@acme.ie", "password": "password123"},
    )
    assert response.status_code == 422


async def test_login_invalid_email_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"domain": "acme.ie", "email": "not-an-email", "password": "password123"},
    )
    assert response.status_code == 422


async def test_me_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers.get("WWW-Authenticate") == "Bearer"
    data = response.json()
    assert data["error"] == "AUTHENTICATION_ERROR"
    assert data["message"] == "Not authenticated"


async def test_me_with_garbage_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Could not validate credentials"


@pytest.mark.requires_db
async def test_me_with_token_for_unknown_user_returns_401(client: AsyncClient) -> None:
    token = create_access_token("no-such-user", "no-such-tenant", "owner")
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


@pytest.mark.requires_db
async def test_login_unknown_company_returns_401(client: AsyncClient) -> None:
    """Unknown company and wrong password give the same generic message."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"domain": "unknown-company.ie", "email": "x@acme.ie", "password": "password123"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"
