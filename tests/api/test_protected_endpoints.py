"""Protected routes reject unauthenticated requests before touching the database."""

import pytest
from httpx import AsyncClient


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/api/v1/rosters"),
        ("GET", "/api/v1/rosters/stats"),
        ("GET", "/api/v1/rosters/ro1"),
        ("POST", "/api/v1/rosters/ro1/publish"),
        ("GET", "/api/v1/staff"),
        ("GET", "/api/v1/companies"),
        ("GET", "/api/v1/companies/t1/stats"),
        ("GET", "/api/v1/users"),
        ("GET", "/api/v1/notifications"),
        ("GET", "/api/v1/analytics/dashboard"),
        ("GET", "/api/v1/store-locations"),
        ("GET", "/api/v1/store-locations/stats"),
        ("POST", "/api/v1/store-locations/loc1/assign-staff"),
    ],
)
async def test_requires_bearer_token(client: AsyncClient, method: str, path: str) -> None:
    response = await client.request(method, path)
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
