"""End-to-end scheduling flow over HTTP. Requires Postgres with migrations applied.

Platform admin creates a company with an owner; the owner adds staff, builds a
roster, confirms its shifts and publishes it. Each run uses fresh domains and
emails so committed rows from earlier runs do not interfere.
"""

import uuid

import pytest
from httpx import AsyncClient

from app.core.config import get_settings
from app.domain.enums import RoleName
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import TenantRepository, UserRepository
from app.infrastructure.services import TenantInitializationService

PASSWORD = "correct-horse-42"


@pytest.fixture
async def platform_admin_email() -> str:
    """Create (if needed) the platform company and a fresh admin user in it."""
    settings = get_settings()
    email = f"admin-{uuid.uuid4().hex[:8]}@roster-platform.ie"
    database.ensure_engine()
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            tenants = TenantRepository(session)
            tenant = await tenants.get_by_domain(settings.platform_tenant_domain)
            if tenant is None:
                tenant = await tenants.create_tenant(
                    name="Platform",
                    domain=settings.platform_tenant_domain,
                    user_limit=1000,
                    manager_limit=100,
                    token_limit=50000,
                    settings={},
                )
            roles = await TenantInitializationService(session).initialize_tenant_roles(
                tenant.id
            )
            await UserRepository(session).create_user(
                tenant_id=tenant.id,
                role_id=roles[RoleName.ADMIN.value].id,
                email=email,
                name="Platform Admin",
                password=PASSWORD,
            )
    await database.dispose_engine()
    return email


async def _login(client: AsyncClient, domain: str, email: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login", json={"domain": domain, "email": email, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.mark.requires_db
async def test_publish_flow(client: AsyncClient, platform_admin_email: str) -> None:
    settings = get_settings()
    admin = await _login(client, settings.platform_tenant_domain, platform_admin_email)

    suffix = uuid.uuid4().hex[:8]
    domain = f"acme-{suffix}.ie"
    owner_email = f"owner@acme-{suffix}.ie"
    response = await client.post(
        "/api/v1/companies",
        headers=admin,
        json={
            "name": "Acme",
            "domain": domain,
            "settings": {"timezone": "Europe/Dublin"},
            "owner_email": owner_email,
            "owner_name": "Orla Owner",
            "owner_password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    company_id = response.json()["id"]

    owner = await _login(client, domain, owner_email)
    me = (await client.get("/api/v1/auth/me", headers=owner)).json()
    assert me["role"] == "owner"
    assert me["tenant_id"] == company_id

    # Owner may not list every company.
    assert (await client.get("/api/v1/companies", headers=owner)).status_code == 403

    response = await client.post(
        "/api/v1/staff",
        headers=owner,
        json={
            "name": "Alice Byrne",
            "email": f"alice@acme-{suffix}.ie",
            "position": "Nurse",
            "department": "Ward A",
            "hourly_rate": "21.50",
            "availability": [
                {"day_of_week": 1, "start_time": "08:00", "end_time": "20:00"},
            ],
        },
    )
    assert response.status_code == 201, response.text
    staff_id = response.json()["id"]

    # Monday 3 March 2025 (GMT in Dublin)
    response = await client.post(
        "/api/v1/rosters",
        headers=owner,
        json={
            "name": "Week 10",
            "start_date": "2025-03-03T00:00:00Z",
            "end_date": "2025-03-09T23:59:00Z",
            "shifts": [
                {
                    "staff_id": staff_id,
                    "start_time": "2025-03-03T09:00:00Z",
                    "end_time": "2025-03-03T17:00:00Z",
                }
            ],
        },
    )
    assert response.status_code == 201, response.text
    roster = response.json()
    shift_id = roster["shifts"][0]["id"]
    assert roster["shifts"][0]["is_confirmed"] is False

    # Overlapping shift for the same staff member is a conflict.
    response = await client.post(
        f"/api/v1/rosters/{roster['id']}/shifts",
        headers=owner,
        json={
            "staff_id": staff_id,
            "start_time": "2025-03-03T16:00:00Z",
            "end_time": "2025-03-03T19:00:00Z",
        },
    )
    assert response.status_code == 409
    assert response.json()["error"] == "SHIFT_CONFLICT"

    response = await client.post(f"/api/v1/rosters/{roster['id']}/publish", headers=owner)
    assert response.status_code == 409
    assert response.json()["error"] == "INVALID_STATE"

    response = await client.post(f"/api/v1/rosters/shifts/{shift_id}/confirm", headers=owner)
    assert response.status_code == 200
    assert response.json()["is_confirmed"] is True

    response = await client.post(f"/api/v1/rosters/{roster['id']}/publish", headers=owner)
    assert response.status_code == 200, response.text
    assert response.json()["is_published"] is True

    response = await client.delete(f"/api/v1/rosters/shifts/{shift_id}", headers=owner)
    assert response.status_code == 409

    # Platform admin reaches the company through the tenant header.
    response = await client.get(
        f"/api/v1/rosters/{roster['id']}",
        headers={**admin, settings.tenant_header_name: company_id},
    )
    assert response.status_code == 200

    stats = (await client.get(f"/api/v1/companies/{company_id}/stats", headers=owner)).json()
    assert stats["staff_count"] == 1
    assert stats["roster_count"] == 1

    response = await client.post(
        "/api/v1/store-locations",
        headers=owner,
        json={"name": "Grafton", "address": "12 Grafton Street, Dublin 2"},
    )
    assert response.status_code == 201, response.text
    location_id = response.json()["id"]

    response = await client.post(
        f"/api/v1/store-locations/{location_id}/assign-staff",
        headers=owner,
        json={"staff_ids": [staff_id]},
    )
    assert response.status_code == 200, response.text
    assert response.json()["staff_count"] == 1

    response = await client.get(
        f"/api/v1/store-locations/{location_id}/staff", headers=owner
    )
    assert response.json()[0]["availability"][0]["start_time"] == "08:00"

    response = await client.delete(f"/api/v1/store-locations/{location_id}", headers=owner)
    assert response.status_code == 409
    assert response.json()["error"] == "INVALID_STATE"


@pytest.mark.requires_db
async def test_owner_cannot_reach_other_company(
    client: AsyncClient, platform_admin_email: str
) -> None:
    settings = get_settings()
    admin = await _login(client, settings.platform_tenant_domain, platform_admin_email)
    suffix = uuid.uuid4().hex[:8]
    owner_email = f"owner@beta-{suffix}.ie"
    response = await client.post(
        "/api/v1/companies",
        headers=admin,
        json={
            "name": "Beta",
            "domain": f"beta-{suffix}.ie",
            "owner_email": owner_email,
            "owner_password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text

    owner = await _login(client, f"beta-{suffix}.ie", owner_email)
    response = await client.get(
        "/api/v1/rosters", headers={**owner, settings.tenant_header_name: "some-other-company"}
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied: User does not belong to this company"
