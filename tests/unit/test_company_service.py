"""Unit tests for CompanyService (create with roles and owner, update, deactivate, stats)."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.company_service import DEFAULT_USER_LIMIT, CompanyService
from app.domain.exceptions import (
    CompanyAlreadyExistsException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    FakeRoleRepository,
    FakeRosterRepository,
    FakeStaffRepository,
    FakeTenantRepository,
    FakeUserRepository,
    utc,
)


class Env:
    def __init__(self) -> None:
        self.tenants = FakeTenantRepository()
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository(self.roles)
        self.staff = FakeStaffRepository()
        self.rosters = FakeRosterRepository()
        self.init_service = AsyncMock()
        self.init_service.initialize_tenant_roles.side_effect = self.roles.seed
        self.service = CompanyService(
            self.tenants,
            self.init_service,
            self.users,
            self.staff,
            self.rosters,
            default_settings={"timezone": "Europe/Dublin"},
        )


@pytest.fixture
def env() -> Env:
    return Env()


async def test_create_company_seeds_roles_and_owner(env: Env) -> None:
    company = await env.service.create_company(
        name=" Acme ",
        domain="Acme.IE",
        settings={"week_start_day": 1},
        owner_email="Owner@Acme.ie",
        owner_name="Orla",
        owner_password="s3cret-pass",
    )
    assert company.name == "Acme"
    assert company.domain == "acme.ie"
    assert company.user_limit == DEFAULT_USER_LIMIT
    assert company.settings == {"timezone": "Europe/Dublin", "week_start_day": 1}
    env.init_service.initialize_tenant_roles.assert_awaited_once_with(company.id)

    owner = await env.users.get_by_email(company.id, "owner@acme.ie")
    assert owner is not None
    assert owner.role == "owner"
    assert owner.name == "Orla"


async def test_duplicate_domain_rejected(env: Env) -> None:
    await env.service.create_company(name="Acme", domain="acme.ie")
    with pytest.raises(CompanyAlreadyExistsException):
        await env.service.create_company(name="Acme 2", domain="ACME.ie")


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"domain": "not a domain"}, "domain"),
        ({"name": " "}, "name"),
        ({"user_limit": 0}, "user_limit"),
        ({"settings": {"timezone": "Mars/Olympus"}}, "settings.timezone"),
        ({"settings": {"week_start_day": 9}}, "settings.week_start_day"),
        ({"owner_email": "o@acme.ie"}, "owner_password"),
    ],
)
async def test_create_validation(env: Env, kwargs: dict, field: str) -> None:
    values = {"name": "Acme", "domain": "acme.ie", **kwargs}
    with pytest.raises(ValidationException) as exc_info:
        await env.service.create_company(**values)
    assert exc_info.value.details == {"field": field}
    assert env.tenants.items == {}


async def test_update_merges_settings_and_limits(env: Env) -> None:
    company = env.tenants.add(settings={"timezone": "UTC", "week_start_day": 1})
    updated = await env.service.update_company(
        company.id, manager_limit=3, settings={"week_start_day": 7}
    )
    assert updated.manager_limit == 3
    assert updated.settings == {"timezone": "UTC", "week_start_day": 7}

    with pytest.raises(ValidationException):
        await env.service.update_company(company.id, token_limit=-5)


async def test_deactivate_is_one_way(env: Env) -> None:
    company = env.tenants.add()
    deactivated = await env.service.deactivate_company(company.id)
    assert deactivated.is_active is False
    with pytest.raises(InvalidStateException, match="already inactive"):
        await env.service.deactivate_company(company.id)


async def test_missing_company(env: Env) -> None:
    with pytest.raises(ResourceNotFoundException, match="Company not found"):
        await env.service.get_company("nope")


async def test_company_stats(env: Env) -> None:
    company = env.tenants.add(manager_limit=4)
    env.users.add(company.id, "owner")
    env.users.add(company.id, "manager")
    env.users.add(company.id, "manager", is_active=False)
    env.staff.add(company.id)
    await env.rosters.create_roster(company.id, "W1", utc(2025, 1, 6), utc(2025, 1, 12))

    stats = await env.service.get_company_stats(company.id)
    assert stats.user_count == 2
    assert stats.manager_count == 1
    assert stats.manager_limit == 4
    assert stats.staff_count == 1
    assert stats.roster_count == 1
