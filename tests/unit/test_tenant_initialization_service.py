"""Unit tests for TenantInitializationService (system role seeding)."""

from app.application.services.access_policy import DEFAULT_ROLE_PERMISSIONS
from app.domain.enums import RoleName
from app.infrastructure.services.tenant_initialization_service import (
    DEFAULT_ROLES,
    TenantInitializationService,
)
from tests.fakes import FakeRoleRepository


def test_default_roles_cover_every_role_name() -> None:
    assert set(DEFAULT_ROLES) == set(RoleName.values())
    for name, data in DEFAULT_ROLES.items():
        assert data["is_system"] is True
        assert tuple(data["permissions"]) == DEFAULT_ROLE_PERMISSIONS[name]


def test_staff_role_is_read_only_for_rosters() -> None:
    permissions = DEFAULT_ROLES[RoleName.STAFF.value]["permissions"]
    assert "roster:read" in permissions
    assert not any(p.startswith(("shift:", "roster:*")) for p in permissions)


async def test_initialize_is_idempotent() -> None:
    service = TenantInitializationService(None)
    service.role_repo = FakeRoleRepository()

    first = await service.initialize_tenant_roles("t1")
    second = await service.initialize_tenant_roles("t1")

    assert list(first) == ["admin", "owner", "manager", "staff"]
    assert {r.id for r in first.values()} == {r.id for r in second.values()}
    assert len(service.role_repo.items) == 4
    assert first["admin"].permissions == ("*:*",)


async def test_missing_roles_are_filled_in() -> None:
    service = TenantInitializationService(None)
    service.role_repo = FakeRoleRepository()
    manager = await service.role_repo.create_role("t1", "manager", None, ["roster:read"])

    roles = await service.initialize_tenant_roles("t1")

    assert roles["manager"].id == manager.id
    assert roles["manager"].permissions == ("roster:read",)
    assert len(service.role_repo.items) == 4
