"""Unit tests for UserManagementService (role hierarchy, company limits, deactivation, login)."""

import pytest

from app.application.services.authorization_service import AccessContext
from app.application.use_cases.users.user_management import UserManagementService
from app.domain.exceptions import (
    AuthorizationException,
    InvalidStateException,
    LimitExceededException,
    UserAlreadyExistsException,
    ValidationException,
)
from tests.fakes import FakeRoleRepository, FakeTenantRepository, FakeUserRepository


class Env:
    def __init__(self, **tenant_overrides) -> None:
        self.tenants = FakeTenantRepository()
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository(self.roles)
        self.tenant = self.tenants.add(**tenant_overrides)
        self.roles.seed(self.tenant.id)
        self.service = UserManagementService(self.users, self.roles, self.tenants)

    def ctx(self, role: str, platform_admin: bool = False) -> AccessContext:
        return AccessContext(
            user_id=f"caller-{role}",
            tenant_id=self.tenant.id,
            caller_tenant_id="t-platform" if platform_admin else self.tenant.id,
            role=role,
            is_platform_admin=platform_admin,
        )

    async def create(self, creator: AccessContext, role: str, email: str = "new@acme.ie"):
        return await self.service.create_user(
            creator, self.tenant.id, email, "New User", role, "password123"
        )


@pytest.fixture
def env() -> Env:
    return Env()


@pytest.mark.parametrize(
    ("creator", "role", "allowed"),
    [
        ("owner", "manager", True),
        ("owner", "staff", True),
        ("manager", "staff", True),
        ("manager", "manager", False),
        ("staff", "staff", False),
        ("owner", "owner", False),
    ],
)
async def test_role_hierarchy(env: Env, creator: str, role: str, allowed: bool) -> None:
    if allowed:
        user = await env.create(env.ctx(creator), role)
        assert user.role == role
    else:
        with pytest.raises(AuthorizationException):
            await env.create(env.ctx(creator), role)


async def test_admin_users_are_never_created(env: Env) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await env.create(env.ctx("admin", platform_admin=True), "admin")
    assert exc_info.value.details == {"field": "role"}


async def test_only_platform_admin_creates_owner(env: Env) -> None:
    with pytest.raises(AuthorizationException, match="Platform administrator"):
        await env.create(env.ctx("admin"), "owner")
    owner = await env.create(env.ctx("admin", platform_admin=True), "owner")
    assert owner.role == "owner"


async def test_single_owner_per_company(env: Env) -> None:
    env.users.add(env.tenant.id, "owner")
    with pytest.raises(InvalidStateException, match="already has an owner"):
        await env.create(env.ctx("admin", platform_admin=True), "owner")


async def test_user_limit_enforced() -> None:
    env = Env(user_limit=2)
    env.users.add(env.tenant.id, "owner")
    env.users.add(env.tenant.id, "staff", is_active=False)
    await env.create(env.ctx("owner"), "staff", "second@acme.ie")
    with pytest.raises(LimitExceededException) as exc_info:
        await env.create(env.ctx("owner"), "staff", "third@acme.ie")
    assert exc_info.value.details == {"limit_name": "user_limit", "limit": 2}


async def test_manager_limit_enforced() -> None:
    env = Env(manager_limit=1)
    env.users.add(env.tenant.id, "manager")
    with pytest.raises(LimitExceededException, match="manager limit"):
        await env.create(env.ctx("owner"), "manager")


async def test_inactive_company_rejects_new_users() -> None:
    env = Env(is_active=False)
    with pytest.raises(InvalidStateException, match="suspended"):
        await env.create(env.ctx("owner"), "staff")


async def test_duplicate_email_and_short_password(env: Env) -> None:
    await env.create(env.ctx("owner"), "staff", "dup@acme.ie")
    with pytest.raises(UserAlreadyExistsException):
        await env.create(env.ctx("owner"), "staff", "DUP@acme.ie")
    with pytest.raises(ValidationException, match="at least 8"):
        await env.service.create_user(
            env.ctx("owner"), env.tenant.id, "x@acme.ie", "X", "staff", "short"
        )


class TestDeactivate:
    async def test_cannot_deactivate_self(self, env: Env) -> None:
        ctx = env.ctx("owner")
        with pytest.raises(InvalidStateException, match="your own account"):
            await env.service.deactivate_user(ctx, env.tenant.id, ctx.user_id)

    async def test_cannot_deactivate_admin(self, env: Env) -> None:
        admin = env.users.add(env.tenant.id, "admin")
        with pytest.raises(AuthorizationException, match="admin users"):
            await env.service.deactivate_user(env.ctx("owner"), env.tenant.id, admin.id)

    async def test_deactivate_staff_user(self, env: Env) -> None:
        staff = env.users.add(env.tenant.id, "staff")
        updated = await env.service.deactivate_user(env.ctx("owner"), env.tenant.id, staff.id)
        assert updated.is_active is False


class TestAuthenticate:
    async def test_valid_credentials(self, env: Env) -> None:
        user = env.users.add(env.tenant.id, "manager", email="m@acme.ie", password="pw-123456")
        found = await env.service.authenticate(" ACME.ie", "M@acme.ie ", "pw-123456")
        assert found == user

    async def test_wrong_password_or_domain(self, env: Env) -> None:
        env.users.add(env.tenant.id, "manager", email="m@acme.ie", password="pw-123456")
        assert await env.service.authenticate("acme.ie", "m@acme.ie", "nope") is None
        assert await env.service.authenticate("other.ie", "m@acme.ie", "pw-123456") is None

    async def test_inactive_company_cannot_log_in(self) -> None:
        env = Env(is_active=False)
        env.users.add(env.tenant.id, "owner", email="o@acme.ie")
        assert await env.service.authenticate("acme.ie", "o@acme.ie", "password123") is None
