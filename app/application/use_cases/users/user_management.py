"""User management: role-hierarchy user creation within company limits, listing, deactivation, login."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import (
    IRoleRepository,
    ITenantRepository,
    IUserRepository,
)
from app.domain.entities.tenant import TenantEntity
from app.domain.enums import RoleName
from app.domain.exceptions import (
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.domain.value_objects.core import CompanyDomain
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.services.authorization_service import AccessContext

logger = get_logger(__name__)

# Which caller roles may create a user of a given role. Admin users are never
# created through this service.
CREATOR_ROLES: dict[str, tuple[str, ...]] = {
    RoleName.OWNER.value: (RoleName.ADMIN.value,),
    RoleName.MANAGER.value: (RoleName.ADMIN.value, RoleName.OWNER.value),
    RoleName.STAFF.value: (
        RoleName.ADMIN.value,
        RoleName.OWNER.value,
        RoleName.MANAGER.value,
    ),
}
MIN_PASSWORD_LENGTH = 8


class UserManagementService:
    """Creates and manages login-capable users of a company."""

    def __init__(
        self,
        user_repo: IUserRepository,
        role_repo: IRoleRepository,
        tenant_repo: ITenantRepository,
    ) -> None:
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.tenant_repo = tenant_repo

    async def _get_company(self, tenant_id: str) -> TenantEntity:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise ResourceNotFoundException("company", tenant_id, "Company not found")
        return TenantEntity(
            id=tenant.id,
            name=tenant.name,
            domain=CompanyDomain(tenant.domain),
            is_active=tenant.is_active,
            user_limit=tenant.user_limit,
            manager_limit=tenant.manager_limit,
            token_limit=tenant.token_limit,
        )

    async def create_user(
        self,
        creator: AccessContext,
        tenant_id: str,
        email: str,
        name: str,
        role: str,
        password: str,
    ) -> UserResult:
        """Create a user of role in tenant, enforcing hierarchy and company capacity.

        Raises:
            ValidationException: Unknown/admin role, short password, empty name.
            AuthorizationException: Creator's role may not create this role.
            InvalidStateException: Company inactive or already has an owner.
            LimitExceededException: User or manager limit reached.
            UserAlreadyExistsException: Email already used in tenant.
        """
        allowed = CREATOR_ROLES.get(role)
        if allowed is None:
            raise ValidationException(
                f"Users with role '{role}' cannot be created", field="role"
            )
        if creator.role not in allowed:
            raise AuthorizationException(
                resource="user",
                action="create",
                message=f"Insufficient permissions: {', '.join(allowed)} access required",
            )
        if role == RoleName.OWNER.value and not creator.is_platform_admin:
            raise AuthorizationException(
                resource="user",
                action="create",
                message="Platform administrator access required",
            )
        if not name or not name.strip():
            raise ValidationException("Name is required", field="name")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        company = await self._get_company(tenant_id)
        company.ensure_can_add_user(await self.user_repo.count_users(tenant_id))
        if role == RoleName.MANAGER.value:
            company.ensure_can_add_manager(
                await self.user_repo.count_users(tenant_id, role=RoleName.MANAGER.value)
            )
        if role == RoleName.OWNER.value and await self.user_repo.count_users(
            tenant_id, role=RoleName.OWNER.value
        ):
            raise InvalidStateException(
                "Company already has an owner. Only one owner per company is allowed.",
                "company",
                tenant_id,
            )

        role_row = await self.role_repo.get_by_name(tenant_id, role)
        if role_row is None:
            raise ResourceNotFoundException(
                "role", role, f"{role.capitalize()} role not found for company"
            )
        normalized = email.strip().lower()
        if await self.user_repo.get_by_email(tenant_id, normalized):
            raise UserAlreadyExistsException(normalized)

        user = await self.user_repo.create_user(
            tenant_id=tenant_id,
            role_id=role_row.id,
            email=normalized,
            name=name.strip(),
            password=password,
        )
        logger.info("User created: id=%s role=%s by=%s", user.id, role, creator.user_id)
        return user

    async def list_users(
        self,
        tenant_id: str,
        role: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        return await self.user_repo.list_users(
            tenant_id, role=role, is_active=is_active, skip=skip, limit=limit
        )

    async def deactivate_user(
        self, requestor: AccessContext, tenant_id: str, user_id: str
    ) -> UserResult:
        """Deactivate a user. Users cannot deactivate themselves or admin users."""
        if user_id == requestor.user_id:
            raise InvalidStateException("Cannot deactivate your own account", "user", user_id)
        user = await self.user_repo.get_by_id_and_tenant(user_id, tenant_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id, "User not found")
        if user.role == RoleName.ADMIN.value:
            raise AuthorizationException(
                resource="user",
                action="deactivate",
                message="Access denied: Cannot deactivate admin users",
            )
        updated = await self.user_repo.set_active(user.id, tenant_id, False)
        if updated is None:
            raise ResourceNotFoundException("user", user_id, "User not found")
        return updated

    async def authenticate(
        self, domain: str, email: str, password: str
    ) -> UserResult | None:
        """Return the active user for company domain + email + password, else None."""
        tenant = await self.tenant_repo.get_by_domain(domain.strip().lower())
        if tenant is None or not tenant.is_active:
            return None
        return await self.user_repo.authenticate(
            tenant.id, email.strip().lower(), password
        )
