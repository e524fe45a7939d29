"""Company (tenant) management: create with seeded roles, update limits/settings, deactivate."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.dtos.tenant import CompanyStats, TenantResult
from app.application.interfaces.repositories import (
    IRosterRepository,
    IStaffRepository,
    ITenantRepository,
    IUserRepository,
)
from app.application.interfaces.services import ITenantInitializationService
from app.domain.entities.tenant import TenantEntity, validate_limits
from app.domain.enums import RoleName
from app.domain.exceptions import (
    CompanyAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.core import CompanyDomain
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import is_valid_timezone

logger = get_logger(__name__)

DEFAULT_USER_LIMIT = 50
DEFAULT_MANAGER_LIMIT = 10
DEFAULT_TOKEN_LIMIT = 50000


def _to_entity(tenant: TenantResult) -> TenantEntity:
    return TenantEntity(
        id=tenant.id,
        name=tenant.name,
        domain=CompanyDomain(tenant.domain),
        is_active=tenant.is_active,
        user_limit=tenant.user_limit,
        manager_limit=tenant.manager_limit,
        token_limit=tenant.token_limit,
    )


class CompanyService:
    """Creates and manages companies; seeds system roles on creation.

    Caller must run create_company inside one DB transaction so the company,
    its roles and the optional owner user are created atomically.
    """

    def __init__(
        self,
        tenant_repo: ITenantRepository,
        init_service: ITenantInitializationService,
        user_repo: IUserRepository,
        staff_repo: IStaffRepository,
        roster_repo: IRosterRepository,
        default_settings: Mapping[str, Any] | None = None,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.init_service = init_service
        self.user_repo = user_repo
        self.staff_repo = staff_repo
        self.roster_repo = roster_repo
        self.default_settings = dict(default_settings or {})

    def _merge_settings(
        self, base: Mapping[str, Any], overrides: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        merged = {**base, **(overrides or {})}
        timezone = merged.get("timezone")
        if timezone is not None and not is_valid_timezone(str(timezone)):
            raise ValidationException(f"Unknown timezone: {timezone}", field="settings.timezone")
        week_start = merged.get("week_start_day")
        if week_start is not None and week_start not in range(1, 8):
            raise ValidationException(
                "week_start_day must be an ISO weekday (1-7)", field="settings.week_start_day"
            )
        return merged

    async def get_company(self, tenant_id: str) -> TenantResult:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise ResourceNotFoundException("company", tenant_id, "Company not found")
        return tenant

    async def create_company(
        self,
        name: str,
        domain: str,
        user_limit: int | None = None,
        manager_limit: int | None = None,
        token_limit: int | None = None,
        settings: Mapping[str, Any] | None = None,
        owner_email: str | None = None,
        owner_name: str | None = None,
        owner_password: str | None = None,
    ) -> TenantResult:
        """Create a company, seed its roles, and optionally its owner user.

        Raises:
            ValidationException: Bad domain, name, limits or settings.
            CompanyAlreadyExistsException: Domain already taken.
        """
        try:
            company_domain = CompanyDomain.normalize(domain)
        except ValueError as e:
            raise ValidationException(str(e), field="domain") from e
        if not name or not name.strip():
            raise ValidationException("Company name is required", field="name")
        limits = {
            "user_limit": user_limit if user_limit is not None else DEFAULT_USER_LIMIT,
            "manager_limit": (
                manager_limit if manager_limit is not None else DEFAULT_MANAGER_LIMIT
            ),
            "token_limit": token_limit if token_limit is not None else DEFAULT_TOKEN_LIMIT,
        }
        validate_limits(**limits)
        merged = self._merge_settings(self.default_settings, settings)
        if owner_email and not owner_password:
            raise ValidationException(
                "owner_password is required when owner_email is given", field="owner_password"
            )

        if await self.tenant_repo.get_by_domain(company_domain.value):
            raise CompanyAlreadyExistsException(company_domain.value)

        tenant = await self.tenant_repo.create_tenant(
            name=name.strip(),
            domain=company_domain.value,
            settings=merged,
            **limits,
        )
        roles = await self.init_service.initialize_tenant_roles(tenant.id)
        if owner_email and owner_password:
            owner_role = roles[RoleName.OWNER.value]
            await self.user_repo.create_user(
                tenant_id=tenant.id,
                role_id=owner_role.id,
                email=owner_email.strip().lower(),
                name=(owner_name or owner_email).strip(),
                password=owner_password,
            )
        logger.info("Company created: id=%s domain=%s", tenant.id, tenant.domain)
        return tenant

    async def list_companies(
        self, skip: int = 0, limit: int = 100, is_active: bool | None = None
    ) -> list[TenantResult]:
        return await self.tenant_repo.list_tenants(skip=skip, limit=limit, is_active=is_active)

    async def update_company(
        self,
        tenant_id: str,
        name: str | None = None,
        user_limit: int | None = None,
        manager_limit: int | None = None,
        token_limit: int | None = None,
        settings: Mapping[str, Any] | None = None,
    ) -> TenantResult:
        """Update name, limits (positive) and settings (merged into existing)."""
        tenant = await self.get_company(tenant_id)
        fields: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                raise ValidationException("Company name is required", field="name")
            fields["name"] = name.strip()
        limits = {
            key: value
            for key, value in (
                ("user_limit", user_limit),
                ("manager_limit", manager_limit),
                ("token_limit", token_limit),
            )
            if value is not None
        }
        validate_limits(**limits)
        fields.update(limits)
        if settings is not None:
            fields["settings"] = self._merge_settings(tenant.settings, settings)
        if not fields:
            return tenant
        updated = await self.tenant_repo.update_tenant(tenant.id, fields)
        if updated is None:
            raise ResourceNotFoundException("company", tenant_id, "Company not found")
        return updated

    async def deactivate_company(self, tenant_id: str) -> TenantResult:
        """Soft-deactivate a company. Companies are never deleted."""
        tenant = await self.get_company(tenant_id)
        entity = _to_entity(tenant)
        entity.deactivate()
        updated = await self.tenant_repo.update_tenant(tenant.id, {"is_active": False})
        if updated is None:
            raise ResourceNotFoundException("company", tenant_id, "Company not found")
        logger.info("Company deactivated: id=%s", tenant.id)
        return updated

    async def get_company_stats(self, tenant_id: str) -> CompanyStats:
        tenant = await self.get_company(tenant_id)
        return CompanyStats(
            company_id=tenant.id,
            user_count=await self.user_repo.count_users(tenant.id),
            user_limit=tenant.user_limit,
            manager_count=await self.user_repo.count_users(
                tenant.id, role=RoleName.MANAGER.value
            ),
            manager_limit=tenant.manager_limit,
            staff_count=await self.staff_repo.count_staff(tenant.id),
            roster_count=await self.roster_repo.count_rosters(tenant.id),
        )
