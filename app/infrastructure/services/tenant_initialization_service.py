"""Company role initialization (implements ITenantInitializationService)."""

from __future__ import annotations

from typing import TypedDict

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.application.services.access_policy import DEFAULT_ROLE_PERMISSIONS
from app.domain.enums import RoleName
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RoleData(TypedDict):
    """Role configuration for default roles."""

    description: str
    permissions: list[str]
    is_system: bool


def _role(description: str, name: RoleName) -> RoleData:
    return {
        "description": description,
        "permissions": list(DEFAULT_ROLE_PERMISSIONS[name.value]),
        "is_system": True,
    }


DEFAULT_ROLES: dict[str, RoleData] = {
    RoleName.ADMIN.value: _role("Full system access with all permissions", RoleName.ADMIN),
    RoleName.OWNER.value: _role(
        "Company owner: manages users, staff, rosters and settings", RoleName.OWNER
    ),
    RoleName.MANAGER.value: _role(
        "Can manage staff, rosters and shifts", RoleName.MANAGER
    ),
    RoleName.STAFF.value: _role(
        "Can view rosters and own notifications", RoleName.STAFF
    ),
}


class TenantInitializationService:
    """Seeds the four system roles of a new company. Safe to call repeatedly."""

    def __init__(self, db: AsyncSession) -> None:
        self.role_repo = RoleRepository(db)

    async def initialize_tenant_roles(self, tenant_id: str) -> dict[str, RoleResult]:
        """Create any missing system role for tenant; return all of them keyed by name."""
        existing = {r.name: r for r in await self.role_repo.get_by_tenant(tenant_id)}
        created = 0
        for name, data in DEFAULT_ROLES.items():
            if name in existing:
                continue
            existing[name] = await self.role_repo.create_role(
                tenant_id,
                name,
                description=data["description"],
                permissions=data["permissions"],
                is_system=data["is_system"],
            )
            created += 1
        if created:
            logger.info("Seeded %d system roles for tenant %s", created, tenant_id)
        return {name: existing[name] for name in DEFAULT_ROLES}
