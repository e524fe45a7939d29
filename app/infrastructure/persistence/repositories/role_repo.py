"""Role repository. Read methods return RoleResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        tenant_id=r.tenant_id,
        name=r.name,
        description=r.description,
        permissions=tuple(r.permissions or ()),
        is_system=r.is_system,
    )


class RoleRepository(BaseRepository[Role]):
    """Role repository scoped by tenant."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def get_by_name(self, tenant_id: str, name: str) -> RoleResult | None:
        result = await self.db.execute(
            select(Role).where(Role.tenant_id == tenant_id, Role.name == name)
        )
        role = result.scalar_one_or_none()
        return _role_to_result(role) if role else None

    async def get_by_tenant(self, tenant_id: str) -> list[RoleResult]:
        result = await self.db.execute(
            select(Role).where(Role.tenant_id == tenant_id).order_by(Role.name)
        )
        return [_role_to_result(r) for r in result.scalars().all()]

    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        permissions: list[str] | None = None,
        *,
        is_system: bool = False,
    ) -> RoleResult:
        """Create a role; return read-model DTO."""
        role = Role(
            tenant_id=tenant_id,
            name=name,
            description=description,
            permissions=list(permissions or []),
            is_system=is_system,
        )
        created = await self.create(role)
        return _role_to_result(created)
