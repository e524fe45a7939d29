"""Company (tenant) repository. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.tenant import TenantResult
from app.domain.exceptions import CompanyAlreadyExistsException
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.repositories.base import BaseRepository


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(
        id=t.id,
        name=t.name,
        domain=t.domain,
        is_active=t.is_active,
        user_limit=t.user_limit,
        manager_limit=t.manager_limit,
        token_limit=t.token_limit,
        settings=dict(t.settings or {}),
        created_at=t.created_at,
    )


class TenantRepository(BaseRepository[Tenant]):
    """Company repository. Companies are deactivated, never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        tenant = await super().get_by_id(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_domain(self, domain: str) -> TenantResult | None:
        result = await self.db.execute(select(Tenant).where(Tenant.domain == domain))
        tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def create_tenant(
        self,
        name: str,
        domain: str,
        user_limit: int,
        manager_limit: int,
        token_limit: int,
        settings: dict[str, Any],
    ) -> TenantResult:
        """Create company; raise CompanyAlreadyExistsException on duplicate domain."""
        tenant = Tenant(
            name=name,
            domain=domain,
            user_limit=user_limit,
            manager_limit=manager_limit,
            token_limit=token_limit,
            settings=settings,
            is_active=True,
        )
        try:
            async with self.db.begin_nested():
                created = await self.create(tenant)
        except IntegrityError as e:
            raise CompanyAlreadyExistsException(domain) from e
        return _tenant_to_result(created)

    async def update_tenant(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> TenantResult | None:
        tenant = await super().get_by_id(tenant_id)
        if tenant is None:
            return None
        updated = await self.apply_fields(tenant, fields)
        return _tenant_to_result(updated)

    async def list_tenants(
        self, skip: int = 0, limit: int = 100, is_active: bool | None = None
    ) -> list[TenantResult]:
        stmt = select(Tenant)
        if is_active is not None:
            stmt = stmt.where(Tenant.is_active.is_(is_active))
        result = await self.db.execute(stmt.order_by(Tenant.name).offset(skip).limit(limit))
        return [_tenant_to_result(t) for t in result.scalars().all()]
