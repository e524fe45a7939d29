"""Store location repository. Returns application DTOs; every read is tenant-scoped."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.application.dtos.location import StoreLocationResult
from app.application.dtos.staff import StaffResult
from app.infrastructure.persistence.models.staff import Staff
from app.infrastructure.persistence.models.store_location import (
    StaffStoreLocation,
    StoreLocation,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.staff_repo import _staff_to_result

SORT_COLUMNS = {
    "name": StoreLocation.name,
    "address": StoreLocation.address,
    "created_at": StoreLocation.created_at,
}

_staff_count = (
    select(func.count(StaffStoreLocation.id))
    .where(StaffStoreLocation.store_location_id == StoreLocation.id)
    .correlate(StoreLocation)
    .scalar_subquery()
)


def _location_to_result(location: StoreLocation, staff_count: int) -> StoreLocationResult:
    """Map ORM StoreLocation to application StoreLocationResult."""
    return StoreLocationResult(
        id=location.id,
        tenant_id=location.tenant_id,
        name=location.name,
        address=location.address,
        is_active=location.is_active,
        staff_count=int(staff_count or 0),
    )


def _filtered(
    stmt: Select, tenant_id: str, search: str | None, is_active: bool | None
) -> Select:
    stmt = stmt.where(StoreLocation.tenant_id == tenant_id)
    if is_active is not None:
        stmt = stmt.where(StoreLocation.is_active.is_(is_active))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(StoreLocation.name.ilike(pattern), StoreLocation.address.ilike(pattern))
        )
    return stmt


class StoreLocationRepository(BaseRepository[StoreLocation]):
    """Store locations and their staff assignments."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, StoreLocation)

    async def _get_entity(self, location_id: str, tenant_id: str) -> StoreLocation | None:
        result = await self.db.execute(
            select(StoreLocation).where(
                StoreLocation.id == location_id, StoreLocation.tenant_id == tenant_id
            )
        )
        return result.scalar_one_or_none()

    async def _count_for(self, location_id: str) -> int:
        return await self.scalar_count(
            select(func.count(StaffStoreLocation.id)).where(
                StaffStoreLocation.store_location_id == location_id
            )
        )

    async def get_by_id_and_tenant(
        self, location_id: str, tenant_id: str
    ) -> StoreLocationResult | None:
        result = await self.db.execute(
            select(StoreLocation, _staff_count).where(
                StoreLocation.id == location_id, StoreLocation.tenant_id == tenant_id
            )
        )
        row = result.one_or_none()
        return _location_to_result(*row) if row else None

    async def create_location(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> StoreLocationResult:
        created = await self.create(StoreLocation(tenant_id=tenant_id, **fields))
        return _location_to_result(created, 0)

    async def update_location(
        self, location_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> StoreLocationResult | None:
        location = await self._get_entity(location_id, tenant_id)
        if location is None:
            return None
        updated = await self.apply_fields(location, fields)
        return _location_to_result(updated, await self._count_for(updated.id))

    async def delete_location(self, location_id: str, tenant_id: str) -> bool:
        result = await self.db.execute(
            delete(StoreLocation).where(
                StoreLocation.id == location_id, StoreLocation.tenant_id == tenant_id
            )
        )
        return bool(result.rowcount)

    async def list_locations(
        self,
        tenant_id: str,
        search: str | None = None,
        is_active: bool | None = None,
        sort_by: str = "name",
        descending: bool = False,
        skip: int = 0,
        limit: int = 20,
    ) -> list[StoreLocationResult]:
        column = SORT_COLUMNS.get(sort_by, StoreLocation.name)
        order = column.desc() if descending else column.asc()
        stmt = _filtered(select(StoreLocation, _staff_count), tenant_id, search, is_active)
        result = await self.db.execute(
            stmt.order_by(order, StoreLocation.id).offset(skip).limit(limit)
        )
        return [_location_to_result(location, count) for location, count in result.all()]

    async def count_locations(
        self,
        tenant_id: str,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> int:
        return await self.scalar_count(
            _filtered(select(func.count(StoreLocation.id)), tenant_id, search, is_active)
        )

    async def list_assigned_staff(self, location_id: str) -> list[StaffResult]:
        result = await self.db.execute(
            select(Staff)
            .join(StaffStoreLocation, StaffStoreLocation.staff_id == Staff.id)
            .where(StaffStoreLocation.store_location_id == location_id)
            .order_by(Staff.name)
        )
        return [_staff_to_result(s) for s in result.scalars().all()]

    async def replace_assignments(self, location_id: str, staff_ids: list[str]) -> None:
        """Delete all assignments of location and insert the given ones in the current transaction."""
        await self.db.execute(
            delete(StaffStoreLocation).where(
                StaffStoreLocation.store_location_id == location_id
            )
        )
        self.db.add_all(
            StaffStoreLocation(staff_id=staff_id, store_location_id=location_id)
            for staff_id in dict.fromkeys(staff_ids)
        )
        await self.db.flush()

    async def count_assignments(self, tenant_id: str) -> int:
        return await self.scalar_count(
            select(func.count(StaffStoreLocation.id))
            .join(StoreLocation, StoreLocation.id == StaffStoreLocation.store_location_id)
            .where(StoreLocation.tenant_id == tenant_id)
        )

    async def count_locations_with_staff(self, tenant_id: str) -> int:
        return await self.scalar_count(
            select(func.count(func.distinct(StaffStoreLocation.store_location_id)))
            .join(StoreLocation, StoreLocation.id == StaffStoreLocation.store_location_id)
            .where(StoreLocation.tenant_id == tenant_id)
        )
