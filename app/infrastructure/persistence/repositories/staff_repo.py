"""Staff repository. Returns application DTOs; every read is tenant-scoped."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.staff import StaffResult, StaffStats
from app.domain.exceptions import StaffAlreadyExistsException
from app.infrastructure.persistence.models.staff import Staff
from app.infrastructure.persistence.repositories.base import BaseRepository


def _staff_to_result(s: Staff) -> StaffResult:
    """Map ORM Staff to application StaffResult."""
    return StaffResult(
        id=s.id,
        tenant_id=s.tenant_id,
        name=s.name,
        email=s.email,
        phone=s.phone,
        position=s.position,
        department=s.department,
        hourly_rate=s.hourly_rate,
        start_date=s.start_date,
        end_date=s.end_date,
        is_active=s.is_active,
    )


class StaffRepository(BaseRepository[Staff]):
    """Staff repository. Deletion is soft (is_active false) and done by the service."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Staff)

    async def _get_entity(self, staff_id: str, tenant_id: str) -> Staff | None:
        result = await self.db.execute(
            select(Staff).where(Staff.id == staff_id, Staff.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, staff_id: str, tenant_id: str
    ) -> StaffResult | None:
        staff = await self._get_entity(staff_id, tenant_id)
        return _staff_to_result(staff) if staff else None

    async def get_by_ids(self, tenant_id: str, staff_ids: list[str]) -> list[StaffResult]:
        if not staff_ids:
            return []
        result = await self.db.execute(
            select(Staff).where(Staff.tenant_id == tenant_id, Staff.id.in_(staff_ids))
        )
        return [_staff_to_result(s) for s in result.scalars().all()]

    async def get_by_email(self, tenant_id: str, email: str) -> StaffResult | None:
        result = await self.db.execute(
            select(Staff).where(Staff.tenant_id == tenant_id, Staff.email == email)
        )
        staff = result.scalar_one_or_none()
        return _staff_to_result(staff) if staff else None

    async def create_staff(self, tenant_id: str, fields: dict[str, Any]) -> StaffResult:
        """Create staff; raise StaffAlreadyExistsException on duplicate email."""
        staff = Staff(tenant_id=tenant_id, is_active=True, **fields)
        try:
            async with self.db.begin_nested():
                created = await self.create(staff)
        except IntegrityError as e:
            raise StaffAlreadyExistsException(fields.get("email", "")) from e
        return _staff_to_result(created)

    async def update_staff(
        self, staff_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> StaffResult | None:
        staff = await self._get_entity(staff_id, tenant_id)
        if staff is None:
            return None
        try:
            async with self.db.begin_nested():
                updated = await self.apply_fields(staff, fields)
        except IntegrityError as e:
            raise StaffAlreadyExistsException(fields.get("email", staff.email)) from e
        return _staff_to_result(updated)

    async def list_staff(
        self,
        tenant_id: str,
        department: str | None = None,
        position: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[StaffResult]:
        stmt = select(Staff).where(Staff.tenant_id == tenant_id)
        if department:
            stmt = stmt.where(Staff.department == department)
        if position:
            stmt = stmt.where(Staff.position == position)
        if is_active is not None:
            stmt = stmt.where(Staff.is_active.is_(is_active))
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    Staff.name.ilike(pattern),
                    Staff.email.ilike(pattern),
                    Staff.position.ilike(pattern),
                )
            )
        result = await self.db.execute(stmt.order_by(Staff.name).offset(skip).limit(limit))
        return [_staff_to_result(s) for s in result.scalars().all()]

    async def count_staff(self, tenant_id: str, is_active: bool | None = None) -> int:
        stmt = select(func.count(Staff.id)).where(Staff.tenant_id == tenant_id)
        if is_active is not None:
            stmt = stmt.where(Staff.is_active.is_(is_active))
        return await self.scalar_count(stmt)

    async def _counts_by(self, tenant_id: str, column: Any) -> dict[str, int]:
        result = await self.db.execute(
            select(column, func.count(Staff.id))
            .where(Staff.tenant_id == tenant_id, Staff.is_active.is_(True))
            .group_by(column)
        )
        return {key: count for key, count in result.all()}

    async def get_staff_stats(self, tenant_id: str) -> StaffStats:
        total = await self.count_staff(tenant_id)
        active = await self.count_staff(tenant_id, is_active=True)
        return StaffStats(
            total=total,
            active=active,
            inactive=total - active,
            by_department=await self._counts_by(tenant_id, Staff.department),
            by_position=await self._counts_by(tenant_id, Staff.position),
        )
