"""Shift repository. Maps exclusion-constraint violations to ShiftConflictException."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Date, Select, cast, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.analytics import DailyShiftCount, ShiftHoursRow
from app.application.dtos.roster import ShiftCreate, ShiftResult
from app.domain.exceptions import ShiftConflictException
from app.infrastructure.persistence.models.roster import (
    SHIFT_NO_OVERLAP_CONSTRAINT,
    Roster,
    Shift,
)
from app.infrastructure.persistence.models.staff import Staff
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

EXCLUSION_VIOLATION = "23P01"


def _shift_to_result(s: Shift) -> ShiftResult:
    """Map ORM Shift to application ShiftResult."""
    return ShiftResult(
        id=s.id,
        roster_id=s.roster_id,
        staff_id=s.staff_id,
        start_time=s.start_time,
        end_time=s.end_time,
        position=s.position,
        notes=s.notes,
        is_confirmed=s.is_confirmed,
    )


def _is_overlap_violation(error: IntegrityError) -> bool:
    """Return True if error comes from the shift no-overlap exclusion constraint."""
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code == EXCLUSION_VIOLATION or SHIFT_NO_OVERLAP_CONSTRAINT in str(orig)


def _overlap_conflict(error: IntegrityError) -> ShiftConflictException:
    logger.warning("Shift exclusion constraint rejected a write: %s", error.orig)
    return ShiftConflictException(
        "Staff member has conflicting shifts during this time period",
        ShiftConflictException.OVERLAP,
    )


def _live_shifts(stmt: Select, tenant_id: str) -> Select:
    """Restrict stmt to shifts of the tenant's non-template rosters."""
    return stmt.join(Roster, Roster.id == Shift.roster_id).where(
        Shift.tenant_id == tenant_id, Roster.is_template.is_(False)
    )


class ShiftRepository(BaseRepository[Shift]):
    """Shift repository. Overlap queries span all rosters of a staff member."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Shift)

    async def _get_entity(self, shift_id: str, tenant_id: str) -> Shift | None:
        result = await self.db.execute(
            select(Shift).where(Shift.id == shift_id, Shift.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, shift_id: str, tenant_id: str
    ) -> ShiftResult | None:
        shift = await self._get_entity(shift_id, tenant_id)
        return _shift_to_result(shift) if shift else None

    async def list_for_roster(self, roster_id: str) -> list[ShiftResult]:
        result = await self.db.execute(
            select(Shift).where(Shift.roster_id == roster_id).order_by(Shift.start_time)
        )
        return [_shift_to_result(s) for s in result.scalars().all()]

    async def find_overlapping(
        self,
        staff_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_shift_id: str | None = None,
    ) -> list[ShiftResult]:
        """Return shifts of staff intersecting [start_time, end_time); back-to-back excluded."""
        stmt = select(Shift).where(
            Shift.staff_id == staff_id,
            Shift.start_time < end_time,
            Shift.end_time > start_time,
        )
        if exclude_shift_id:
            stmt = stmt.where(Shift.id != exclude_shift_id)
        result = await self.db.execute(stmt.order_by(Shift.start_time))
        return [_shift_to_result(s) for s in result.scalars().all()]

    async def create_shifts(
        self, tenant_id: str, roster_id: str, items: list[ShiftCreate]
    ) -> list[ShiftResult]:
        rows = [
            Shift(
                tenant_id=tenant_id,
                roster_id=roster_id,
                staff_id=item.staff_id,
                start_time=item.start_time,
                end_time=item.end_time,
                position=item.position,
                notes=item.notes,
                is_confirmed=item.is_confirmed,
            )
            for item in items
        ]
        if not rows:
            return []
        try:
            async with self.db.begin_nested():
                self.db.add_all(rows)
                await self.db.flush()
        except IntegrityError as e:
            if _is_overlap_violation(e):
                raise _overlap_conflict(e) from e
            raise
        for row in rows:
            await self.db.refresh(row)
        return [_shift_to_result(row) for row in rows]

    async def update_shift(
        self, shift_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> ShiftResult | None:
        shift = await self._get_entity(shift_id, tenant_id)
        if shift is None:
            return None
        try:
            async with self.db.begin_nested():
                updated = await self.apply_fields(shift, fields)
        except IntegrityError as e:
            if _is_overlap_violation(e):
                raise _overlap_conflict(e) from e
            raise
        return _shift_to_result(updated)

    async def delete_shift(self, shift_id: str, tenant_id: str) -> bool:
        result = await self.db.execute(
            delete(Shift).where(Shift.id == shift_id, Shift.tenant_id == tenant_id)
        )
        return bool(result.rowcount)

    async def count_for_roster(
        self, roster_id: str, is_confirmed: bool | None = None
    ) -> int:
        stmt = select(func.count(Shift.id)).where(Shift.roster_id == roster_id)
        if is_confirmed is not None:
            stmt = stmt.where(Shift.is_confirmed.is_(is_confirmed))
        return await self.scalar_count(stmt)

    async def has_shifts_after(self, staff_id: str, moment: datetime) -> bool:
        result = await self.db.execute(
            select(Shift.id)
            .where(Shift.staff_id == staff_id, Shift.start_time >= moment)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def recent_for_staff(self, staff_id: str, limit: int = 10) -> list[ShiftResult]:
        result = await self.db.execute(
            select(Shift)
            .where(Shift.staff_id == staff_id)
            .order_by(Shift.start_time.desc())
            .limit(limit)
        )
        return [_shift_to_result(s) for s in result.scalars().all()]

    async def count_shifts(
        self,
        tenant_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        is_confirmed: bool | None = None,
    ) -> int:
        """Count shifts of live rosters; template shifts are excluded."""
        stmt = _live_shifts(select(func.count(Shift.id)), tenant_id)
        if start is not None:
            stmt = stmt.where(Shift.start_time >= start)
        if end is not None:
            stmt = stmt.where(Shift.start_time < end)
        if is_confirmed is not None:
            stmt = stmt.where(Shift.is_confirmed.is_(is_confirmed))
        return await self.scalar_count(stmt)

    async def shift_hours(
        self, tenant_id: str, start: datetime, end: datetime
    ) -> list[ShiftHoursRow]:
        hours = func.extract("epoch", Shift.end_time - Shift.start_time) / 3600
        result = await self.db.execute(
            select(
                Staff.id,
                Staff.name,
                Staff.department,
                Staff.position,
                Staff.hourly_rate,
                hours,
            )
            .select_from(Shift)
            .join(Staff, Staff.id == Shift.staff_id)
            .join(Roster, Roster.id == Shift.roster_id)
            .where(
                Shift.tenant_id == tenant_id,
                Roster.is_template.is_(False),
                Shift.start_time >= start,
                Shift.start_time < end,
            )
        )
        return [
            ShiftHoursRow(
                staff_id=staff_id,
                staff_name=name,
                department=department,
                position=position,
                hourly_rate=rate,
                hours=float(shift_hours),
            )
            for staff_id, name, department, position, rate, shift_hours in result.all()
        ]

    async def daily_counts(
        self, tenant_id: str, start: datetime, end: datetime, tz_name: str = "UTC"
    ) -> list[DailyShiftCount]:
        """Count live shifts per local start day in [start, end); tz_name is an IANA zone."""
        day = cast(func.timezone(tz_name, Shift.start_time), Date)
        result = await self.db.execute(
            _live_shifts(select(day, func.count(Shift.id)), tenant_id)
            .where(
                Shift.start_time >= start,
                Shift.start_time < end,
            )
            .group_by(day)
            .order_by(day)
        )
        return [DailyShiftCount(day=d, shift_count=c) for d, c in result.all()]
