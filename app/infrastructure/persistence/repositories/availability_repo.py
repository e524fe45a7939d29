"""Staff availability repository: weekly windows with ISO weekdays (Monday=1)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.staff import AvailabilityResult
from app.domain.value_objects.core import AvailabilityWindow, TimeOfDay
from app.infrastructure.persistence.models.staff import StaffAvailability
from app.infrastructure.persistence.repositories.base import BaseRepository


def _window_to_result(w: StaffAvailability) -> AvailabilityResult:
    return AvailabilityResult(
        id=w.id,
        staff_id=w.staff_id,
        day_of_week=w.day_of_week,
        start_time=TimeOfDay.from_time(w.start_time),
        end_time=TimeOfDay.from_time(w.end_time),
        is_active=w.is_active,
    )


class AvailabilityRepository(BaseRepository[StaffAvailability]):
    """Availability windows of a staff member (staff ownership is checked by the caller)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, StaffAvailability)

    async def get_for_staff(self, staff_id: str) -> list[AvailabilityResult]:
        result = await self.db.execute(
            select(StaffAvailability)
            .where(StaffAvailability.staff_id == staff_id)
            .order_by(StaffAvailability.day_of_week, StaffAvailability.start_time)
        )
        return [_window_to_result(w) for w in result.scalars().all()]

    async def find_covering_window(
        self,
        staff_id: str,
        day_of_week: int,
        start: TimeOfDay,
        end: TimeOfDay,
    ) -> AvailabilityResult | None:
        """Return an active window on day_of_week containing [start, end], if any."""
        result = await self.db.execute(
            select(StaffAvailability)
            .where(
                StaffAvailability.staff_id == staff_id,
                StaffAvailability.day_of_week == day_of_week,
                StaffAvailability.is_active.is_(True),
                StaffAvailability.start_time <= start.to_time(),
                StaffAvailability.end_time >= end.to_time(),
            )
            .limit(1)
        )
        window = result.scalar_one_or_none()
        return _window_to_result(window) if window else None

    async def replace_for_staff(
        self, staff_id: str, windows: list[AvailabilityWindow]
    ) -> list[AvailabilityResult]:
        """Delete all windows of staff and insert the given ones in the current transaction."""
        await self.db.execute(
            delete(StaffAvailability).where(StaffAvailability.staff_id == staff_id)
        )
        rows = [
            StaffAvailability(
                staff_id=staff_id,
                day_of_week=w.day_of_week,
                start_time=w.start.to_time(),
                end_time=w.end.to_time(),
                is_active=w.is_active,
            )
            for w in windows
        ]
        self.db.add_all(rows)
        await self.db.flush()
        return await self.get_for_staff(staff_id)
