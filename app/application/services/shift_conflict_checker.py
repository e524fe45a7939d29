"""Shift conflict checker: overlap and availability gate run before a shift is persisted.

Read-only: it queries existing shifts and availability windows and raises
ShiftConflictException; it never writes. Intervals are half-open [start, end),
so back-to-back shifts do not conflict. Availability is evaluated on the ISO
weekday (Monday=1..Sunday=7) of the shift start in the tenant's timezone;
a shift crossing midnight is only checked against its start day, using
the start and end times of day as wall-clock values. The next day's windows
are never consulted.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING, Any

from app.application.interfaces.repositories import (
    IAvailabilityRepository,
    IShiftRepository,
)
from app.domain.exceptions import ShiftConflictException, ValidationException
from app.domain.value_objects.core import TimeOfDay, iso_weekday
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.dtos.roster import ShiftCreate, ShiftResult

OVERLAP_MESSAGE = "Staff member has conflicting shifts during this time period"
AVAILABILITY_MESSAGE = "Staff member is not available during this time"


def _describe(shift: ShiftResult) -> dict[str, Any]:
    return {
        "shift_id": shift.id,
        "roster_id": shift.roster_id,
        "start_time": shift.start_time.isoformat(),
        "end_time": shift.end_time.isoformat(),
    }


class ShiftConflictChecker:
    """Decides whether a proposed shift may be stored for a staff member."""

    def __init__(
        self,
        shift_repo: IShiftRepository,
        availability_repo: IAvailabilityRepository,
    ) -> None:
        self.shift_repo = shift_repo
        self.availability_repo = availability_repo

    @traced("shift_conflict_checker.check")
    async def check_shift_conflicts(
        self,
        staff_id: str,
        start_time: datetime,
        end_time: datetime,
        roster_id: str | None = None,
        exclude_shift_id: str | None = None,
        tz: tzinfo = UTC,
    ) -> None:
        """Raise ShiftConflictException if the interval overlaps or is outside availability.

        The caller must have validated start_time < end_time.

        Args:
            staff_id: Staff member the shift is for.
            start_time: Shift start (timezone-aware).
            end_time: Shift end (timezone-aware).
            roster_id: Roster receiving the shift (informational; overlap is system-wide).
            exclude_shift_id: Shift being updated, ignored in the overlap query.
            tz: Tenant timezone used for weekday and time-of-day derivation.
        """
        overlapping = await self.shift_repo.find_overlapping(
            staff_id, start_time, end_time, exclude_shift_id
        )
        if overlapping:
            raise ShiftConflictException(
                OVERLAP_MESSAGE,
                ShiftConflictException.OVERLAP,
                staff_id=staff_id,
                conflicts=[_describe(s) for s in overlapping],
            )
        await self._check_availability(staff_id, start_time, end_time, tz)

    async def _check_availability(
        self,
        staff_id: str,
        start_time: datetime,
        end_time: datetime,
        tz: tzinfo,
    ) -> None:
        day = iso_weekday(start_time, tz)
        start = TimeOfDay.from_datetime(start_time, tz)
        end = TimeOfDay.from_datetime(end_time, tz)
        window = await self.availability_repo.find_covering_window(
            staff_id, day, start, end
        )
        if window is None:
            raise ShiftConflictException(
                AVAILABILITY_MESSAGE,
                ShiftConflictException.AVAILABILITY,
                staff_id=staff_id,
                conflicts=[
                    {"day_of_week": day, "start_time": str(start), "end_time": str(end)}
                ],
            )

    async def check_batch(
        self, candidates: Sequence[ShiftCreate], tz: tzinfo = UTC
    ) -> None:
        """Validate a batch of new shifts (initial roster shifts or template copies).

        The batch must be internally non-overlapping per staff member; each
        candidate must then pass the single-shift check against stored shifts
        and availability.

        Raises:
            ValidationException: A candidate ends at or before its start.
            ShiftConflictException: Overlap within the batch or with stored shifts,
                or a candidate outside availability.
        """
        for index, candidate in enumerate(candidates):
            if candidate.start_time >= candidate.end_time:
                raise ValidationException(
                    f"Shift end time must be after start time (shift {index})",
                    field=f"shifts[{index}].end_time",
                )
        self._check_batch_overlaps(candidates)
        for candidate in candidates:
            await self.check_shift_conflicts(
                candidate.staff_id, candidate.start_time, candidate.end_time, tz=tz
            )

    @staticmethod
    def _check_batch_overlaps(candidates: Sequence[ShiftCreate]) -> None:
        by_staff: dict[str, list[int]] = defaultdict(list)
        for index, candidate in enumerate(candidates):
            by_staff[candidate.staff_id].append(index)
        for staff_id, indexes in by_staff.items():
            ordered = sorted(indexes, key=lambda i: candidates[i].start_time)
            # Track the batch shift that ends last so far; sorted by start, any
            # overlap shows up against it.
            latest = ordered[0]
            for current in ordered[1:]:
                if candidates[current].start_time < candidates[latest].end_time:
                    raise ShiftConflictException(
                        OVERLAP_MESSAGE,
                        ShiftConflictException.OVERLAP,
                        staff_id=staff_id,
                        conflicts=[{"batch_index": latest}, {"batch_index": current}],
                    )
                if candidates[current].end_time > candidates[latest].end_time:
                    latest = current
