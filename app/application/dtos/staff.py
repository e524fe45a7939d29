"""DTOs for staff and availability use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from app.domain.value_objects.core import TimeOfDay

if TYPE_CHECKING:
    from app.application.dtos.roster import ShiftResult


@dataclass(frozen=True)
class StaffResult:
    """Staff read-model (a schedulable person, not a login account)."""

    id: str
    tenant_id: str
    name: str
    email: str
    phone: str | None
    position: str
    department: str
    hourly_rate: Decimal
    start_date: date | None
    end_date: date | None
    is_active: bool


@dataclass(frozen=True)
class AvailabilityResult:
    """One recurring weekly window; day_of_week is ISO (Monday=1..Sunday=7)."""

    id: str
    staff_id: str
    day_of_week: int
    start_time: TimeOfDay
    end_time: TimeOfDay
    is_active: bool


@dataclass(frozen=True)
class StaffDetail:
    """Staff with availability windows and most recent shifts."""

    staff: StaffResult
    availability: list[AvailabilityResult] = field(default_factory=list)
    recent_shifts: list[ShiftResult] = field(default_factory=list)


@dataclass(frozen=True)
class StaffStats:
    """Staff counts for a tenant, grouped by department and position."""

    total: int
    active: int
    inactive: int
    by_department: dict[str, int] = field(default_factory=dict)
    by_position: dict[str, int] = field(default_factory=dict)
