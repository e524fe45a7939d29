"""DTOs for analytics use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from app.application.dtos.roster import RosterResult


@dataclass(frozen=True)
class DashboardMetrics:
    """Dashboard counts: staff, rosters, shifts (week/month/upcoming), recent rosters."""

    total_staff: int
    active_staff: int
    active_staff_percentage: float
    total_rosters: int
    published_rosters: int
    published_percentage: float
    shifts_this_week: int
    shifts_this_month: int
    upcoming_shifts: int
    recent_rosters: list[RosterResult] = field(default_factory=list)


@dataclass(frozen=True)
class ShiftHoursRow:
    """Raw per-shift row used by utilization and cost aggregation."""

    staff_id: str
    staff_name: str
    department: str
    position: str
    hourly_rate: Decimal
    hours: float


@dataclass(frozen=True)
class StaffUtilization:
    """Per-staff shift count and hours over a period."""

    staff_id: str
    staff_name: str
    department: str
    total_shifts: int
    total_hours: float
    average_shift_hours: float


@dataclass(frozen=True)
class DailyShiftCount:
    """Number of shifts starting on a given day."""

    day: date
    shift_count: int


@dataclass(frozen=True)
class CostBreakdown:
    """Hours and cost for one department or position."""

    key: str
    hours: float
    cost: Decimal


@dataclass(frozen=True)
class CostAnalysis:
    """Labour cost (hours x hourly rate) for a period."""

    total_hours: float
    total_cost: Decimal
    by_department: list[CostBreakdown] = field(default_factory=list)
    by_position: list[CostBreakdown] = field(default_factory=list)
