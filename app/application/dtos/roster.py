"""DTOs for roster and shift use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.application.dtos.staff import StaffResult


@dataclass(frozen=True)
class RosterResult:
    """Roster read-model."""

    id: str
    tenant_id: str
    name: str
    start_date: datetime
    end_date: datetime
    is_published: bool
    is_template: bool
    notes: str | None = None
    published_at: datetime | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class ShiftResult:
    """Shift read-model."""

    id: str
    roster_id: str
    staff_id: str
    start_time: datetime
    end_time: datetime
    position: str | None = None
    notes: str | None = None
    is_confirmed: bool = False


@dataclass(frozen=True)
class ShiftCreate:
    """Input for a new shift (single add, initial roster batch, or template copy)."""

    staff_id: str
    start_time: datetime
    end_time: datetime
    position: str | None = None
    notes: str | None = None
    is_confirmed: bool = False


@dataclass(frozen=True)
class RosterDetail:
    """Roster with its shifts (ordered by start) and the staff they reference."""

    roster: RosterResult
    shifts: list[ShiftResult] = field(default_factory=list)
    staff: dict[str, StaffResult] = field(default_factory=dict)


@dataclass(frozen=True)
class RosterStats:
    """Roster and shift counts for a tenant."""

    total_rosters: int
    published_rosters: int
    template_rosters: int
    total_shifts: int
    confirmed_shifts: int
    confirmation_rate: float
