"""DTOs for store location use cases (no dependency on ORM)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from app.application.dtos.staff import StaffResult


@dataclass(frozen=True)
class StoreLocationResult:
    """Store location read-model; staff_count is the number of assignments."""

    id: str
    tenant_id: str
    name: str
    address: str
    is_active: bool
    staff_count: int = 0


@dataclass(frozen=True)
class StoreLocationDetail:
    """Location with the staff members assigned to it."""

    location: StoreLocationResult
    staff: list[StaffResult] = field(default_factory=list)


@dataclass(frozen=True)
class StoreLocationPage:
    items: list[StoreLocationDetail]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass(frozen=True)
class StoreLocationStats:
    """Location counts and assignment spread for a tenant."""

    total_locations: int
    active_locations: int
    inactive_locations: int
    total_staff_assignments: int
    locations_with_staff: int
    locations_without_staff: int
    average_staff_per_location: float
