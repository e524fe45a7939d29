"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no
infrastructure imports. Every read is scoped to a tenant.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.analytics import DailyShiftCount, ShiftHoursRow
    from app.application.dtos.location import StoreLocationResult
    from app.application.dtos.notification import NotificationCreate, NotificationResult
    from app.application.dtos.role import RoleResult
    from app.application.dtos.roster import RosterResult, ShiftCreate, ShiftResult
    from app.application.dtos.staff import AvailabilityResult, StaffResult, StaffStats
    from app.application.dtos.tenant import TenantResult
    from app.application.dtos.user import UserResult
    from app.domain.value_objects.core import AvailabilityWindow, TimeOfDay


class ITenantRepository(Protocol):
    """Protocol for company (tenant) repository (DIP)."""

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Return company by id."""

    async def get_by_domain(self, domain: str) -> TenantResult | None:
        """Return company by its unique domain."""

    async def create_tenant(
        self,
        name: str,
        domain: str,
        user_limit: int,
        manager_limit: int,
        token_limit: int,
        settings: dict[str, Any],
    ) -> TenantResult:
        """Create a company. Raises CompanyAlreadyExistsException on duplicate domain."""

    async def update_tenant(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> TenantResult | None:
        """Apply the given column values; return None if not found."""

    async def list_tenants(
        self, skip: int = 0, limit: int = 100, is_active: bool | None = None
    ) -> list[TenantResult]:
        """Return companies ordered by name."""


class IRoleRepository(Protocol):
    """Protocol for role repository (DIP)."""

    async def get_by_name(self, tenant_id: str, name: str) -> RoleResult | None:
        """Return role by name within tenant."""

    async def get_by_tenant(self, tenant_id: str) -> list[RoleResult]:
        """Return all roles of a tenant."""

    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None,
        permissions: list[str],
        is_system: bool = False,
    ) -> RoleResult:
        """Create a role in tenant."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user (with role name) by id, any tenant."""

    async def get_by_id_and_tenant(
        self, user_id: str, tenant_id: str
    ) -> UserResult | None:
        """Return user by id if it belongs to tenant."""

    async def get_by_email(self, tenant_id: str, email: str) -> UserResult | None:
        """Return user by email within tenant."""

    async def get_active_by_emails(
        self, tenant_id: str, emails: list[str]
    ) -> list[UserResult]:
        """Return active users of tenant whose email is in emails."""

    async def create_user(
        self,
        tenant_id: str,
        role_id: str,
        email: str,
        name: str,
        password: str,
    ) -> UserResult:
        """Create user with hashed password. Raises UserAlreadyExistsException on duplicate email."""

    async def list_users(
        self,
        tenant_id: str,
        role: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        """Return users of tenant with optional role/active filters."""

    async def count_users(self, tenant_id: str, role: str | None = None) -> int:
        """Return number of users in tenant, optionally only those with role."""

    async def set_active(
        self, user_id: str, tenant_id: str, is_active: bool
    ) -> UserResult | None:
        """Set the active flag; return None if not found."""

    async def authenticate(
        self, tenant_id: str, email: str, password: str
    ) -> UserResult | None:
        """Return active user if email/password match, else None."""


class IStaffRepository(Protocol):
    """Protocol for staff repository (DIP)."""

    async def get_by_id_and_tenant(
        self, staff_id: str, tenant_id: str
    ) -> StaffResult | None:
        """Return staff member by id if it belongs to tenant."""

    async def get_by_ids(self, tenant_id: str, staff_ids: list[str]) -> list[StaffResult]:
        """Return staff members of tenant with the given ids."""

    async def get_by_email(self, tenant_id: str, email: str) -> StaffResult | None:
        """Return staff member by email within tenant."""

    async def create_staff(self, tenant_id: str, fields: dict[str, Any]) -> StaffResult:
        """Create a staff member. Raises StaffAlreadyExistsException on duplicate email."""

    async def update_staff(
        self, staff_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> StaffResult | None:
        """Apply the given column values; return None if not found."""

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
        """Return staff of tenant ordered by name, with optional filters."""

    async def count_staff(self, tenant_id: str, is_active: bool | None = None) -> int:
        """Return number of staff members in tenant."""

    async def get_staff_stats(self, tenant_id: str) -> StaffStats:
        """Return counts by active flag, department and position."""


class IAvailabilityRepository(Protocol):
    """Protocol for staff availability repository (DIP)."""

    async def get_for_staff(self, staff_id: str) -> list[AvailabilityResult]:
        """Return all windows of a staff member ordered by day and start."""

    async def find_covering_window(
        self,
        staff_id: str,
        day_of_week: int,
        start: TimeOfDay,
        end: TimeOfDay,
    ) -> AvailabilityResult | None:
        """Return an active window on ISO day_of_week with window.start <= start and window.end >= end."""

    async def replace_for_staff(
        self, staff_id: str, windows: list[AvailabilityWindow]
    ) -> list[AvailabilityResult]:
        """Delete existing windows of staff and insert the given ones."""


class IStoreLocationRepository(Protocol):
    """Protocol for store location repository (DIP)."""

    async def get_by_id_and_tenant(
        self, location_id: str, tenant_id: str
    ) -> StoreLocationResult | None:
        """Return location (with assignment count) by id if it belongs to tenant."""

    async def create_location(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> StoreLocationResult:
        """Create a location of tenant."""

    async def update_location(
        self, location_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> StoreLocationResult | None:
        """Apply the given column values; return None if not found."""

    async def delete_location(self, location_id: str, tenant_id: str) -> bool:
        """Delete location; return False if not found."""

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
        """Return locations of tenant; search matches name or address (case-insensitive)."""

    async def count_locations(
        self,
        tenant_id: str,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> int:
        """Return number of locations matching the same filters as list_locations."""

    async def list_assigned_staff(self, location_id: str) -> list[StaffResult]:
        """Return staff assigned to location ordered by name."""

    async def replace_assignments(self, location_id: str, staff_ids: list[str]) -> None:
        """Delete all assignments of location and insert one per staff id."""

    async def count_assignments(self, tenant_id: str) -> int:
        """Return number of staff assignments across the tenant's locations."""

    async def count_locations_with_staff(self, tenant_id: str) -> int:
        """Return number of the tenant's locations with at least one assignment."""


class IRosterRepository(Protocol):
    """Protocol for roster repository (DIP)."""

    async def get_by_id_and_tenant(
        self, roster_id: str, tenant_id: str
    ) -> RosterResult | None:
        """Return roster by id if it belongs to tenant."""

    async def get_template(self, template_id: str, tenant_id: str) -> RosterResult | None:
        """Return roster by id only if it is a template of tenant."""

    async def find_overlapping_live(
        self,
        tenant_id: str,
        start_date: datetime,
        end_date: datetime,
        exclude_roster_id: str | None = None,
    ) -> RosterResult | None:
        """Return a non-template roster with start <= end_date and end >= start_date."""

    async def create_roster(
        self,
        tenant_id: str,
        name: str,
        start_date: datetime,
        end_date: datetime,
        is_template: bool = False,
        notes: str | None = None,
        created_by: str | None = None,
    ) -> RosterResult:
        """Create a draft roster."""

    async def update_roster(
        self, roster_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> RosterResult | None:
        """Apply the given column values; return None if not found."""

    async def delete_roster(self, roster_id: str, tenant_id: str) -> bool:
        """Hard delete roster (shifts cascade). Return False if not found."""

    async def list_rosters(
        self,
        tenant_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        is_published: bool | None = None,
        is_template: bool | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[RosterResult]:
        """Return rosters of tenant, newest start first."""

    async def count_rosters(
        self,
        tenant_id: str,
        is_published: bool | None = None,
        is_template: bool | None = None,
    ) -> int:
        """Return number of rosters in tenant with optional flag filters."""


class IShiftRepository(Protocol):
    """Protocol for shift repository (DIP)."""

    async def get_by_id_and_tenant(
        self, shift_id: str, tenant_id: str
    ) -> ShiftResult | None:
        """Return shift by id if it belongs to tenant."""

    async def list_for_roster(self, roster_id: str) -> list[ShiftResult]:
        """Return shifts of roster ordered by start time."""

    async def find_overlapping(
        self,
        staff_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_shift_id: str | None = None,
    ) -> list[ShiftResult]:
        """Return shifts of staff (any roster) with start < end_time and end > start_time."""

    async def create_shifts(
        self, tenant_id: str, roster_id: str, items: list[ShiftCreate]
    ) -> list[ShiftResult]:
        """Insert shifts into roster. Raises ShiftConflictException on exclusion violation."""

    async def update_shift(
        self, shift_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> ShiftResult | None:
        """Apply the given column values; return None if not found."""

    async def delete_shift(self, shift_id: str, tenant_id: str) -> bool:
        """Hard delete shift. Return False if not found."""

    async def count_for_roster(
        self, roster_id: str, is_confirmed: bool | None = None
    ) -> int:
        """Return number of shifts in roster, optionally filtered by confirmation."""

    async def has_shifts_after(self, staff_id: str, moment: datetime) -> bool:
        """Return True if staff has any shift starting at or after moment."""

    async def recent_for_staff(self, staff_id: str, limit: int = 10) -> list[ShiftResult]:
        """Return latest shifts of staff, newest first."""

    async def count_shifts(
        self,
        tenant_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        is_confirmed: bool | None = None,
    ) -> int:
        """Return number of live-roster shifts in tenant starting in [start, end)."""

    async def shift_hours(
        self, tenant_id: str, start: datetime, end: datetime
    ) -> list[ShiftHoursRow]:
        """Return one row per live-roster shift starting in [start, end) with staff attributes and hours."""

    async def daily_counts(
        self, tenant_id: str, start: datetime, end: datetime, tz_name: str = "UTC"
    ) -> list[DailyShiftCount]:
        """Return number of live-roster shifts per start day in tz_name over [start, end)."""


class INotificationRepository(Protocol):
    """Protocol for in-app notification repository (DIP)."""

    async def create_many(
        self, tenant_id: str, items: list[NotificationCreate]
    ) -> list[NotificationResult]:
        """Insert notifications."""

    async def list_for_user(
        self,
        tenant_id: str,
        user_id: str,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[NotificationResult]:
        """Return notifications of user, newest first."""

    async def mark_read(
        self, notification_id: str, tenant_id: str, user_id: str
    ) -> NotificationResult | None:
        """Mark one notification of user as read; None if not found."""

    async def mark_all_read(self, tenant_id: str, user_id: str) -> int:
        """Mark all unread notifications of user as read; return count updated."""

    async def count_unread(self, tenant_id: str, user_id: str) -> int:
        """Return number of unread notifications of user."""
