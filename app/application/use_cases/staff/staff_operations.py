"""Staff operations: CRUD, soft delete, weekly availability, and stats."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from app.application.dtos.staff import (
    AvailabilityResult,
    StaffDetail,
    StaffResult,
    StaffStats,
)
from app.application.interfaces.repositories import (
    IAvailabilityRepository,
    IShiftRepository,
    IStaffRepository,
)
from app.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    StaffAlreadyExistsException,
    ValidationException,
)
from app.domain.value_objects.core import AvailabilityWindow
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

STAFF_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "phone",
        "position",
        "department",
        "hourly_rate",
        "start_date",
        "end_date",
        "is_active",
    }
)
RECENT_SHIFTS_LIMIT = 10


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if len(cleaned) < 2:
        raise ValidationException("Name must be at least 2 characters", field="name")
    return cleaned


def _validate_required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(f"{field.capitalize()} is required", field=field)
    return cleaned


def _validate_rate(rate: Decimal) -> Decimal:
    if rate <= 0:
        raise ValidationException("Hourly rate must be positive", field="hourly_rate")
    return rate


def _validate_dates(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValidationException("End date must not be before start date", field="end_date")


class StaffService:
    """Create, query, update and soft-delete staff members of a tenant."""

    def __init__(
        self,
        staff_repo: IStaffRepository,
        availability_repo: IAvailabilityRepository,
        shift_repo: IShiftRepository,
    ) -> None:
        self.staff_repo = staff_repo
        self.availability_repo = availability_repo
        self.shift_repo = shift_repo

    async def _get(self, tenant_id: str, staff_id: str) -> StaffResult:
        staff = await self.staff_repo.get_by_id_and_tenant(staff_id, tenant_id)
        if staff is None:
            raise ResourceNotFoundException("staff", staff_id, "Staff member not found")
        return staff

    async def create_staff(
        self,
        tenant_id: str,
        name: str,
        email: str,
        position: str,
        department: str,
        hourly_rate: Decimal,
        phone: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        availability: Sequence[AvailabilityWindow] | None = None,
    ) -> StaffDetail:
        """Create a staff member (email unique per tenant) with optional availability.

        Raises:
            ValidationException: Short name, missing position/department, rate <= 0.
            StaffAlreadyExistsException: Email already used in tenant.
        """
        normalized = _normalize_email(email)
        fields: dict[str, Any] = {
            "name": _validate_name(name),
            "email": normalized,
            "phone": phone,
            "position": _validate_required(position, "position"),
            "department": _validate_required(department, "department"),
            "hourly_rate": _validate_rate(hourly_rate),
            "start_date": start_date,
            "end_date": end_date,
        }
        _validate_dates(start_date, end_date)
        if await self.staff_repo.get_by_email(tenant_id, normalized):
            raise StaffAlreadyExistsException(normalized)

        staff = await self.staff_repo.create_staff(tenant_id, fields)
        windows: list[AvailabilityResult] = []
        if availability:
            windows = await self.availability_repo.replace_for_staff(
                staff.id, list(availability)
            )
        logger.info("Staff created: id=%s windows=%d", staff.id, len(windows))
        return StaffDetail(staff=staff, availability=windows)

    async def get_staff(self, tenant_id: str, staff_id: str) -> StaffDetail:
        """Return staff with availability and the most recent shifts."""
        staff = await self._get(tenant_id, staff_id)
        availability = await self.availability_repo.get_for_staff(staff.id)
        recent = await self.shift_repo.recent_for_staff(staff.id, RECENT_SHIFTS_LIMIT)
        return StaffDetail(staff=staff, availability=availability, recent_shifts=recent)

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
        return await self.staff_repo.list_staff(
            tenant_id,
            department=department,
            position=position,
            is_active=is_active,
            search=search.strip() if search else None,
            skip=skip,
            limit=limit,
        )

    async def update_staff(
        self, tenant_id: str, staff_id: str, patch: Mapping[str, Any]
    ) -> StaffResult:
        """Apply provided fields; email stays unique within the tenant."""
        unknown = set(patch) - STAFF_UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown staff fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        staff = await self._get(tenant_id, staff_id)
        fields = dict(patch)
        if "name" in fields:
            fields["name"] = _validate_name(fields["name"])
        for key in ("position", "department"):
            if key in fields:
                fields[key] = _validate_required(fields[key], key)
        if "hourly_rate" in fields:
            if fields["hourly_rate"] is None:
                raise ValidationException("Hourly rate is required", field="hourly_rate")
            fields["hourly_rate"] = _validate_rate(fields["hourly_rate"])
        if fields.get("is_active", True) is None:
            raise ValidationException("is_active cannot be null", field="is_active")
        _validate_dates(
            fields.get("start_date", staff.start_date),
            fields.get("end_date", staff.end_date),
        )
        if "email" in fields:
            if not fields["email"]:
                raise ValidationException("Email is required", field="email")
            fields["email"] = _normalize_email(fields["email"])
            if fields["email"] != staff.email:
                other = await self.staff_repo.get_by_email(tenant_id, fields["email"])
                if other is not None and other.id != staff.id:
                    raise StaffAlreadyExistsException(fields["email"])
        if not fields:
            return staff
        updated = await self.staff_repo.update_staff(staff.id, tenant_id, fields)
        if updated is None:
            raise ResourceNotFoundException("staff", staff_id, "Staff member not found")
        return updated

    async def delete_staff(
        self, tenant_id: str, staff_id: str, now: datetime | None = None
    ) -> StaffResult:
        """Soft delete (deactivate). Refused while the staff member has future shifts."""
        staff = await self._get(tenant_id, staff_id)
        if await self.shift_repo.has_shifts_after(staff.id, now or utc_now()):
            raise InvalidStateException(
                "Cannot delete staff member with future shifts. "
                "Please reassign or remove shifts first.",
                "staff",
                staff.id,
            )
        updated = await self.staff_repo.update_staff(
            staff.id, tenant_id, {"is_active": False}
        )
        if updated is None:
            raise ResourceNotFoundException("staff", staff_id, "Staff member not found")
        logger.info("Staff deactivated: id=%s", staff.id)
        return updated

    async def replace_availability(
        self,
        tenant_id: str,
        staff_id: str,
        windows: Sequence[AvailabilityWindow],
    ) -> list[AvailabilityResult]:
        """Replace all availability windows of a staff member.

        Existing shifts are not re-validated against the new windows.
        """
        staff = await self._get(tenant_id, staff_id)
        return await self.availability_repo.replace_for_staff(staff.id, list(windows))

    async def get_staff_stats(self, tenant_id: str) -> StaffStats:
        return await self.staff_repo.get_staff_stats(tenant_id)
