"""Store location operations: CRUD, staff assignment and stats.

Every mutation is recorded with an audit log line carrying the acting
user, the location and the action (CREATE, UPDATE, DELETE, STAFF_ASSIGNMENT).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from app.application.dtos.location import (
    StoreLocationDetail,
    StoreLocationPage,
    StoreLocationResult,
    StoreLocationStats,
)
from app.application.dtos.staff import StaffDetail
from app.application.interfaces.repositories import (
    IAvailabilityRepository,
    IStaffRepository,
    IStoreLocationRepository,
)
from app.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

LOCATION_UPDATABLE_FIELDS = frozenset({"name", "address", "is_active"})
SORT_FIELDS = ("name", "address", "created_at")
MAX_PAGE_SIZE = 100


def _validate_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if len(cleaned) < 2:
        raise ValidationException(
            "Location name must be at least 2 characters", field="name"
        )
    return cleaned


def _validate_address(address: str | None) -> str:
    cleaned = (address or "").strip()
    if len(cleaned) < 5:
        raise ValidationException("Address must be at least 5 characters", field="address")
    return cleaned


def _not_found(location_id: str) -> ResourceNotFoundException:
    return ResourceNotFoundException("store_location", location_id, "Store location not found")


class StoreLocationService:
    """Manage a tenant's store locations and which staff work at each."""

    def __init__(
        self,
        location_repo: IStoreLocationRepository,
        staff_repo: IStaffRepository,
        availability_repo: IAvailabilityRepository,
    ) -> None:
        self.location_repo = location_repo
        self.staff_repo = staff_repo
        self.availability_repo = availability_repo

    async def _get(self, tenant_id: str, location_id: str) -> StoreLocationResult:
        location = await self.location_repo.get_by_id_and_tenant(location_id, tenant_id)
        if location is None:
            raise _not_found(location_id)
        return location

    @staticmethod
    def _audit(action: str, location_id: str, actor_id: str | None, **changes: Any) -> None:
        logger.info(
            "Store location audit: action=%s id=%s actor=%s changes=%s",
            action,
            location_id,
            actor_id,
            changes,
        )

    async def create_location(
        self,
        tenant_id: str,
        name: str,
        address: str,
        is_active: bool = True,
        actor_id: str | None = None,
    ) -> StoreLocationResult:
        """Create a location.

        Raises:
            ValidationException: Name shorter than 2 or address shorter than 5 characters.
        """
        fields = {
            "name": _validate_name(name),
            "address": _validate_address(address),
            "is_active": is_active,
        }
        location = await self.location_repo.create_location(tenant_id, fields)
        self._audit("CREATE", location.id, actor_id, new=fields)
        return location

    async def get_location(self, tenant_id: str, location_id: str) -> StoreLocationDetail:
        """Return location with its assigned staff and assignment count."""
        location = await self._get(tenant_id, location_id)
        staff = await self.location_repo.list_assigned_staff(location.id)
        return StoreLocationDetail(location=location, staff=staff)

    async def list_locations(
        self,
        tenant_id: str,
        search: str | None = None,
        is_active: bool | None = None,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> StoreLocationPage:
        """Page through locations; search matches name or address."""
        if page < 1:
            raise ValidationException("page must be at least 1", field="page")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        if sort_by not in SORT_FIELDS:
            raise ValidationException(
                f"sort_by must be one of: {', '.join(SORT_FIELDS)}", field="sort_by"
            )
        if sort_order not in ("asc", "desc"):
            raise ValidationException("sort_order must be asc or desc", field="sort_order")

        search = search.strip() if search else None
        total = await self.location_repo.count_locations(
            tenant_id, search=search, is_active=is_active
        )
        locations = await self.location_repo.list_locations(
            tenant_id,
            search=search,
            is_active=is_active,
            sort_by=sort_by,
            descending=sort_order == "desc",
            skip=(page - 1) * limit,
            limit=limit,
        )
        items = [
            StoreLocationDetail(
                location=loc, staff=await self.location_repo.list_assigned_staff(loc.id)
            )
            for loc in locations
        ]
        return StoreLocationPage(items=items, total=total, page=page, limit=limit)

    async def update_location(
        self,
        tenant_id: str,
        location_id: str,
        patch: Mapping[str, Any],
        actor_id: str | None = None,
    ) -> StoreLocationResult:
        """Apply provided fields; the same length rules as creation apply."""
        unknown = set(patch) - LOCATION_UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown location fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        existing = await self._get(tenant_id, location_id)
        fields = dict(patch)
        if "name" in fields:
            fields["name"] = _validate_name(fields["name"])
        if "address" in fields:
            fields["address"] = _validate_address(fields["address"])
        if "is_active" in fields and fields["is_active"] is None:
            raise ValidationException("is_active cannot be null", field="is_active")
        if not fields:
            return existing

        updated = await self.location_repo.update_location(existing.id, tenant_id, fields)
        if updated is None:
            raise _not_found(location_id)
        self._audit(
            "UPDATE",
            updated.id,
            actor_id,
            old={k: getattr(existing, k) for k in fields},
            new=fields,
        )
        return updated

    async def delete_location(
        self, tenant_id: str, location_id: str, actor_id: str | None = None
    ) -> None:
        """Delete a location; refused while staff are assigned to it."""
        location = await self._get(tenant_id, location_id)
        if location.staff_count > 0:
            raise InvalidStateException(
                "Cannot delete location with assigned staff. "
                "Please remove all staff assignments first.",
                "store_location",
                location.id,
            )
        if not await self.location_repo.delete_location(location.id, tenant_id):
            raise _not_found(location_id)
        self._audit("DELETE", location.id, actor_id, old={"name": location.name})

    async def assign_staff_to_location(
        self,
        tenant_id: str,
        location_id: str,
        staff_ids: Sequence[str],
        actor_id: str | None = None,
    ) -> StoreLocationDetail:
        """Replace the location's assignments with staff_ids.

        Raises:
            ValidationException: Empty list, or an id that is unknown, inactive or
                belongs to another tenant.
        """
        if not staff_ids:
            raise ValidationException(
                "At least one staff member must be selected", field="staff_ids"
            )
        location = await self._get(tenant_id, location_id)
        wanted = list(dict.fromkeys(staff_ids))
        found = await self.staff_repo.get_by_ids(tenant_id, wanted)
        active = {s.id for s in found if s.is_active}
        if len(active) != len(wanted):
            raise ValidationException(
                "One or more staff members not found or inactive", field="staff_ids"
            )

        previous = [s.id for s in await self.location_repo.list_assigned_staff(location.id)]
        await self.location_repo.replace_assignments(location.id, wanted)
        self._audit(
            "STAFF_ASSIGNMENT", location.id, actor_id, old=previous, new=wanted
        )
        return await self.get_location(tenant_id, location.id)

    async def get_location_staff(
        self, tenant_id: str, location_id: str
    ) -> list[StaffDetail]:
        """Return assigned staff with their weekly availability."""
        location = await self._get(tenant_id, location_id)
        staff = await self.location_repo.list_assigned_staff(location.id)
        return [
            StaffDetail(
                staff=member,
                availability=await self.availability_repo.get_for_staff(member.id),
            )
            for member in staff
        ]

    async def get_location_stats(self, tenant_id: str) -> StoreLocationStats:
        total = await self.location_repo.count_locations(tenant_id)
        active = await self.location_repo.count_locations(tenant_id, is_active=True)
        assignments = await self.location_repo.count_assignments(tenant_id)
        with_staff = await self.location_repo.count_locations_with_staff(tenant_id)
        return StoreLocationStats(
            total_locations=total,
            active_locations=active,
            inactive_locations=total - active,
            total_staff_assignments=assignments,
            locations_with_staff=with_staff,
            locations_without_staff=total - with_staff,
            average_staff_per_location=round(assignments / total, 2) if total else 0.0,
        )
