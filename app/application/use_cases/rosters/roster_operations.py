"""Roster lifecycle: roster CRUD, shift mutations, template instantiation, publish.

A roster is a draft until published; publishing is one-way and freezes the
roster and its shifts. Every shift write goes through ShiftConflictChecker
first; the database exclusion constraint on shift time ranges is the backstop.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Any

from app.application.dtos.roster import (
    RosterDetail,
    RosterResult,
    RosterStats,
    ShiftCreate,
    ShiftResult,
)
from app.application.dtos.staff import StaffResult
from app.application.interfaces.repositories import (
    IRosterRepository,
    IShiftRepository,
    IStaffRepository,
    ITenantRepository,
)
from app.application.interfaces.services import INotificationDispatcher
from app.application.services.shift_conflict_checker import ShiftConflictChecker
from app.domain.entities.roster import RosterEntity, validate_period
from app.domain.enums import NotificationEvent
from app.domain.exceptions import (
    ResourceNotFoundException,
    RosterOverlapException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import resolve_timezone, utc_now

logger = get_logger(__name__)

SHIFT_UPDATABLE_FIELDS = frozenset(
    {"staff_id", "start_time", "end_time", "position", "notes", "is_confirmed"}
)
_SHIFT_REQUIRED_FIELDS = frozenset({"staff_id", "start_time", "end_time", "is_confirmed"})
_SHIFT_TIMING_FIELDS = frozenset({"staff_id", "start_time", "end_time"})


def _to_entity(roster: RosterResult) -> RosterEntity:
    return RosterEntity(
        id=roster.id,
        tenant_id=roster.tenant_id,
        name=roster.name,
        start_date=roster.start_date,
        end_date=roster.end_date,
        is_published=roster.is_published,
        is_template=roster.is_template,
    )


def _validate_shift_times(start_time: datetime, end_time: datetime) -> None:
    if start_time >= end_time:
        raise ValidationException(
            "Shift end time must be after start time", field="end_time"
        )


class RosterService:
    """Owns roster and shift mutations and the draft -> published transition."""

    def __init__(
        self,
        roster_repo: IRosterRepository,
        shift_repo: IShiftRepository,
        staff_repo: IStaffRepository,
        tenant_repo: ITenantRepository,
        conflict_checker: ShiftConflictChecker,
        notifier: INotificationDispatcher | None = None,
        default_timezone: str = "UTC",
    ) -> None:
        self.roster_repo = roster_repo
        self.shift_repo = shift_repo
        self.staff_repo = staff_repo
        self.tenant_repo = tenant_repo
        self.conflict_checker = conflict_checker
        self.notifier = notifier
        self.default_timezone = default_timezone

    async def _tenant_timezone(self, tenant_id: str) -> tzinfo:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        name = tenant.settings.get("timezone") if tenant else None
        return resolve_timezone(name, self.default_timezone)

    async def _get_roster(self, tenant_id: str, roster_id: str) -> RosterResult:
        roster = await self.roster_repo.get_by_id_and_tenant(roster_id, tenant_id)
        if roster is None:
            raise ResourceNotFoundException("roster", roster_id, "Roster not found")
        return roster

    async def _get_shift(self, tenant_id: str, shift_id: str) -> ShiftResult:
        shift = await self.shift_repo.get_by_id_and_tenant(shift_id, tenant_id)
        if shift is None:
            raise ResourceNotFoundException("shift", shift_id, "Shift not found")
        return shift

    async def _ensure_staff(
        self, tenant_id: str, staff_ids: set[str]
    ) -> dict[str, StaffResult]:
        found = await self.staff_repo.get_by_ids(tenant_id, sorted(staff_ids))
        by_id = {s.id: s for s in found}
        missing = staff_ids - by_id.keys()
        if missing:
            staff_id = sorted(missing)[0]
            raise ResourceNotFoundException("staff", staff_id, "Staff member not found")
        return by_id

    async def _notify(
        self,
        tenant_id: str,
        event: NotificationEvent,
        roster_id: str,
        staff_ids: Sequence[str],
    ) -> None:
        """Hand the event to the dispatcher; failures are logged, never raised."""
        if self.notifier is None or not staff_ids:
            return
        try:
            await self.notifier.dispatch(
                tenant_id, event, roster_id, sorted(set(staff_ids))
            )
        except Exception:
            logger.exception(
                "Notification dispatch failed: event=%s roster_id=%s",
                event.value,
                roster_id,
            )

    async def _ensure_no_live_overlap(
        self,
        tenant_id: str,
        start_date: datetime,
        end_date: datetime,
        exclude_roster_id: str | None = None,
    ) -> None:
        existing = await self.roster_repo.find_overlapping_live(
            tenant_id, start_date, end_date, exclude_roster_id
        )
        if existing is not None:
            raise RosterOverlapException(existing.id)

    @traced("roster.create")
    async def create_roster(
        self,
        tenant_id: str,
        name: str,
        start_date: datetime,
        end_date: datetime,
        is_template: bool = False,
        notes: str | None = None,
        shifts: Sequence[ShiftCreate] | None = None,
        created_by: str | None = None,
    ) -> RosterDetail:
        """Create a draft roster with optional initial shifts.

        Dates are validated before any repository call. Live rosters must not
        overlap other live rosters of the tenant; templates skip that check.
        Initial shifts are validated as a batch and stored unconfirmed.

        Raises:
            ValidationException: start_date >= end_date, empty name, bad shift times.
            RosterOverlapException: Overlapping live roster exists.
            ResourceNotFoundException: A shift references unknown staff.
            ShiftConflictException: Batch overlap, overlap with stored shifts, or availability.
        """
        validate_period(start_date, end_date)
        if not name or not name.strip():
            raise ValidationException("Roster name is required", field="name")
        if not is_template:
            await self._ensure_no_live_overlap(tenant_id, start_date, end_date)

        candidates = [replace(s, is_confirmed=False) for s in (shifts or [])]
        staff_by_id: dict[str, StaffResult] = {}
        if candidates:
            staff_by_id = await self._ensure_staff(
                tenant_id, {c.staff_id for c in candidates}
            )
            tz = await self._tenant_timezone(tenant_id)
            await self.conflict_checker.check_batch(candidates, tz)

        roster = await self.roster_repo.create_roster(
            tenant_id=tenant_id,
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            is_template=is_template,
            notes=notes,
            created_by=created_by,
        )
        created: list[ShiftResult] = []
        if candidates:
            created = await self.shift_repo.create_shifts(tenant_id, roster.id, candidates)
        logger.info(
            "Roster created: id=%s template=%s shifts=%d",
            roster.id,
            is_template,
            len(created),
        )
        return RosterDetail(
            roster=roster,
            shifts=sorted(created, key=lambda s: s.start_time),
            staff=staff_by_id,
        )

    async def get_roster(self, tenant_id: str, roster_id: str) -> RosterDetail:
        """Return roster with shifts ordered by start time and the staff they reference."""
        roster = await self._get_roster(tenant_id, roster_id)
        shifts = await self.shift_repo.list_for_roster(roster.id)
        staff = await self.staff_repo.get_by_ids(
            tenant_id, sorted({s.staff_id for s in shifts})
        )
        return RosterDetail(roster=roster, shifts=shifts, staff={s.id: s for s in staff})

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
        return await self.roster_repo.list_rosters(
            tenant_id,
            start_date=start_date,
            end_date=end_date,
            is_published=is_published,
            is_template=is_template,
            skip=skip,
            limit=limit,
        )

    async def update_roster(
        self,
        tenant_id: str,
        roster_id: str,
        name: str | None = None,
        notes: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> RosterResult:
        """Update name, notes or dates of a draft roster."""
        roster = await self._get_roster(tenant_id, roster_id)
        _to_entity(roster).ensure_editable("Cannot modify a published roster")

        fields: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                raise ValidationException("Roster name is required", field="name")
            fields["name"] = name.strip()
        if notes is not None:
            fields["notes"] = notes
        if start_date is not None or end_date is not None:
            new_start = start_date or roster.start_date
            new_end = end_date or roster.end_date
            validate_period(new_start, new_end)
            if not roster.is_template:
                await self._ensure_no_live_overlap(
                    tenant_id, new_start, new_end, exclude_roster_id=roster.id
                )
            fields["start_date"] = new_start
            fields["end_date"] = new_end
        if not fields:
            return roster
        updated = await self.roster_repo.update_roster(roster.id, tenant_id, fields)
        if updated is None:
            raise ResourceNotFoundException("roster", roster_id, "Roster not found")
        return updated

    async def delete_roster(self, tenant_id: str, roster_id: str) -> None:
        """Hard delete a draft roster and its shifts."""
        roster = await self._get_roster(tenant_id, roster_id)
        _to_entity(roster).ensure_editable("Cannot delete a published roster")
        await self.roster_repo.delete_roster(roster.id, tenant_id)
        logger.info("Roster deleted: id=%s", roster.id)

    @traced("roster.publish")
    async def publish_roster(self, tenant_id: str, roster_id: str) -> RosterResult:
        """Publish a roster whose shifts are all confirmed, then notify its staff.

        Raises:
            ResourceNotFoundException: Roster not in tenant.
            InvalidStateException: Already published, empty, or unconfirmed shifts.
        """
        roster = await self._get_roster(tenant_id, roster_id)
        entity = _to_entity(roster)
        total = await self.shift_repo.count_for_roster(roster.id)
        unconfirmed = await self.shift_repo.count_for_roster(roster.id, is_confirmed=False)
        add_span_attributes(roster_id=roster.id, shift_count=total, unconfirmed=unconfirmed)
        entity.publish(total, unconfirmed)

        published = await self.roster_repo.update_roster(
            roster.id,
            tenant_id,
            {"is_published": True, "published_at": utc_now()},
        )
        if published is None:
            raise ResourceNotFoundException("roster", roster_id, "Roster not found")
        logger.info("Roster published: id=%s shifts=%d", roster.id, total)

        shifts = await self.shift_repo.list_for_roster(roster.id)
        await self._notify(
            tenant_id,
            NotificationEvent.ROSTER_PUBLISHED,
            roster.id,
            [s.staff_id for s in shifts],
        )
        return published

    @traced("roster.add_shift")
    async def add_shift_to_roster(
        self, tenant_id: str, roster_id: str, shift: ShiftCreate
    ) -> ShiftResult:
        """Add an unconfirmed shift to a draft roster after conflict checks."""
        roster = await self._get_roster(tenant_id, roster_id)
        _to_entity(roster).ensure_editable("Cannot add shifts to a published roster")
        _validate_shift_times(shift.start_time, shift.end_time)
        await self._ensure_staff(tenant_id, {shift.staff_id})
        tz = await self._tenant_timezone(tenant_id)
        await self.conflict_checker.check_shift_conflicts(
            shift.staff_id,
            shift.start_time,
            shift.end_time,
            roster_id=roster.id,
            tz=tz,
        )
        created = await self.shift_repo.create_shifts(
            tenant_id, roster.id, [replace(shift, is_confirmed=False)]
        )
        result = created[0]
        await self._notify(
            tenant_id, NotificationEvent.SHIFT_CREATED, roster.id, [result.staff_id]
        )
        return result

    @traced("roster.update_shift")
    async def update_shift(
        self, tenant_id: str, shift_id: str, patch: Mapping[str, Any]
    ) -> ShiftResult:
        """Apply only the provided keys to a shift of a draft roster.

        When staff, start or end changes, the resulting interval is re-validated
        and the conflict check re-run excluding this shift.

        Raises:
            ValidationException: Unknown/None fields or end before start.
            InvalidStateException: Roster is published.
        """
        unknown = set(patch) - SHIFT_UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown shift fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        for key in _SHIFT_REQUIRED_FIELDS & set(patch):
            if patch[key] is None:
                raise ValidationException(f"{key} cannot be null", field=key)

        shift = await self._get_shift(tenant_id, shift_id)
        roster = await self._get_roster(tenant_id, shift.roster_id)
        _to_entity(roster).ensure_editable("Cannot modify shifts in a published roster")

        fields = dict(patch)
        if _SHIFT_TIMING_FIELDS & fields.keys():
            staff_id = fields.get("staff_id", shift.staff_id)
            start_time = fields.get("start_time", shift.start_time)
            end_time = fields.get("end_time", shift.end_time)
            _validate_shift_times(start_time, end_time)
            if staff_id != shift.staff_id:
                await self._ensure_staff(tenant_id, {staff_id})
            tz = await self._tenant_timezone(tenant_id)
            await self.conflict_checker.check_shift_conflicts(
                staff_id,
                start_time,
                end_time,
                roster_id=roster.id,
                exclude_shift_id=shift.id,
                tz=tz,
            )
        if not fields:
            return shift
        updated = await self.shift_repo.update_shift(shift.id, tenant_id, fields)
        if updated is None:
            raise ResourceNotFoundException("shift", shift_id, "Shift not found")
        await self._notify(
            tenant_id,
            NotificationEvent.SHIFT_UPDATED,
            roster.id,
            [shift.staff_id, updated.staff_id],
        )
        return updated

    async def confirm_shift(self, tenant_id: str, shift_id: str) -> ShiftResult:
        return await self.update_shift(tenant_id, shift_id, {"is_confirmed": True})

    async def delete_shift(self, tenant_id: str, shift_id: str) -> None:
        """Hard delete a shift of a draft roster."""
        shift = await self._get_shift(tenant_id, shift_id)
        roster = await self._get_roster(tenant_id, shift.roster_id)
        _to_entity(roster).ensure_editable("Cannot delete shifts from a published roster")
        await self.shift_repo.delete_shift(shift.id, tenant_id)
        await self._notify(
            tenant_id, NotificationEvent.SHIFT_DELETED, roster.id, [shift.staff_id]
        )

    @traced("roster.from_template")
    async def create_roster_from_template(
        self,
        tenant_id: str,
        template_id: str,
        start_date: datetime,
        end_date: datetime,
        name: str | None = None,
        created_by: str | None = None,
    ) -> RosterDetail:
        """Instantiate a template as a new draft live roster starting at start_date.

        Each shift keeps its offset from the template start and its duration.
        Generated shifts are unconfirmed and validated like an initial batch.
        """
        validate_period(start_date, end_date)
        template = await self.roster_repo.get_template(template_id, tenant_id)
        if template is None:
            raise ResourceNotFoundException("template", template_id, "Template not found")
        template_shifts = await self.shift_repo.list_for_roster(template.id)
        shifts = [
            ShiftCreate(
                staff_id=s.staff_id,
                start_time=start_date + (s.start_time - template.start_date),
                end_time=start_date + (s.start_time - template.start_date)
                + (s.end_time - s.start_time),
                position=s.position,
                notes=s.notes,
                is_confirmed=False,
            )
            for s in template_shifts
        ]
        return await self.create_roster(
            tenant_id=tenant_id,
            name=name or f"{template.name} - {start_date:%Y-%m-%d}",
            start_date=start_date,
            end_date=end_date,
            is_template=False,
            notes=template.notes,
            shifts=shifts,
            created_by=created_by,
        )

    async def get_roster_stats(self, tenant_id: str) -> RosterStats:
        """Return roster counts and shift confirmation rate (percent, 2 dp).

        Totals and shift counts cover live rosters; templates are counted apart.
        """
        total = await self.roster_repo.count_rosters(tenant_id, is_template=False)
        published = await self.roster_repo.count_rosters(
            tenant_id, is_published=True, is_template=False
        )
        templates = await self.roster_repo.count_rosters(tenant_id, is_template=True)
        total_shifts = await self.shift_repo.count_shifts(tenant_id)
        confirmed = await self.shift_repo.count_shifts(tenant_id, is_confirmed=True)
        rate = round(confirmed / total_shifts * 100, 2) if total_shifts else 0.0
        return RosterStats(
            total_rosters=total,
            published_rosters=published,
            template_rosters=templates,
            total_shifts=total_shifts,
            confirmed_shifts=confirmed,
            confirmation_rate=rate,
        )
