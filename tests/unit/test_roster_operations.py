"""Unit tests for RosterService (lifecycle, shift mutations, templates, notifications)."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.roster import ShiftCreate
from app.application.services.shift_conflict_checker import ShiftConflictChecker
from app.application.use_cases.rosters.roster_operations import RosterService
from app.domain.enums import NotificationEvent
from app.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    RosterOverlapException,
    ShiftConflictException,
    ValidationException,
)
from tests.fakes import (
    FakeAvailabilityRepository,
    FakeRosterRepository,
    FakeShiftRepository,
    FakeStaffRepository,
    FakeTenantRepository,
    utc,
)


class Env:
    """Roster service wired to in-memory repositories for one tenant."""

    def __init__(self) -> None:
        self.tenants = FakeTenantRepository()
        self.tenant = self.tenants.add(settings={"timezone": "UTC"})
        self.staff = FakeStaffRepository()
        self.availability = FakeAvailabilityRepository()
        self.rosters = FakeRosterRepository()
        self.shifts = FakeShiftRepository(self.rosters, self.staff)
        self.notifier = AsyncMock()
        self.alice = self.staff.add(self.tenant.id, "Alice")
        self.bob = self.staff.add(self.tenant.id, "Bob")
        self.availability.add_all_week(self.alice.id)
        self.availability.add_all_week(self.bob.id)
        self.service = RosterService(
            self.rosters,
            self.shifts,
            self.staff,
            self.tenants,
            ShiftConflictChecker(self.shifts, self.availability),
            notifier=self.notifier,
        )

    @property
    def tid(self) -> str:
        return self.tenant.id

    async def draft(self, start=utc(2025, 1, 6), end=utc(2025, 1, 12), **kwargs):
        detail = await self.service.create_roster(self.tid, "Week 1", start, end, **kwargs)
        return detail.roster


@pytest.fixture
def env() -> Env:
    return Env()


class TestCreateRoster:
    async def test_start_not_before_end_rejected_before_repository_access(self) -> None:
        repos = [AsyncMock() for _ in range(4)]
        service = RosterService(*repos, conflict_checker=AsyncMock())
        with pytest.raises(ValidationException, match="End date must be after start date"):
            await service.create_roster("t1", "Week", utc(2025, 1, 12), utc(2025, 1, 6))
        for repo in repos:
            assert repo.mock_calls == []

    async def test_overlapping_live_roster_rejected(self, env: Env) -> None:
        first = await env.draft()
        with pytest.raises(RosterOverlapException) as exc_info:
            await env.draft(utc(2025, 1, 12), utc(2025, 1, 19))
        assert exc_info.value.details == {"roster_id": first.id}

    async def test_templates_skip_overlap(self, env: Env) -> None:
        await env.draft()
        template = await env.draft(is_template=True)
        assert template.is_template is True

    async def test_initial_shifts_stored_unconfirmed(self, env: Env) -> None:
        detail = await env.service.create_roster(
            env.tid,
            "Week 1",
            utc(2025, 1, 6),
            utc(2025, 1, 12),
            shifts=[
                ShiftCreate(env.alice.id, utc(2025, 1, 7, 9), utc(2025, 1, 7, 17), is_confirmed=True),
                ShiftCreate(env.bob.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17)),
            ],
        )
        assert [s.staff_id for s in detail.shifts] == [env.bob.id, env.alice.id]
        assert not any(s.is_confirmed for s in detail.shifts)
        assert set(detail.staff) == {env.alice.id, env.bob.id}

    async def test_initial_batch_overlap_rejected_and_nothing_stored(self, env: Env) -> None:
        with pytest.raises(ShiftConflictException):
            await env.service.create_roster(
                env.tid,
                "Week 1",
                utc(2025, 1, 6),
                utc(2025, 1, 12),
                shifts=[
                    ShiftCreate(env.alice.id, utc(2025, 1, 7, 9), utc(2025, 1, 7, 17)),
                    ShiftCreate(env.alice.id, utc(2025, 1, 7, 16), utc(2025, 1, 7, 20)),
                ],
            )
        assert env.rosters.items == {}

    async def test_unknown_staff_rejected(self, env: Env) -> None:
        with pytest.raises(ResourceNotFoundException, match="Staff member not found"):
            await env.service.create_roster(
                env.tid,
                "Week 1",
                utc(2025, 1, 6),
                utc(2025, 1, 12),
                shifts=[ShiftCreate("s-ghost", utc(2025, 1, 7, 9), utc(2025, 1, 7, 17))],
            )


class TestPublish:
    async def test_publish_requires_all_shifts_confirmed(self, env: Env) -> None:
        """Two shifts, one confirmed: publish fails; after confirming the other it succeeds."""
        roster = await env.draft()
        first = await env.service.add_shift_to_roster(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
        )
        second = await env.service.add_shift_to_roster(
            env.tid, roster.id, ShiftCreate(env.bob.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
        )
        await env.service.confirm_shift(env.tid, first.id)

        with pytest.raises(InvalidStateException, match="All shifts must be confirmed"):
            await env.service.publish_roster(env.tid, roster.id)

        await env.service.confirm_shift(env.tid, second.id)
        published = await env.service.publish_roster(env.tid, roster.id)
        assert published.is_published is True
        assert published.published_at is not None

        env.notifier.dispatch.assert_awaited_with(
            env.tid,
            NotificationEvent.ROSTER_PUBLISHED,
            roster.id,
            sorted([env.alice.id, env.bob.id]),
        )

    async def test_empty_roster_cannot_be_published(self, env: Env) -> None:
        roster = await env.draft()
        with pytest.raises(InvalidStateException, match="empty roster"):
            await env.service.publish_roster(env.tid, roster.id)

    async def test_publish_twice_rejected(self, env: Env) -> None:
        roster = await self._published(env)
        with pytest.raises(InvalidStateException, match="already published"):
            await env.service.publish_roster(env.tid, roster.id)

    async def test_notification_failure_does_not_fail_publish(self, env: Env) -> None:
        env.notifier.dispatch.side_effect = RuntimeError("smtp down")
        roster = await self._published(env)
        assert env.rosters.items[roster.id].is_published is True

    async def test_published_roster_is_frozen(self, env: Env) -> None:
        roster = await self._published(env)
        shift = (await env.shifts.list_for_roster(roster.id))[0]
        new_shift = ShiftCreate(env.bob.id, utc(2025, 1, 8, 9), utc(2025, 1, 8, 17))

        with pytest.raises(InvalidStateException):
            await env.service.add_shift_to_roster(env.tid, roster.id, new_shift)
        with pytest.raises(InvalidStateException):
            await env.service.update_shift(env.tid, shift.id, {"notes": "late"})
        with pytest.raises(InvalidStateException):
            await env.service.delete_shift(env.tid, shift.id)
        with pytest.raises(InvalidStateException):
            await env.service.update_roster(env.tid, roster.id, name="Renamed")
        with pytest.raises(InvalidStateException):
            await env.service.delete_roster(env.tid, roster.id)

    async def test_other_tenant_sees_not_found(self, env: Env) -> None:
        roster = await env.draft()
        other = env.tenants.add("other.ie")
        with pytest.raises(ResourceNotFoundException, match="Roster not found"):
            await env.service.publish_roster(other.id, roster.id)

    @staticmethod
    async def _published(env: Env):
        roster = await env.draft()
        shift = await env.service.add_shift_to_roster(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 7, 9), utc(2025, 1, 7, 17))
        )
        await env.service.confirm_shift(env.tid, shift.id)
        return await env.service.publish_roster(env.tid, roster.id)


class TestShiftMutations:
    async def test_add_shift_notifies_staff(self, env: Env) -> None:
        roster = await env.draft()
        shift = await env.service.add_shift_to_roster(
            env.tid,
            roster.id,
            ShiftCreate(env.alice.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17), is_confirmed=True),
        )
        assert shift.is_confirmed is False
        env.notifier.dispatch.assert_awaited_once_with(
            env.tid, NotificationEvent.SHIFT_CREATED, roster.id, [env.alice.id]
        )

    async def test_add_shift_with_inverted_times_rejected(self, env: Env) -> None:
        roster = await env.draft()
        with pytest.raises(ValidationException, match="end time must be after start"):
            await env.service.add_shift_to_roster(
                env.tid,
                roster.id,
                ShiftCreate(env.alice.id, utc(2025, 1, 6, 17), utc(2025, 1, 6, 9)),
            )

    async def test_update_shift_rechecks_conflicts_excluding_itself(self, env: Env) -> None:
        roster = await env.draft()
        add = env.service.add_shift_to_roster
        morning = await add(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 6), utc(2025, 1, 6, 10))
        )
        await add(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 14), utc(2025, 1, 6, 18))
        )

        moved = await env.service.update_shift(
            env.tid, morning.id, {"end_time": utc(2025, 1, 6, 14)}
        )
        assert moved.end_time == utc(2025, 1, 6, 14)

        with pytest.raises(ShiftConflictException):
            await env.service.update_shift(
                env.tid, morning.id, {"end_time": utc(2025, 1, 6, 15)}
            )

    async def test_update_shift_rejects_unknown_and_null_fields(self, env: Env) -> None:
        with pytest.raises(ValidationException, match="Unknown shift fields: roster_id"):
            await env.service.update_shift(env.tid, "sh1", {"roster_id": "x"})
        with pytest.raises(ValidationException, match="start_time cannot be null"):
            await env.service.update_shift(env.tid, "sh1", {"start_time": None})

    async def test_update_missing_shift(self, env: Env) -> None:
        with pytest.raises(ResourceNotFoundException, match="Shift not found"):
            await env.service.update_shift(env.tid, "missing", {"notes": "x"})

    async def test_delete_shift(self, env: Env) -> None:
        roster = await env.draft()
        shift = await env.service.add_shift_to_roster(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
        )
        await env.service.delete_shift(env.tid, shift.id)
        assert await env.shifts.list_for_roster(roster.id) == []
        env.notifier.dispatch.assert_awaited_with(
            env.tid, NotificationEvent.SHIFT_DELETED, roster.id, [env.alice.id]
        )


class TestRosterUpdates:
    async def test_update_dates_rechecks_overlap(self, env: Env) -> None:
        first = await env.draft()
        second = await env.draft(utc(2025, 1, 13), utc(2025, 1, 19))
        with pytest.raises(RosterOverlapException):
            await env.service.update_roster(env.tid, second.id, start_date=utc(2025, 1, 10))
        updated = await env.service.update_roster(env.tid, first.id, end_date=utc(2025, 1, 11))
        assert updated.end_date == utc(2025, 1, 11)

    async def test_update_rejects_inverted_period(self, env: Env) -> None:
        roster = await env.draft()
        with pytest.raises(ValidationException):
            await env.service.update_roster(env.tid, roster.id, end_date=utc(2025, 1, 1))

    async def test_delete_draft_removes_shifts(self, env: Env) -> None:
        roster = await env.draft()
        await env.service.add_shift_to_roster(
            env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
        )
        await env.service.delete_roster(env.tid, roster.id)
        assert roster.id not in env.rosters.items
        assert await env.shifts.find_overlapping(
            env.alice.id, utc(2025, 1, 6), utc(2025, 1, 7)
        ) == []


class TestTemplates:
    async def test_shift_offsets_and_durations_preserved(self, env: Env) -> None:
        detail = await env.service.create_roster(
            env.tid,
            "Standard week",
            utc(2024, 1, 1),
            utc(2024, 1, 7),
            is_template=True,
            shifts=[
                ShiftCreate(env.alice.id, utc(2024, 1, 2, 9), utc(2024, 1, 2, 17), position="Lead"),
                ShiftCreate(env.bob.id, utc(2024, 1, 4, 22), utc(2024, 1, 5, 6)),
            ],
        )
        template = detail.roster
        new_start = utc(2025, 3, 3)

        created = await env.service.create_roster_from_template(
            env.tid, template.id, new_start, utc(2025, 3, 9)
        )

        assert created.roster.is_template is False
        assert created.roster.is_published is False
        assert created.roster.name == "Standard week - 2025-03-03"
        by_staff = {s.staff_id: s for s in created.shifts}
        alice = by_staff[env.alice.id]
        assert alice.start_time == new_start + timedelta(days=1, hours=9)
        assert alice.end_time - alice.start_time == timedelta(hours=8)
        assert alice.position == "Lead"
        bob = by_staff[env.bob.id]
        assert bob.start_time == new_start + timedelta(days=3, hours=22)
        assert bob.end_time - bob.start_time == timedelta(hours=8)
        assert not any(s.is_confirmed for s in created.shifts)

    async def test_live_roster_is_not_a_template(self, env: Env) -> None:
        roster = await env.draft()
        with pytest.raises(ResourceNotFoundException, match="Template not found"):
            await env.service.create_roster_from_template(
                env.tid, roster.id, utc(2025, 2, 3), utc(2025, 2, 9)
            )


async def test_roster_stats(env: Env) -> None:
    roster = await env.draft()
    template = await env.draft(is_template=True)
    await env.shifts.create_shifts(
        env.tid, template.id, [ShiftCreate(env.alice.id, utc(2025, 1, 8, 9), utc(2025, 1, 8, 17))]
    )
    shift = await env.service.add_shift_to_roster(
        env.tid, roster.id, ShiftCreate(env.alice.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
    )
    await env.service.add_shift_to_roster(
        env.tid, roster.id, ShiftCreate(env.bob.id, utc(2025, 1, 6, 9), utc(2025, 1, 6, 17))
    )
    await env.service.add_shift_to_roster(
        env.tid, roster.id, ShiftCreate(env.bob.id, utc(2025, 1, 7, 9), utc(2025, 1, 7, 17))
    )
    await env.service.confirm_shift(env.tid, shift.id)

    stats = await env.service.get_roster_stats(env.tid)
    # Template and its shift are kept out of the live totals.
    assert stats.total_rosters == 1
    assert stats.template_rosters == 1
    assert stats.published_rosters == 0
    assert stats.total_shifts == 3
    assert stats.confirmed_shifts == 1
    assert stats.confirmation_rate == 33.33
