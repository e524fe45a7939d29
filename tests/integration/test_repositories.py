"""Repository tests against Postgres. Each test runs in a session that is rolled back."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.roster import ShiftCreate
from app.domain.exceptions import (
    CompanyAlreadyExistsException,
    ShiftConflictException,
    StaffAlreadyExistsException,
)
from app.infrastructure.persistence.repositories import (
    RosterRepository,
    ShiftRepository,
    StaffRepository,
    StoreLocationRepository,
    TenantRepository,
)

pytestmark = pytest.mark.requires_db


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


async def _tenant(session: AsyncSession):
    return await TenantRepository(session).create_tenant(
        name="Acme",
        domain=f"acme-{uuid.uuid4().hex[:8]}.ie",
        user_limit=10,
        manager_limit=2,
        token_limit=1000,
        settings={},
    )


async def _staff(session: AsyncSession, tenant_id: str, email: str = "alice@acme.ie"):
    return await StaffRepository(session).create_staff(
        tenant_id,
        {
            "name": "Alice Byrne",
            "email": email,
            "position": "Nurse",
            "department": "Ward A",
            "hourly_rate": Decimal("21.50"),
        },
    )


async def test_duplicate_domain_rejected(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    with pytest.raises(CompanyAlreadyExistsException):
        await TenantRepository(db_session).create_tenant(
            name="Other",
            domain=tenant.domain,
            user_limit=10,
            manager_limit=2,
            token_limit=1000,
            settings={},
        )


async def test_duplicate_staff_email_rejected_within_tenant(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    await _staff(db_session, tenant.id)
    with pytest.raises(StaffAlreadyExistsException):
        await _staff(db_session, tenant.id)

    # Same email in another company is fine.
    other = await _tenant(db_session)
    created = await _staff(db_session, other.id)
    assert created.tenant_id == other.id


async def test_exclusion_constraint_rejects_overlapping_shifts(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    staff = await _staff(db_session, tenant.id)
    rosters = RosterRepository(db_session)
    shifts = ShiftRepository(db_session)
    first = await rosters.create_roster(tenant.id, "Week 10", utc(2025, 3, 3), utc(2025, 3, 9))
    second = await rosters.create_roster(tenant.id, "Week 11", utc(2025, 3, 10), utc(2025, 3, 16))

    await shifts.create_shifts(
        tenant.id,
        first.id,
        [ShiftCreate(staff.id, utc(2025, 3, 3, 9), utc(2025, 3, 3, 17))],
    )
    # Constraint spans rosters; the checker is bypassed here.
    with pytest.raises(ShiftConflictException):
        await shifts.create_shifts(
            tenant.id,
            second.id,
            [ShiftCreate(staff.id, utc(2025, 3, 3, 16), utc(2025, 3, 3, 20))],
        )

    # Back-to-back is allowed and the session is still usable after the savepoint rollback.
    created = await shifts.create_shifts(
        tenant.id,
        first.id,
        [ShiftCreate(staff.id, utc(2025, 3, 3, 17), utc(2025, 3, 3, 21))],
    )
    assert len(created) == 1
    assert await shifts.count_for_roster(first.id) == 2


async def test_find_overlapping_is_half_open(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    staff = await _staff(db_session, tenant.id)
    roster = await RosterRepository(db_session).create_roster(
        tenant.id, "Week 10", utc(2025, 3, 3), utc(2025, 3, 9)
    )
    shifts = ShiftRepository(db_session)
    [shift] = await shifts.create_shifts(
        tenant.id, roster.id, [ShiftCreate(staff.id, utc(2025, 3, 3, 9), utc(2025, 3, 3, 17))]
    )

    assert await shifts.find_overlapping(staff.id, utc(2025, 3, 3, 17), utc(2025, 3, 3, 20)) == []
    hits = await shifts.find_overlapping(staff.id, utc(2025, 3, 3, 16, 59), utc(2025, 3, 3, 20))
    assert [s.id for s in hits] == [shift.id]
    assert (
        await shifts.find_overlapping(
            staff.id, utc(2025, 3, 3, 10), utc(2025, 3, 3, 11), exclude_shift_id=shift.id
        )
        == []
    )


async def test_find_overlapping_live_ignores_templates(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    rosters = RosterRepository(db_session)
    await rosters.create_roster(
        tenant.id, "Template", utc(2025, 3, 3), utc(2025, 3, 9), is_template=True
    )
    assert await rosters.find_overlapping_live(tenant.id, utc(2025, 3, 5), utc(2025, 3, 12)) is None

    live = await rosters.create_roster(tenant.id, "Week 10", utc(2025, 3, 3), utc(2025, 3, 9))
    # Touching end dates count as overlap.
    found = await rosters.find_overlapping_live(tenant.id, utc(2025, 3, 9), utc(2025, 3, 16))
    assert found is not None and found.id == live.id
    assert (
        await rosters.find_overlapping_live(
            tenant.id, utc(2025, 3, 5), utc(2025, 3, 12), exclude_roster_id=live.id
        )
        is None
    )


async def test_store_location_assignments_and_counts(db_session: AsyncSession) -> None:
    tenant = await _tenant(db_session)
    alice = await _staff(db_session, tenant.id)
    bob = await _staff(db_session, tenant.id, email="bob@acme.ie")
    locations = StoreLocationRepository(db_session)
    grafton = await locations.create_location(
        tenant.id, {"name": "Grafton", "address": "12 Grafton Street", "is_active": True}
    )
    await locations.create_location(
        tenant.id, {"name": "Airport", "address": "Terminal 2", "is_active": False}
    )

    await locations.replace_assignments(grafton.id, [alice.id, bob.id])
    await locations.replace_assignments(grafton.id, [bob.id])

    found = await locations.get_by_id_and_tenant(grafton.id, tenant.id)
    assert found is not None and found.staff_count == 1
    assert [s.id for s in await locations.list_assigned_staff(grafton.id)] == [bob.id]
    assert await locations.count_assignments(tenant.id) == 1
    assert await locations.count_locations_with_staff(tenant.id) == 1

    listed = await locations.list_locations(tenant.id, search="grafton street")
    assert [(loc.name, loc.staff_count) for loc in listed] == [("Grafton", 1)]
    assert await locations.count_locations(tenant.id, is_active=False) == 1

    # Deleting the location cascades its assignments.
    assert await locations.delete_location(grafton.id, tenant.id) is True
    assert await locations.count_assignments(tenant.id) == 0
