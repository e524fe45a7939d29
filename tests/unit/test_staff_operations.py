"""Unit tests for StaffService (create, update, soft delete, availability)."""

from decimal import Decimal

import pytest

from app.application.dtos.roster import ShiftCreate
from app.application.use_cases.staff.staff_operations import StaffService
from app.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    StaffAlreadyExistsException,
    ValidationException,
)
from app.domain.value_objects.core import AvailabilityWindow, TimeOfDay
from tests.fakes import (
    FakeAvailabilityRepository,
    FakeShiftRepository,
    FakeStaffRepository,
    utc,
)

TENANT = "t1"


@pytest.fixture
def staff_repo() -> FakeStaffRepository:
    return FakeStaffRepository()


@pytest.fixture
def shift_repo() -> FakeShiftRepository:
    return FakeShiftRepository()


@pytest.fixture
def service(staff_repo, shift_repo) -> StaffService:
    return StaffService(staff_repo, FakeAvailabilityRepository(), shift_repo)


async def _create(service: StaffService, **overrides):
    values = {
        "name": "Dana Murphy",
        "email": "Dana@Example.com ",
        "position": "Chef",
        "department": "Kitchen",
        "hourly_rate": Decimal("18.50"),
    }
    values.update(overrides)
    return await service.create_staff(TENANT, **values)


async def test_create_normalizes_email_and_stores_availability(service) -> None:
    detail = await _create(
        service,
        availability=[
            AvailabilityWindow(2, TimeOfDay(9), TimeOfDay(17)),
            AvailabilityWindow(1, TimeOfDay(8), TimeOfDay(12)),
        ],
    )
    assert detail.staff.email == "dana@example.com"
    assert [w.day_of_week for w in detail.availability] == [1, 2]


async def test_duplicate_email_rejected(service) -> None:
    await _create(service)
    with pytest.raises(StaffAlreadyExistsException):
        await _create(service, email="dana@example.com")


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"name": "D"}, "name"),
        ({"position": "  "}, "position"),
        ({"department": ""}, "department"),
        ({"hourly_rate": Decimal("0")}, "hourly_rate"),
        ({"start_date": utc(2025, 2, 1).date(), "end_date": utc(2025, 1, 1).date()}, "end_date"),
    ],
)
async def test_create_validation(service, overrides: dict, field: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await _create(service, **overrides)
    assert exc_info.value.details == {"field": field}


async def test_update_applies_only_given_fields(service) -> None:
    created = (await _create(service)).staff
    updated = await service.update_staff(TENANT, created.id, {"position": "Head Chef"})
    assert updated.position == "Head Chef"
    assert updated.department == "Kitchen"


async def test_update_email_must_stay_unique(service) -> None:
    first = (await _create(service)).staff
    await _create(service, name="Eoin", email="eoin@example.com")
    with pytest.raises(StaffAlreadyExistsException):
        await service.update_staff(TENANT, first.id, {"email": "EOIN@example.com"})


async def test_update_unknown_field_rejected(service) -> None:
    with pytest.raises(ValidationException, match="Unknown staff fields: tenant_id"):
        await service.update_staff(TENANT, "s1", {"tenant_id": "t2"})


async def test_other_tenant_cannot_see_staff(service, staff_repo) -> None:
    foreign = staff_repo.add("t2")
    with pytest.raises(ResourceNotFoundException, match="Staff member not found"):
        await service.get_staff(TENANT, foreign.id)


async def test_delete_refused_with_future_shifts(service, staff_repo, shift_repo) -> None:
    staff = staff_repo.add(TENANT)
    await shift_repo.create_shifts(
        TENANT, "ro1", [ShiftCreate(staff.id, utc(2025, 6, 2, 9), utc(2025, 6, 2, 17))]
    )
    with pytest.raises(InvalidStateException, match="future shifts"):
        await service.delete_staff(TENANT, staff.id, now=utc(2025, 6, 1))

    deleted = await service.delete_staff(TENANT, staff.id, now=utc(2025, 6, 3))
    assert deleted.is_active is False
    assert staff_repo.items[staff.id].is_active is False


async def test_replace_availability_and_detail(service, staff_repo, shift_repo) -> None:
    staff = staff_repo.add(TENANT)
    await service.replace_availability(
        TENANT, staff.id, [AvailabilityWindow(1, TimeOfDay(9), TimeOfDay(17))]
    )
    windows = await service.replace_availability(
        TENANT, staff.id, [AvailabilityWindow(3, TimeOfDay(10), TimeOfDay(14))]
    )
    assert [(w.day_of_week, str(w.start_time)) for w in windows] == [(3, "10:00")]

    await shift_repo.create_shifts(
        TENANT, "ro1", [ShiftCreate(staff.id, utc(2025, 1, 8, 10), utc(2025, 1, 8, 14))]
    )
    detail = await service.get_staff(TENANT, staff.id)
    assert len(detail.availability) == 1
    assert len(detail.recent_shifts) == 1


async def test_replace_availability_returns_windows_by_day_then_start(service, staff_repo) -> None:
    staff = staff_repo.add(TENANT)
    windows = await service.replace_availability(
        TENANT,
        staff.id,
        [
            AvailabilityWindow(5, TimeOfDay(9), TimeOfDay(17)),
            AvailabilityWindow(1, TimeOfDay(14), TimeOfDay(20)),
            AvailabilityWindow(1, TimeOfDay(6), TimeOfDay(10)),
        ],
    )
    assert [(w.day_of_week, str(w.start_time)) for w in windows] == [
        (1, "06:00"),
        (1, "14:00"),
        (5, "09:00"),
    ]


async def test_stats_group_by_department_and_position(service, staff_repo) -> None:
    staff_repo.add(TENANT, "Alice")
    staff_repo.add(TENANT, "Bob", department="Ward B", is_active=False)
    staff_repo.add("t2", "Carol")
    stats = await service.get_staff_stats(TENANT)
    assert stats.total == 2
    assert stats.active == 1
    assert stats.inactive == 1
    assert stats.by_department == {"Ward A": 1, "Ward B": 1}
    assert stats.by_position == {"Nurse": 2}
