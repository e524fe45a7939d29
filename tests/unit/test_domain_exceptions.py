"""Tests for domain exceptions (error_code, message, details) and their HTTP status."""

import pytest

from app.core.exception_handlers import status_for
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CompanyAlreadyExistsException,
    InvalidStateException,
    LimitExceededException,
    ResourceNotFoundException,
    RosterException,
    RosterOverlapException,
    ShiftConflictException,
    SqlNotConfiguredException,
    StaffAlreadyExistsException,
    UserAlreadyExistsException,
    ValidationException,
)


def test_roster_exception_default_error_code() -> None:
    """Base RosterException uses class name as error_code when not provided."""
    exc = RosterException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "RosterException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = RosterException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert ValidationException("Invalid").details == {}


def test_authorization_exception_details() -> None:
    exc = AuthorizationException("roster", "publish")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied"
    assert exc.details == {"resource": "roster", "action": "publish"}


def test_resource_not_found_default_message() -> None:
    exc = ResourceNotFoundException("shift", "sh1")
    assert exc.message == "Shift not found: sh1"
    assert exc.details == {"resource_type": "shift", "resource_id": "sh1"}


def test_shift_conflict_carries_kind_and_conflicts() -> None:
    exc = ShiftConflictException(
        "overlap",
        ShiftConflictException.OVERLAP,
        staff_id="s1",
        conflicts=[{"id": "sh9"}],
    )
    assert exc.kind == "overlap"
    assert exc.error_code == "SHIFT_CONFLICT"
    assert exc.details == {"kind": "overlap", "staff_id": "s1", "conflicts": [{"id": "sh9"}]}


def test_limit_exceeded_message() -> None:
    exc = LimitExceededException("manager_limit", 3)
    assert exc.message == "Company has reached its manager limit of 3"
    assert exc.details == {"limit_name": "manager_limit", "limit": 3}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("roster", "x"), 404),
        (InvalidStateException("published"), 409),
        (ValidationException("bad"), 400),
        (ShiftConflictException("c", ShiftConflictException.AVAILABILITY), 409),
        (RosterOverlapException("ro1"), 409),
        (CompanyAlreadyExistsException("acme.ie"), 409),
        (StaffAlreadyExistsException("a@b.ie"), 409),
        (UserAlreadyExistsException("a@b.ie"), 409),
        (LimitExceededException("user_limit", 1), 409),
        (AuthorizationException(), 403),
        (AuthenticationException(), 401),
        (SqlNotConfiguredException(), 503),
        (RosterException("unmapped"), 400),
    ],
)
def test_status_for(exc: RosterException, status: int) -> None:
    assert status_for(exc) == status
