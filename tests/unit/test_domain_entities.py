"""Tests for RosterEntity and TenantEntity business rules."""

import pytest

from app.domain.entities.roster import RosterEntity
from app.domain.entities.tenant import TenantEntity
from app.domain.enums import RosterStatus
from app.domain.exceptions import (
    InvalidStateException,
    LimitExceededException,
    ValidationException,
)
from app.domain.value_objects.core import CompanyDomain
from tests.fakes import utc


def _roster(**overrides) -> RosterEntity:
    values = {
        "id": "ro1",
        "tenant_id": "t1",
        "name": "Week 1",
        "start_date": utc(2025, 1, 6),
        "end_date": utc(2025, 1, 12),
    }
    values.update(overrides)
    return RosterEntity(**values)


class TestRosterEntity:
    def test_start_must_precede_end(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            _roster(end_date=utc(2025, 1, 6))
        assert exc_info.value.details == {"field": "end_date"}

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationException):
            _roster(name="  ")

    def test_publish_transitions_to_published(self) -> None:
        roster = _roster()
        assert roster.status is RosterStatus.DRAFT
        roster.publish(shift_count=3, unconfirmed_count=0)
        assert roster.status is RosterStatus.PUBLISHED

    @pytest.mark.parametrize(
        ("published", "shifts", "unconfirmed", "message"),
        [
            (True, 3, 0, "already published"),
            (False, 0, 0, "empty roster"),
            (False, 3, 1, "must be confirmed"),
        ],
    )
    def test_publish_preconditions(self, published, shifts, unconfirmed, message) -> None:
        roster = _roster(is_published=published)
        with pytest.raises(InvalidStateException, match=message):
            roster.publish(shifts, unconfirmed)

    def test_ensure_editable(self) -> None:
        _roster().ensure_editable("nope")
        with pytest.raises(InvalidStateException, match="nope"):
            _roster(is_published=True).ensure_editable("nope")

    def test_overlaps_period_is_inclusive(self) -> None:
        roster = _roster()
        assert roster.overlaps_period(utc(2025, 1, 12), utc(2025, 1, 19))
        assert not roster.overlaps_period(utc(2025, 1, 13), utc(2025, 1, 19))


class TestTenantEntity:
    def _tenant(self, **overrides) -> TenantEntity:
        values = {"id": "t1", "name": "Acme", "domain": CompanyDomain("acme.ie")}
        values.update(overrides)
        return TenantEntity(**values)

    def test_limits_must_be_positive(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            self._tenant(manager_limit=0)
        assert exc_info.value.details == {"field": "manager_limit"}

    def test_user_limit(self) -> None:
        tenant = self._tenant(user_limit=2)
        tenant.ensure_can_add_user(1)
        with pytest.raises(LimitExceededException):
            tenant.ensure_can_add_user(2)

    def test_inactive_company_cannot_add_users(self) -> None:
        with pytest.raises(InvalidStateException, match="suspended"):
            self._tenant(is_active=False).ensure_can_add_user(0)

    def test_manager_limit(self) -> None:
        with pytest.raises(LimitExceededException) as exc_info:
            self._tenant(manager_limit=1).ensure_can_add_manager(1)
        assert exc_info.value.details["limit_name"] == "manager_limit"

    def test_deactivate_once(self) -> None:
        tenant = self._tenant()
        tenant.deactivate()
        assert tenant.is_active is False
        with pytest.raises(InvalidStateException):
            tenant.deactivate()
