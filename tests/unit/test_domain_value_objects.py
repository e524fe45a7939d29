"""Tests for domain value objects (TimeOfDay, TimeRange, AvailabilityWindow, CompanyDomain)."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.domain.value_objects.core import (
    AvailabilityWindow,
    CompanyDomain,
    TimeOfDay,
    TimeRange,
    iso_weekday,
    validate_iso_weekday,
)


class TestTimeOfDay:
    """TimeOfDay: HH:MM[:SS], totally ordered."""

    def test_parse_and_render(self) -> None:
        assert TimeOfDay.parse("09:30") == TimeOfDay(9, 30)
        assert str(TimeOfDay.parse("09:30")) == "09:30"
        assert str(TimeOfDay.parse("23:59:15")) == "23:59:15"

    def test_ordering(self) -> None:
        assert TimeOfDay(8, 0) < TimeOfDay(8, 1) < TimeOfDay(17, 0)

    @pytest.mark.parametrize("raw", ["24:00", "9:00", "12:60", "", "noon"])
    def test_invalid_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError):
            TimeOfDay.parse(raw)

    def test_from_datetime_converts_timezone(self) -> None:
        moment = datetime(2025, 3, 3, 23, 30, tzinfo=UTC)
        assert TimeOfDay.from_datetime(moment, ZoneInfo("Europe/Dublin")) == TimeOfDay(23, 30)
        assert TimeOfDay.from_datetime(moment, ZoneInfo("Asia/Tokyo")) == TimeOfDay(8, 30)


class TestTimeRange:
    """TimeRange: half-open [start, end)."""

    def test_back_to_back_does_not_overlap(self) -> None:
        base = datetime(2025, 1, 6, 9, tzinfo=UTC)
        first = TimeRange(base, base + timedelta(hours=8))
        second = TimeRange(base + timedelta(hours=8), base + timedelta(hours=12))
        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_one_minute_overlap(self) -> None:
        base = datetime(2025, 1, 6, 9, tzinfo=UTC)
        first = TimeRange(base, base + timedelta(hours=8))
        second = TimeRange(base + timedelta(hours=8, minutes=-1), base + timedelta(hours=12))
        assert first.overlaps(second)

    def test_empty_range_rejected(self) -> None:
        base = datetime(2025, 1, 6, 9, tzinfo=UTC)
        with pytest.raises(ValueError, match="after start"):
            TimeRange(base, base)

    def test_shifted_keeps_duration(self) -> None:
        base = datetime(2025, 1, 6, 9, tzinfo=UTC)
        moved = TimeRange(base, base + timedelta(hours=3)).shifted(timedelta(days=7))
        assert moved.start == base + timedelta(days=7)
        assert moved.duration == timedelta(hours=3)


class TestAvailabilityWindow:
    def test_covers_inclusive_bounds(self) -> None:
        window = AvailabilityWindow(1, TimeOfDay(9), TimeOfDay(17))
        assert window.covers(1, TimeOfDay(9), TimeOfDay(17))
        assert not window.covers(1, TimeOfDay(8, 59), TimeOfDay(17))
        assert not window.covers(2, TimeOfDay(9), TimeOfDay(17))

    def test_inactive_window_covers_nothing(self) -> None:
        window = AvailabilityWindow(1, TimeOfDay(0), TimeOfDay(23, 59), is_active=False)
        assert not window.covers(1, TimeOfDay(9), TimeOfDay(10))

    def test_start_must_precede_end(self) -> None:
        with pytest.raises(ValueError, match="after start"):
            AvailabilityWindow(1, TimeOfDay(17), TimeOfDay(9))

    @pytest.mark.parametrize("day", [0, 8, -1])
    def test_weekday_out_of_range(self, day: int) -> None:
        with pytest.raises(ValueError, match="between 1"):
            validate_iso_weekday(day)


def test_iso_weekday_uses_timezone() -> None:
    """Sunday 23:30 UTC is already Monday in Tokyo."""
    moment = datetime(2025, 1, 5, 23, 30, tzinfo=UTC)
    assert iso_weekday(moment) == 7
    assert iso_weekday(moment, ZoneInfo("Asia/Tokyo")) == 1


class TestCompanyDomain:
    def test_normalize(self) -> None:
        assert CompanyDomain.normalize("  Acme.IE ").value == "acme.ie"

    @pytest.mark.parametrize("raw", ["", "Acme.ie", "acme..ie", "-acme.ie", "acme_corp.ie"])
    def test_invalid_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError):
            CompanyDomain(raw)
