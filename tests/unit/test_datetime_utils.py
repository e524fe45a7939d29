"""Unit tests for the UTC and tenant-timezone helpers."""

import logging
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from app.shared.utils.datetime import (
    ensure_utc,
    resolve_timezone,
    start_of_iso_week,
    start_of_next_month,
)


def test_ensure_utc_treats_naive_as_utc() -> None:
    assert ensure_utc(datetime(2025, 1, 6, 9)) == datetime(2025, 1, 6, 9, tzinfo=UTC)
    assert ensure_utc(None) is None


def test_resolve_timezone_logs_unknown_name_and_falls_back(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="app.shared.utils.datetime"):
        tz = resolve_timezone("Mars/Olympus", fallback="Europe/Dublin")
    assert tz == ZoneInfo("Europe/Dublin")
    assert "Unknown timezone 'Mars/Olympus'" in caplog.text


def test_resolve_timezone_last_resort_is_utc() -> None:
    assert resolve_timezone(None, fallback="") is UTC


def test_calendar_starts() -> None:
    wednesday = datetime(2024, 12, 18, 15, 30, tzinfo=UTC)
    assert start_of_iso_week(wednesday) == datetime(2024, 12, 16, tzinfo=UTC)
    assert start_of_next_month(wednesday) == datetime(2025, 1, 1, tzinfo=UTC)
