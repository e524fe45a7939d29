"""
UTC datetime utilities for consistent timezone handling.

All stored datetimes are timezone-aware UTC. Wall-clock comparisons
(availability windows) convert to the tenant's timezone first.
"""

from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() (naive) or datetime.utcnow() (deprecated).
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at API/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_iso_week(moment: datetime) -> datetime:
    """Return Monday 00:00 of moment's ISO week, in moment's timezone."""
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=moment.isoweekday() - 1)


def start_of_month(moment: datetime) -> datetime:
    """Return the first day of moment's month at 00:00."""
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_next_month(moment: datetime) -> datetime:
    first = start_of_month(moment)
    if first.month == 12:
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


def resolve_timezone(name: str | None, fallback: str = "UTC") -> tzinfo:
    """
    Return ZoneInfo for name, or for fallback when name is empty or unknown.

    Unknown names are logged; UTC is the last resort.
    """
    for candidate in (name, fallback):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r; falling back", candidate)
    return UTC


def is_valid_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
