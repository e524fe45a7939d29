"""Domain value objects for the rostering application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.

Weekday convention is ISO 8601 everywhere: Monday=1 .. Sunday=7.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, tzinfo

ISO_MONDAY = 1
ISO_SUNDAY = 7

_TIME_OF_DAY_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")
_DOMAIN_LABEL_RE = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")


def validate_iso_weekday(value: int) -> int:
    """Return value if it is an ISO weekday (1..7); raise ValueError otherwise."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError("day_of_week must be an integer")
    if value < ISO_MONDAY or value > ISO_SUNDAY:
        raise ValueError("day_of_week must be between 1 (Monday) and 7 (Sunday)")
    return value


def iso_weekday(moment: datetime, tz: tzinfo | None = None) -> int:
    """Return the ISO weekday of moment, converted to tz first when given."""
    local = moment.astimezone(tz) if tz is not None else moment
    return local.isoweekday()


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time of day with total ordering (hour, minute, second).

    Parsed from "HH:MM" or "HH:MM:SS"; rendered as "HH:MM" (seconds shown
    only when non-zero).
    """

    hour: int
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError("hour must be between 0 and 23")
        if not 0 <= self.minute <= 59:
            raise ValueError("minute must be between 0 and 59")
        if not 0 <= self.second <= 59:
            raise ValueError("second must be between 0 and 59")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """Parse "HH:MM" or "HH:MM:SS". Raises ValueError on bad format."""
        match = _TIME_OF_DAY_RE.match(value.strip()) if value else None
        if not match:
            raise ValueError(f"Invalid time of day {value!r}; expected HH:MM")
        hour, minute, second = match.groups()
        return cls(int(hour), int(minute), int(second or 0))

    @classmethod
    def from_time(cls, value: time) -> "TimeOfDay":
        return cls(value.hour, value.minute, value.second)

    @classmethod
    def from_datetime(cls, moment: datetime, tz: tzinfo | None = None) -> "TimeOfDay":
        """Return the wall-clock time of moment, converted to tz first when given."""
        local = moment.astimezone(tz) if tz is not None else moment
        return cls(local.hour, local.minute, local.second)

    def to_time(self) -> time:
        return time(self.hour, self.minute, self.second)

    def __str__(self) -> str:
        if self.second:
            return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class TimeRange:
    """Half-open interval [start, end) of timezone-aware datetimes.

    Two ranges [a, b) and [c, d) overlap iff a < d and c < b, so back-to-back
    ranges (b == c) do not overlap.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError("end must be after start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and other.start < self.end

    def shifted(self, delta: timedelta) -> "TimeRange":
        """Return a new range moved by delta, keeping the duration."""
        return TimeRange(self.start + delta, self.end + delta)


@dataclass(frozen=True)
class AvailabilityWindow:
    """Recurring weekly window: ISO weekday plus [start, end] time of day."""

    day_of_week: int
    start: TimeOfDay
    end: TimeOfDay
    is_active: bool = field(default=True, compare=False)

    def __post_init__(self) -> None:
        validate_iso_weekday(self.day_of_week)
        if self.start >= self.end:
            raise ValueError("Availability end time must be after start time")

    def covers(self, day_of_week: int, start: TimeOfDay, end: TimeOfDay) -> bool:
        """Return True if the window is active on day_of_week and contains [start, end]."""
        return (
            self.is_active
            and self.day_of_week == day_of_week
            and self.start <= start
            and self.end >= end
        )


@dataclass(frozen=True)
class CompanyDomain:
    """Value object for a company's unique domain (e.g. 'acme.ie').

    Stored lowercase; dot-separated labels of alphanumerics and inner hyphens.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Company domain must be a non-empty string")
        if self.value != self.value.strip().lower():
            raise ValueError("Company domain must be lowercase without surrounding spaces")
        if len(self.value) > 253:
            raise ValueError("Company domain must not exceed 253 characters")
        if not all(_DOMAIN_LABEL_RE.match(label) for label in self.value.split(".")):
            raise ValueError(
                "Company domain must be dot-separated labels of lowercase letters, "
                "digits and inner hyphens (e.g. 'acme.ie')"
            )

    @classmethod
    def normalize(cls, raw: str) -> "CompanyDomain":
        return cls(raw.strip().lower())
