"""Domain value objects and shared value types."""

from app.domain.value_objects.core import (
    AvailabilityWindow,
    CompanyDomain,
    TimeOfDay,
    TimeRange,
    iso_weekday,
    validate_iso_weekday,
)

__all__ = [
    "AvailabilityWindow",
    "CompanyDomain",
    "TimeOfDay",
    "TimeRange",
    "iso_weekday",
    "validate_iso_weekday",
]
