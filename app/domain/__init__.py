"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import RosterEntity, TenantEntity
from app.domain.enums import NotificationEvent, RoleName, RosterStatus
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
    RosterException,
    ShiftConflictException,
    ValidationException,
)
from app.domain.value_objects import AvailabilityWindow, TimeOfDay, TimeRange

__all__ = [
    # Entities
    "RosterEntity",
    "TenantEntity",
    # Enums
    "NotificationEvent",
    "RoleName",
    "RosterStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "RosterException",
    "ShiftConflictException",
    "ValidationException",
    # Value objects
    "AvailabilityWindow",
    "TimeOfDay",
    "TimeRange",
]
