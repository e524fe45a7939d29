"""Domain enumerations for the rostering application.

Enums represent fixed sets of domain values (roles, roster states, notification
events).
"""

from enum import Enum


class RoleName(str, Enum):
    """System role names seeded for every tenant.

    ADMIN in the platform operator's tenant is the only role allowed to act
    across tenants.
    """

    ADMIN = "admin"
    OWNER = "owner"
    MANAGER = "manager"
    STAFF = "staff"

    @classmethod
    def values(cls) -> list[str]:
        """Return all role names as strings."""
        return [role.value for role in cls]


# Roles allowed to manage rosters, shifts and staff records.
MANAGEMENT_ROLES: frozenset[str] = frozenset(
    {RoleName.ADMIN.value, RoleName.OWNER.value, RoleName.MANAGER.value}
)


class RosterStatus(str, Enum):
    """Roster lifecycle state derived from the published flag. One-way."""

    DRAFT = "draft"
    PUBLISHED = "published"


class NotificationEvent(str, Enum):
    """Events handed to the notification dispatcher."""

    ROSTER_PUBLISHED = "roster_published"
    SHIFT_CREATED = "shift_created"
    SHIFT_UPDATED = "shift_updated"
    SHIFT_DELETED = "shift_deleted"
    SYSTEM = "system"

    @classmethod
    def values(cls) -> list[str]:
        """Return all event values as strings."""
        return [event.value for event in cls]
