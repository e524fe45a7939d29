"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.availability_repo import (
    AvailabilityRepository,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.roster_repo import RosterRepository
from app.infrastructure.persistence.repositories.shift_repo import ShiftRepository
from app.infrastructure.persistence.repositories.staff_repo import StaffRepository
from app.infrastructure.persistence.repositories.store_location_repo import (
    StoreLocationRepository,
)
from app.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AvailabilityRepository",
    "BaseRepository",
    "NotificationRepository",
    "RoleRepository",
    "RosterRepository",
    "ShiftRepository",
    "StaffRepository",
    "StoreLocationRepository",
    "TenantRepository",
    "UserRepository",
]
