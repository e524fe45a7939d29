"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    TenantMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.roster import Roster, Shift
from app.infrastructure.persistence.models.staff import Staff, StaffAvailability
from app.infrastructure.persistence.models.store_location import (
    StaffStoreLocation,
    StoreLocation,
)
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.models.user import User

__all__ = [
    "Tenant",
    "Role",
    "User",
    "Staff",
    "StaffAvailability",
    "StoreLocation",
    "StaffStoreLocation",
    "Roster",
    "Shift",
    "Notification",
    "CuidMixin",
    "TenantMixin",
    "TimestampMixin",
    "MultiTenantModel",
]
