"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, notification dispatch, role seeding).
"""

from app.application.interfaces import (
    INotificationDispatcher,
    IRosterRepository,
    IShiftRepository,
    IStaffRepository,
    IStoreLocationRepository,
    ITenantInitializationService,
    ITenantRepository,
    IUserRepository,
)
from app.application.services import (
    AuthorizationService,
    CompanyService,
    ShiftConflictChecker,
)
from app.application.use_cases import (
    AnalyticsService,
    NotificationService,
    RosterService,
    StaffService,
    StoreLocationService,
    UserManagementService,
)

__all__ = [
    "AnalyticsService",
    "AuthorizationService",
    "CompanyService",
    "INotificationDispatcher",
    "IRosterRepository",
    "IShiftRepository",
    "IStaffRepository",
    "IStoreLocationRepository",
    "ITenantInitializationService",
    "ITenantRepository",
    "IUserRepository",
    "NotificationService",
    "RosterService",
    "ShiftConflictChecker",
    "StaffService",
    "StoreLocationService",
    "UserManagementService",
]
