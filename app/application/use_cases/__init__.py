"""Application use cases: one entry point per workflow."""

from app.application.use_cases.analytics import AnalyticsService
from app.application.use_cases.locations import StoreLocationService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.rosters import RosterService
from app.application.use_cases.staff import StaffService
from app.application.use_cases.users import UserManagementService

__all__ = [
    "AnalyticsService",
    "NotificationService",
    "RosterService",
    "StaffService",
    "StoreLocationService",
    "UserManagementService",
]
