"""Application DTOs (no ORM dependency)."""

from app.application.dtos.analytics import (
    CostAnalysis,
    CostBreakdown,
    DailyShiftCount,
    DashboardMetrics,
    ShiftHoursRow,
    StaffUtilization,
)
from app.application.dtos.location import (
    StoreLocationDetail,
    StoreLocationPage,
    StoreLocationResult,
    StoreLocationStats,
)
from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.application.dtos.role import RoleResult
from app.application.dtos.roster import (
    RosterDetail,
    RosterResult,
    RosterStats,
    ShiftCreate,
    ShiftResult,
)
from app.application.dtos.staff import (
    AvailabilityResult,
    StaffDetail,
    StaffResult,
    StaffStats,
)
from app.application.dtos.tenant import CompanyStats, TenantResult
from app.application.dtos.user import UserResult

__all__ = [
    "AvailabilityResult",
    "CompanyStats",
    "CostAnalysis",
    "CostBreakdown",
    "DailyShiftCount",
    "DashboardMetrics",
    "NotificationCreate",
    "NotificationResult",
    "RoleResult",
    "RosterDetail",
    "RosterResult",
    "RosterStats",
    "ShiftCreate",
    "ShiftHoursRow",
    "ShiftResult",
    "StaffDetail",
    "StaffResult",
    "StaffStats",
    "StaffUtilization",
    "StoreLocationDetail",
    "StoreLocationPage",
    "StoreLocationResult",
    "StoreLocationStats",
    "TenantResult",
    "UserResult",
]
