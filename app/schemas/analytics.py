"""Analytics/dashboard API schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.roster import RosterResponse


class DashboardResponse(BaseModel):
    """Dashboard counts: staff, rosters, shifts this week/month/upcoming, recent rosters."""

    model_config = ConfigDict(from_attributes=True)

    total_staff: int
    active_staff: int
    active_staff_percentage: float
    total_rosters: int
    published_rosters: int
    published_percentage: float
    shifts_this_week: int
    shifts_this_month: int
    upcoming_shifts: int
    recent_rosters: list[RosterResponse] = Field(default_factory=list)


class StaffUtilizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    staff_id: str
    staff_name: str
    department: str
    total_shifts: int
    total_hours: float
    average_shift_hours: float


class DailyShiftCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    shift_count: int


class CostBreakdownResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    hours: float
    cost: Decimal


class CostAnalysisResponse(BaseModel):
    """Labour cost (hours x hourly rate) for a period, by department and position."""

    model_config = ConfigDict(from_attributes=True)

    total_hours: float
    total_cost: Decimal
    by_department: list[CostBreakdownResponse] = Field(default_factory=list)
    by_position: list[CostBreakdownResponse] = Field(default_factory=list)
