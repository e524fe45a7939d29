"""Staff and availability API schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.application.dtos.staff import StaffDetail
from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import AvailabilityWindow, TimeOfDay

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class AvailabilityWindowRequest(BaseModel):
    """One recurring weekly window. day_of_week is ISO: Monday=1 .. Sunday=7."""

    day_of_week: int = Field(..., ge=1, le=7)
    start_time: str = Field(..., pattern=_TIME_PATTERN, examples=["09:00"])
    end_time: str = Field(..., pattern=_TIME_PATTERN, examples=["17:00"])
    is_active: bool = True

    def to_window(self) -> AvailabilityWindow:
        """Build the value object; start must be before end (400 otherwise)."""
        try:
            return AvailabilityWindow(
                day_of_week=self.day_of_week,
                start=TimeOfDay.parse(self.start_time),
                end=TimeOfDay.parse(self.end_time),
                is_active=self.is_active,
            )
        except ValueError as e:
            raise ValidationException(str(e), field="availability") from e


class StaffCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)
    position: str = Field(..., min_length=1, max_length=100)
    department: str = Field(..., min_length=1, max_length=100)
    hourly_rate: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None
    availability: list[AvailabilityWindowRequest] = Field(default_factory=list)


class StaffUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    hourly_rate: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool | None = None


class AvailabilityReplaceRequest(BaseModel):
    """Full replacement of a staff member's availability windows."""

    windows: list[AvailabilityWindowRequest] = Field(default_factory=list)


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    email: str
    phone: str | None
    position: str
    department: str
    hourly_rate: Decimal
    start_date: date | None
    end_date: date | None
    is_active: bool


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    staff_id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def render_time_of_day(cls, v: Any) -> Any:
        return str(v) if isinstance(v, TimeOfDay) else v


class RecentShiftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    roster_id: str
    start_time: datetime
    end_time: datetime
    position: str | None = None
    is_confirmed: bool


class StaffDetailResponse(StaffResponse):
    """Staff member with availability windows and most recent shifts."""

    availability: list[AvailabilityResponse] = Field(default_factory=list)
    recent_shifts: list[RecentShiftResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: StaffDetail) -> "StaffDetailResponse":
        base = StaffResponse.model_validate(detail.staff).model_dump()
        return cls(
            **base,
            availability=[AvailabilityResponse.model_validate(a) for a in detail.availability],
            recent_shifts=[
                RecentShiftResponse.model_validate(s) for s in detail.recent_shifts
            ],
        )


class StaffStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    active: int
    inactive: int
    by_department: dict[str, int]
    by_position: dict[str, int]
