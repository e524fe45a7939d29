"""Roster and shift API schemas.

Datetimes without a timezone are taken as UTC.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.dtos.roster import RosterDetail, ShiftCreate
from app.schemas.staff import StaffResponse
from app.shared.utils.datetime import ensure_utc


class _UtcModel(BaseModel):
    @field_validator(
        "start_date", "end_date", "start_time", "end_time", check_fields=False
    )
    @classmethod
    def as_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)


class ShiftCreateRequest(_UtcModel):
    staff_id: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    position: str | None = Field(default=None, max_length=100)
    notes: str | None = None

    def to_dto(self) -> ShiftCreate:
        return ShiftCreate(
            staff_id=self.staff_id,
            start_time=self.start_time,
            end_time=self.end_time,
            position=self.position,
            notes=self.notes,
        )


class ShiftUpdateRequest(_UtcModel):
    """Partial update; only fields present in the body are applied."""

    staff_id: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    position: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    is_confirmed: bool | None = None


class RosterCreateRequest(_UtcModel):
    """New draft roster, optionally with its initial shifts."""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: datetime
    end_date: datetime
    is_template: bool = False
    notes: str | None = None
    shifts: list[ShiftCreateRequest] = Field(default_factory=list)


class RosterUpdateRequest(_UtcModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    notes: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class RosterFromTemplateRequest(_UtcModel):
    """Instantiate a template roster for a new period starting at start_date."""

    template_id: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    name: str | None = Field(default=None, max_length=255)


class ShiftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    roster_id: str
    staff_id: str
    start_time: datetime
    end_time: datetime
    position: str | None = None
    notes: str | None = None
    is_confirmed: bool


class RosterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    start_date: datetime
    end_date: datetime
    is_published: bool
    is_template: bool
    notes: str | None = None
    published_at: datetime | None = None
    created_by: str | None = None


class RosterDetailResponse(RosterResponse):
    """Roster with its shifts (ordered by start) and the staff they reference."""

    shifts: list[ShiftResponse] = Field(default_factory=list)
    staff: list[StaffResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: RosterDetail) -> "RosterDetailResponse":
        base = RosterResponse.model_validate(detail.roster).model_dump()
        return cls(
            **base,
            shifts=[ShiftResponse.model_validate(s) for s in detail.shifts],
            staff=[
                StaffResponse.model_validate(s)
                for s in sorted(detail.staff.values(), key=lambda s: s.name)
            ],
        )


class RosterStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_rosters: int
    published_rosters: int
    template_rosters: int
    total_shifts: int
    confirmed_shifts: int
    confirmation_rate: float
