"""Store location API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.location import StoreLocationDetail, StoreLocationPage
from app.application.dtos.staff import StaffDetail
from app.schemas.staff import AvailabilityResponse, StaffResponse


class StoreLocationCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    address: str = Field(..., min_length=5, max_length=500)
    is_active: bool = True


class StoreLocationUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=2, max_length=255)
    address: str | None = Field(default=None, min_length=5, max_length=500)
    is_active: bool | None = None


class AssignStaffRequest(BaseModel):
    """Replaces every assignment of the location."""

    staff_ids: list[str] = Field(..., min_length=1)


class StoreLocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    address: str
    is_active: bool
    staff_count: int


class AssignedStaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    position: str
    department: str
    is_active: bool


class StoreLocationDetailResponse(StoreLocationResponse):
    """Location with the staff assigned to it."""

    staff: list[AssignedStaffResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: StoreLocationDetail) -> "StoreLocationDetailResponse":
        base = StoreLocationResponse.model_validate(detail.location).model_dump()
        return cls(
            **base,
            staff=[AssignedStaffResponse.model_validate(s) for s in detail.staff],
        )


class StoreLocationPageResponse(BaseModel):
    items: list[StoreLocationDetailResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: StoreLocationPage) -> "StoreLocationPageResponse":
        return cls(
            items=[StoreLocationDetailResponse.from_detail(d) for d in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class LocationStaffResponse(StaffResponse):
    """Assigned staff member with weekly availability."""

    availability: list[AvailabilityResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: StaffDetail) -> "LocationStaffResponse":
        base = StaffResponse.model_validate(detail.staff).model_dump()
        return cls(
            **base,
            availability=[AvailabilityResponse.model_validate(a) for a in detail.availability],
        )


class StoreLocationStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_locations: int
    active_locations: int
    inactive_locations: int
    total_staff_assignments: int
    locations_with_staff: int
    locations_without_staff: int
    average_staff_per_location: float
