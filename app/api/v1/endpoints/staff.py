"""Staff API: schedulable people of the requested company and their availability."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_staff_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.staff import StaffService
from app.core.limiter import limit_writes
from app.schemas.staff import (
    AvailabilityReplaceRequest,
    AvailabilityResponse,
    StaffCreateRequest,
    StaffDetailResponse,
    StaffResponse,
    StaffStatsResponse,
    StaffUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=StaffDetailResponse, status_code=201)
@limit_writes
async def create_staff(
    request: Request,
    body: StaffCreateRequest,
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "create"))],
):
    """Create a staff member with optional initial availability windows."""
    detail = await staff_svc.create_staff(
        ctx.tenant_id,
        name=body.name,
        email=body.email,
        position=body.position,
        department=body.department,
        hourly_rate=body.hourly_rate,
        phone=body.phone,
        start_date=body.start_date,
        end_date=body.end_date,
        availability=[w.to_window() for w in body.availability],
    )
    return StaffDetailResponse.from_detail(detail)


@router.get("", response_model=list[StaffResponse])
async def list_staff(
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "read"))],
    department: str | None = None,
    position: str | None = None,
    is_active: bool | None = None,
    search: str | None = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List staff sorted by name; search matches name, email or position."""
    result = await staff_svc.list_staff(
        ctx.tenant_id,
        department=department,
        position=position,
        is_active=is_active,
        search=search,
        skip=skip,
        limit=limit,
    )
    return [StaffResponse.model_validate(s) for s in result]


@router.get("/stats", response_model=StaffStatsResponse)
async def get_staff_stats(
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "read"))],
):
    return StaffStatsResponse.model_validate(await staff_svc.get_staff_stats(ctx.tenant_id))


@router.get("/{staff_id}", response_model=StaffDetailResponse)
async def get_staff(
    staff_id: str,
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "read"))],
):
    """Staff member with availability and most recent shifts."""
    return StaffDetailResponse.from_detail(await staff_svc.get_staff(ctx.tenant_id, staff_id))


@router.patch("/{staff_id}", response_model=StaffResponse)
@limit_writes
async def update_staff(
    request: Request,
    staff_id: str,
    body: StaffUpdateRequest,
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "update"))],
):
    staff = await staff_svc.update_staff(
        ctx.tenant_id, staff_id, body.model_dump(exclude_unset=True)
    )
    return StaffResponse.model_validate(staff)


@router.delete("/{staff_id}", response_model=StaffResponse)
@limit_writes
async def delete_staff(
    request: Request,
    staff_id: str,
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "delete"))],
):
    """Deactivate a staff member (soft delete); refused while future shifts exist."""
    return StaffResponse.model_validate(await staff_svc.delete_staff(ctx.tenant_id, staff_id))


@router.put("/{staff_id}/availability", response_model=list[AvailabilityResponse])
@limit_writes
async def replace_availability(
    request: Request,
    staff_id: str,
    body: AvailabilityReplaceRequest,
    staff_svc: Annotated[StaffService, Depends(get_staff_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("staff", "update"))],
):
    """Replace all availability windows. Existing shifts are not re-validated."""
    windows = await staff_svc.replace_availability(
        ctx.tenant_id, staff_id, [w.to_window() for w in body.windows]
    )
    return [AvailabilityResponse.model_validate(w) for w in windows]
