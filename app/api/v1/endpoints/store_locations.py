"""Store locations API: sites of the requested company and the staff assigned to each."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_store_location_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.locations import StoreLocationService
from app.core.limiter import limit_writes
from app.schemas.location import (
    AssignStaffRequest,
    LocationStaffResponse,
    StoreLocationCreateRequest,
    StoreLocationDetailResponse,
    StoreLocationPageResponse,
    StoreLocationResponse,
    StoreLocationStatsResponse,
    StoreLocationUpdateRequest,
)

router = APIRouter()

LocationSvc = Annotated[StoreLocationService, Depends(get_store_location_service)]


@router.post("", response_model=StoreLocationResponse, status_code=201)
@limit_writes
async def create_store_location(
    request: Request,
    body: StoreLocationCreateRequest,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "create"))],
):
    location = await locations.create_location(
        ctx.tenant_id,
        name=body.name,
        address=body.address,
        is_active=body.is_active,
        actor_id=ctx.user_id,
    )
    return StoreLocationResponse.model_validate(location)


@router.get("", response_model=StoreLocationPageResponse)
async def list_store_locations(
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "read"))],
    search: str | None = Query(None, max_length=100),
    is_active: bool | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: Literal["name", "address", "created_at"] = "name",
    sort_order: Literal["asc", "desc"] = "asc",
):
    """Page through locations; search matches name or address."""
    result = await locations.list_locations(
        ctx.tenant_id,
        search=search,
        is_active=is_active,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return StoreLocationPageResponse.from_page(result)


@router.get("/stats", response_model=StoreLocationStatsResponse)
async def get_store_location_stats(
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "stats"))],
):
    stats = await locations.get_location_stats(ctx.tenant_id)
    return StoreLocationStatsResponse.model_validate(stats)


@router.get("/{location_id}", response_model=StoreLocationDetailResponse)
async def get_store_location(
    location_id: str,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "read"))],
):
    """Location with assigned staff and assignment count."""
    detail = await locations.get_location(ctx.tenant_id, location_id)
    return StoreLocationDetailResponse.from_detail(detail)


@router.patch("/{location_id}", response_model=StoreLocationResponse)
@limit_writes
async def update_store_location(
    request: Request,
    location_id: str,
    body: StoreLocationUpdateRequest,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "update"))],
):
    location = await locations.update_location(
        ctx.tenant_id,
        location_id,
        body.model_dump(exclude_unset=True),
        actor_id=ctx.user_id,
    )
    return StoreLocationResponse.model_validate(location)


@router.delete("/{location_id}", status_code=204)
@limit_writes
async def delete_store_location(
    request: Request,
    location_id: str,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "delete"))],
):
    """Delete a location; 409 while staff are still assigned."""
    await locations.delete_location(ctx.tenant_id, location_id, actor_id=ctx.user_id)
    return Response(status_code=204)


@router.post("/{location_id}/assign-staff", response_model=StoreLocationDetailResponse)
@limit_writes
async def assign_staff_to_location(
    request: Request,
    location_id: str,
    body: AssignStaffRequest,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "assign"))],
):
    """Replace the location's staff with the given active staff members."""
    detail = await locations.assign_staff_to_location(
        ctx.tenant_id, location_id, body.staff_ids, actor_id=ctx.user_id
    )
    return StoreLocationDetailResponse.from_detail(detail)


@router.get("/{location_id}/staff", response_model=list[LocationStaffResponse])
async def get_location_staff(
    location_id: str,
    locations: LocationSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("location", "read"))],
):
    staff = await locations.get_location_staff(ctx.tenant_id, location_id)
    return [LocationStaffResponse.from_detail(d) for d in staff]
