"""Roster API: roster lifecycle, shifts, templates and publishing.

Static paths (/stats, /from-template, /shifts/...) are declared before
/{roster_id} so they are not captured as roster ids.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_roster_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.rosters import RosterService
from app.core.limiter import limit_writes
from app.schemas.roster import (
    RosterCreateRequest,
    RosterDetailResponse,
    RosterFromTemplateRequest,
    RosterResponse,
    RosterStatsResponse,
    RosterUpdateRequest,
    ShiftCreateRequest,
    ShiftResponse,
    ShiftUpdateRequest,
)
from app.shared.utils.datetime import ensure_utc

router = APIRouter()

RosterSvc = Annotated[RosterService, Depends(get_roster_service)]


@router.post("", response_model=RosterDetailResponse, status_code=201)
@limit_writes
async def create_roster(
    request: Request,
    body: RosterCreateRequest,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "create"))],
):
    """Create a draft roster (or template) with optional initial shifts."""
    detail = await rosters.create_roster(
        ctx.tenant_id,
        name=body.name,
        start_date=body.start_date,
        end_date=body.end_date,
        is_template=body.is_template,
        notes=body.notes,
        shifts=[s.to_dto() for s in body.shifts],
        created_by=ctx.user_id,
    )
    return RosterDetailResponse.from_detail(detail)


@router.get("", response_model=list[RosterResponse])
async def list_rosters(
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "read"))],
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    is_published: bool | None = None,
    is_template: bool | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    """List rosters, newest start first."""
    result = await rosters.list_rosters(
        ctx.tenant_id,
        start_date=ensure_utc(start_date),
        end_date=ensure_utc(end_date),
        is_published=is_published,
        is_template=is_template,
        skip=skip,
        limit=limit,
    )
    return [RosterResponse.model_validate(r) for r in result]


@router.get("/stats", response_model=RosterStatsResponse)
async def get_roster_stats(
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "read"))],
):
    return RosterStatsResponse.model_validate(await rosters.get_roster_stats(ctx.tenant_id))


@router.post("/from-template", response_model=RosterDetailResponse, status_code=201)
@limit_writes
async def create_roster_from_template(
    request: Request,
    body: RosterFromTemplateRequest,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "create"))],
):
    """Copy a template's shifts into a new draft roster, keeping offsets and durations."""
    detail = await rosters.create_roster_from_template(
        ctx.tenant_id,
        template_id=body.template_id,
        start_date=body.start_date,
        end_date=body.end_date,
        name=body.name,
        created_by=ctx.user_id,
    )
    return RosterDetailResponse.from_detail(detail)


@router.patch("/shifts/{shift_id}", response_model=ShiftResponse)
@limit_writes
async def update_shift(
    request: Request,
    shift_id: str,
    body: ShiftUpdateRequest,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("shift", "update"))],
):
    """Apply the provided fields; changed timing or staff is re-checked for conflicts."""
    shift = await rosters.update_shift(
        ctx.tenant_id, shift_id, body.model_dump(exclude_unset=True)
    )
    return ShiftResponse.model_validate(shift)


@router.post("/shifts/{shift_id}/confirm", response_model=ShiftResponse)
@limit_writes
async def confirm_shift(
    request: Request,
    shift_id: str,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("shift", "confirm"))],
):
    return ShiftResponse.model_validate(await rosters.confirm_shift(ctx.tenant_id, shift_id))


@router.delete("/shifts/{shift_id}", status_code=204)
@limit_writes
async def delete_shift(
    request: Request,
    shift_id: str,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("shift", "delete"))],
):
    await rosters.delete_shift(ctx.tenant_id, shift_id)
    return Response(status_code=204)


@router.get("/{roster_id}", response_model=RosterDetailResponse)
async def get_roster(
    roster_id: str,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "read"))],
):
    """Roster with shifts ordered by start time and the staff they reference."""
    return RosterDetailResponse.from_detail(await rosters.get_roster(ctx.tenant_id, roster_id))


@router.patch("/{roster_id}", response_model=RosterResponse)
@limit_writes
async def update_roster(
    request: Request,
    roster_id: str,
    body: RosterUpdateRequest,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "update"))],
):
    roster = await rosters.update_roster(
        ctx.tenant_id,
        roster_id,
        name=body.name,
        notes=body.notes,
        start_date=body.start_date,
        end_date=body.end_date,
    )
    return RosterResponse.model_validate(roster)


@router.delete("/{roster_id}", status_code=204)
@limit_writes
async def delete_roster(
    request: Request,
    roster_id: str,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "delete"))],
):
    """Delete a draft roster and its shifts."""
    await rosters.delete_roster(ctx.tenant_id, roster_id)
    return Response(status_code=204)


@router.post("/{roster_id}/publish", response_model=RosterResponse)
@limit_writes
async def publish_roster(
    request: Request,
    roster_id: str,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("roster", "publish"))],
):
    """Publish a roster whose shifts are all confirmed; notifies its staff."""
    return RosterResponse.model_validate(await rosters.publish_roster(ctx.tenant_id, roster_id))


@router.post("/{roster_id}/shifts", response_model=ShiftResponse, status_code=201)
@limit_writes
async def add_shift(
    request: Request,
    roster_id: str,
    body: ShiftCreateRequest,
    rosters: RosterSvc,
    ctx: Annotated[AccessContext, Depends(require_permission("shift", "create"))],
):
    """Add an unconfirmed shift to a draft roster after overlap and availability checks."""
    shift = await rosters.add_shift_to_roster(ctx.tenant_id, roster_id, body.to_dto())
    return ShiftResponse.model_validate(shift)
