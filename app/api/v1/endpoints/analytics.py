"""Analytics API: dashboard metrics, staff utilization, scheduling trends, labour cost."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_analytics_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.analytics import AnalyticsService
from app.schemas.analytics import (
    CostAnalysisResponse,
    DailyShiftCountResponse,
    DashboardResponse,
    StaffUtilizationResponse,
)
from app.shared.utils.datetime import ensure_utc

router = APIRouter()

Analytics = Annotated[AnalyticsService, Depends(get_analytics_service)]
AnalyticsAccess = Annotated[AccessContext, Depends(require_permission("analytics", "read"))]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(analytics: Analytics, ctx: AnalyticsAccess):
    """Staff, roster and shift counts for the requested company, plus recent rosters."""
    return DashboardResponse.model_validate(
        await analytics.get_dashboard_metrics(ctx.tenant_id)
    )


@router.get("/staff-utilization", response_model=list[StaffUtilizationResponse])
async def get_staff_utilization(
    analytics: Analytics,
    ctx: AnalyticsAccess,
    days: int = Query(30, ge=1, le=365),
):
    rows = await analytics.get_staff_utilization(ctx.tenant_id, days=days)
    return [StaffUtilizationResponse.model_validate(r) for r in rows]


@router.get("/scheduling-trends", response_model=list[DailyShiftCountResponse])
async def get_scheduling_trends(
    analytics: Analytics,
    ctx: AnalyticsAccess,
    days: int = Query(30, ge=1, le=365),
):
    """Shifts per day over the last `days` days."""
    rows = await analytics.get_scheduling_trends(ctx.tenant_id, days=days)
    return [DailyShiftCountResponse.model_validate(r) for r in rows]


@router.get("/cost-analysis", response_model=CostAnalysisResponse)
async def get_cost_analysis(
    analytics: Analytics,
    ctx: AnalyticsAccess,
    start_date: datetime,
    end_date: datetime,
):
    """Hours x hourly rate for shifts starting in [start_date, end_date)."""
    result = await analytics.get_cost_analysis(
        ctx.tenant_id, ensure_utc(start_date), ensure_utc(end_date)
    )
    return CostAnalysisResponse.model_validate(result)
