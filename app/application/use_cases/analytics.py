"""Analytics use case: dashboard counts, staff utilization, trends and labour cost."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from app.application.dtos.analytics import (
    CostAnalysis,
    CostBreakdown,
    DailyShiftCount,
    DashboardMetrics,
    StaffUtilization,
)
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import (
    ensure_utc,
    resolve_timezone,
    start_of_iso_week,
    start_of_month,
    start_of_next_month,
    utc_now,
)

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IRosterRepository,
        IShiftRepository,
        IStaffRepository,
        ITenantRepository,
    )

_CENT = Decimal("0.01")
RECENT_ROSTERS = 5
MAX_STAFF_PAGE = 1000


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class AnalyticsService:
    """Read-only aggregates over staff, rosters and shifts of one tenant.

    Template rosters and their shifts are left out of every count except
    the recent rosters list. Calendar boundaries (week, month, day buckets)
    follow the tenant's timezone setting.
    """

    def __init__(
        self,
        staff_repo: "IStaffRepository",
        roster_repo: "IRosterRepository",
        shift_repo: "IShiftRepository",
        tenant_repo: "ITenantRepository",
        default_timezone: str = "UTC",
    ) -> None:
        self.staff_repo = staff_repo
        self.roster_repo = roster_repo
        self.shift_repo = shift_repo
        self.tenant_repo = tenant_repo
        self.default_timezone = default_timezone

    async def _tenant_timezone(self, tenant_id: str) -> tzinfo:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        name = tenant.settings.get("timezone") if tenant else None
        return resolve_timezone(name, self.default_timezone)

    async def get_dashboard_metrics(
        self, tenant_id: str, now: datetime | None = None
    ) -> DashboardMetrics:
        """Return headline counts; weeks start on Monday in the tenant's timezone."""
        now = ensure_utc(now) or utc_now()
        total_staff = await self.staff_repo.count_staff(tenant_id)
        active_staff = await self.staff_repo.count_staff(tenant_id, is_active=True)
        total_rosters = await self.roster_repo.count_rosters(tenant_id, is_template=False)
        published = await self.roster_repo.count_rosters(
            tenant_id, is_published=True, is_template=False
        )

        local_now = now.astimezone(await self._tenant_timezone(tenant_id))
        week_start = start_of_iso_week(local_now)
        shifts_this_week = await self.shift_repo.count_shifts(
            tenant_id,
            start=ensure_utc(week_start),
            end=ensure_utc(week_start + timedelta(days=7)),
        )
        shifts_this_month = await self.shift_repo.count_shifts(
            tenant_id,
            start=ensure_utc(start_of_month(local_now)),
            end=ensure_utc(start_of_next_month(local_now)),
        )
        upcoming = await self.shift_repo.count_shifts(tenant_id, start=now)
        recent = await self.roster_repo.list_rosters(tenant_id, limit=RECENT_ROSTERS)

        return DashboardMetrics(
            total_staff=total_staff,
            active_staff=active_staff,
            active_staff_percentage=_percentage(active_staff, total_staff),
            total_rosters=total_rosters,
            published_rosters=published,
            published_percentage=_percentage(published, total_rosters),
            shifts_this_week=shifts_this_week,
            shifts_this_month=shifts_this_month,
            upcoming_shifts=upcoming,
            recent_rosters=recent,
        )

    async def get_staff_utilization(
        self, tenant_id: str, days: int = 30, now: datetime | None = None
    ) -> list[StaffUtilization]:
        """Return shifts and hours per active staff member over the last days."""
        if days < 1:
            raise ValidationException("days must be at least 1", field="days")
        end = ensure_utc(now) or utc_now()
        rows = await self.shift_repo.shift_hours(tenant_id, end - timedelta(days=days), end)

        counts: dict[str, int] = defaultdict(int)
        hours: dict[str, float] = defaultdict(float)
        for row in rows:
            counts[row.staff_id] += 1
            hours[row.staff_id] += row.hours

        active = await self.staff_repo.list_staff(
            tenant_id, is_active=True, limit=MAX_STAFF_PAGE
        )
        result = []
        for member in active:
            total = counts.get(member.id, 0)
            total_hours = round(hours.get(member.id, 0.0), 2)
            result.append(
                StaffUtilization(
                    staff_id=member.id,
                    staff_name=member.name,
                    department=member.department,
                    total_shifts=total,
                    total_hours=total_hours,
                    average_shift_hours=round(total_hours / total, 2) if total else 0.0,
                )
            )
        result.sort(key=lambda item: (-item.total_hours, item.staff_name))
        return result

    async def get_scheduling_trends(
        self, tenant_id: str, days: int = 30, now: datetime | None = None
    ) -> list[DailyShiftCount]:
        if days < 1:
            raise ValidationException("days must be at least 1", field="days")
        end = ensure_utc(now) or utc_now()
        tz = await self._tenant_timezone(tenant_id)
        return await self.shift_repo.daily_counts(
            tenant_id, end - timedelta(days=days), end, tz_name=str(tz)
        )

    async def get_cost_analysis(
        self, tenant_id: str, start: datetime, end: datetime
    ) -> CostAnalysis:
        """Return hours x hourly rate for shifts starting in [start, end)."""
        start, end = ensure_utc(start), ensure_utc(end)
        if start >= end:
            raise ValidationException("End date must be after start date", field="end_date")
        rows = await self.shift_repo.shift_hours(tenant_id, start, end)

        by_department: dict[str, list] = defaultdict(lambda: [0.0, Decimal(0)])
        by_position: dict[str, list] = defaultdict(lambda: [0.0, Decimal(0)])
        total_hours = 0.0
        total_cost = Decimal(0)
        for row in rows:
            cost = Decimal(str(row.hours)) * row.hourly_rate
            total_hours += row.hours
            total_cost += cost
            for bucket in (by_department[row.department], by_position[row.position]):
                bucket[0] += row.hours
                bucket[1] += cost

        def breakdown(groups: dict[str, list]) -> list[CostBreakdown]:
            items = [
                CostBreakdown(key=key, hours=round(h, 2), cost=_money(c))
                for key, (h, c) in groups.items()
            ]
            return sorted(items, key=lambda item: item.cost, reverse=True)

        return CostAnalysis(
            total_hours=round(total_hours, 2),
            total_cost=_money(total_cost),
            by_department=breakdown(by_department),
            by_position=breakdown(by_position),
        )
