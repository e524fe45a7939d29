"""Roster repository. Returns application DTOs; every read is tenant-scoped."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.roster import RosterResult
from app.infrastructure.persistence.models.roster import Roster
from app.infrastructure.persistence.repositories.base import BaseRepository


def _roster_to_result(r: Roster) -> RosterResult:
    """Map ORM Roster to application RosterResult."""
    return RosterResult(
        id=r.id,
        tenant_id=r.tenant_id,
        name=r.name,
        start_date=r.start_date,
        end_date=r.end_date,
        is_published=r.is_published,
        is_template=r.is_template,
        notes=r.notes,
        published_at=r.published_at,
        created_by=r.created_by,
    )


class RosterRepository(BaseRepository[Roster]):
    """Roster repository. Shifts are removed with their roster by ON DELETE CASCADE."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Roster)

    async def _get_entity(self, roster_id: str, tenant_id: str) -> Roster | None:
        result = await self.db.execute(
            select(Roster).where(Roster.id == roster_id, Roster.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, roster_id: str, tenant_id: str
    ) -> RosterResult | None:
        roster = await self._get_entity(roster_id, tenant_id)
        return _roster_to_result(roster) if roster else None

    async def get_template(self, template_id: str, tenant_id: str) -> RosterResult | None:
        result = await self.db.execute(
            select(Roster).where(
                Roster.id == template_id,
                Roster.tenant_id == tenant_id,
                Roster.is_template.is_(True),
            )
        )
        roster = result.scalar_one_or_none()
        return _roster_to_result(roster) if roster else None

    async def find_overlapping_live(
        self,
        tenant_id: str,
        start_date: datetime,
        end_date: datetime,
        exclude_roster_id: str | None = None,
    ) -> RosterResult | None:
        """Return a non-template roster of tenant whose period touches [start_date, end_date]."""
        stmt = select(Roster).where(
            Roster.tenant_id == tenant_id,
            Roster.is_template.is_(False),
            Roster.start_date <= end_date,
            Roster.end_date >= start_date,
        )
        if exclude_roster_id:
            stmt = stmt.where(Roster.id != exclude_roster_id)
        result = await self.db.execute(stmt.order_by(Roster.start_date).limit(1))
        roster = result.scalar_one_or_none()
        return _roster_to_result(roster) if roster else None

    async def create_roster(
        self,
        tenant_id: str,
        name: str,
        start_date: datetime,
        end_date: datetime,
        is_template: bool = False,
        notes: str | None = None,
        created_by: str | None = None,
    ) -> RosterResult:
        roster = Roster(
            tenant_id=tenant_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_template=is_template,
            is_published=False,
            notes=notes,
            created_by=created_by,
        )
        created = await self.create(roster)
        return _roster_to_result(created)

    async def update_roster(
        self, roster_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> RosterResult | None:
        roster = await self._get_entity(roster_id, tenant_id)
        if roster is None:
            return None
        updated = await self.apply_fields(roster, fields)
        return _roster_to_result(updated)

    async def delete_roster(self, roster_id: str, tenant_id: str) -> bool:
        roster = await self._get_entity(roster_id, tenant_id)
        if roster is None:
            return False
        await self.delete(roster)
        return True

    async def list_rosters(
        self,
        tenant_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        is_published: bool | None = None,
        is_template: bool | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[RosterResult]:
        stmt = select(Roster).where(Roster.tenant_id == tenant_id)
        if start_date is not None:
            stmt = stmt.where(Roster.end_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(Roster.start_date <= end_date)
        if is_published is not None:
            stmt = stmt.where(Roster.is_published.is_(is_published))
        if is_template is not None:
            stmt = stmt.where(Roster.is_template.is_(is_template))
        result = await self.db.execute(
            stmt.order_by(Roster.start_date.desc()).offset(skip).limit(limit)
        )
        return [_roster_to_result(r) for r in result.scalars().all()]

    async def count_rosters(
        self,
        tenant_id: str,
        is_published: bool | None = None,
        is_template: bool | None = None,
    ) -> int:
        stmt = select(func.count(Roster.id)).where(Roster.tenant_id == tenant_id)
        if is_published is not None:
            stmt = stmt.where(Roster.is_published.is_(is_published))
        if is_template is not None:
            stmt = stmt.where(Roster.is_template.is_(is_template))
        return await self.scalar_count(stmt)
