"""In-app notification repository. Every query is scoped to tenant and user."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.base import BaseRepository


def _notification_to_result(n: Notification) -> NotificationResult:
    return NotificationResult(
        id=n.id,
        tenant_id=n.tenant_id,
        user_id=n.user_id,
        type=n.type,
        title=n.title,
        message=n.message,
        data=dict(n.data or {}),
        is_read=n.is_read,
        created_at=n.created_at,
    )


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create_many(
        self, tenant_id: str, items: list[NotificationCreate]
    ) -> list[NotificationResult]:
        rows = [
            Notification(
                tenant_id=tenant_id,
                user_id=item.user_id,
                type=item.type,
                title=item.title,
                message=item.message,
                data=dict(item.data),
                is_read=False,
            )
            for item in items
        ]
        if not rows:
            return []
        self.db.add_all(rows)
        await self.db.flush()
        for row in rows:
            await self.db.refresh(row)
        return [_notification_to_result(row) for row in rows]

    async def list_for_user(
        self,
        tenant_id: str,
        user_id: str,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[NotificationResult]:
        stmt = select(Notification).where(
            Notification.tenant_id == tenant_id, Notification.user_id == user_id
        )
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        result = await self.db.execute(
            stmt.order_by(Notification.created_at.desc()).offset(skip).limit(limit)
        )
        return [_notification_to_result(n) for n in result.scalars().all()]

    async def mark_read(
        self, notification_id: str, tenant_id: str, user_id: str
    ) -> NotificationResult | None:
        result = await self.db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.tenant_id == tenant_id,
                Notification.user_id == user_id,
            )
        )
        notification = result.scalar_one_or_none()
        if notification is None:
            return None
        updated = await self.apply_fields(notification, {"is_read": True})
        return _notification_to_result(updated)

    async def mark_all_read(self, tenant_id: str, user_id: str) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(
                Notification.tenant_id == tenant_id,
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
        )
        return int(result.rowcount or 0)

    async def count_unread(self, tenant_id: str, user_id: str) -> int:
        return await self.scalar_count(
            select(func.count(Notification.id)).where(
                Notification.tenant_id == tenant_id,
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
        )
