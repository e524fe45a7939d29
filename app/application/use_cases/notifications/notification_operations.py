"""In-app notification queries for the current user."""

from app.application.dtos.notification import NotificationResult
from app.application.interfaces.repositories import INotificationRepository
from app.domain.exceptions import ResourceNotFoundException


class NotificationService:
    """List and acknowledge a user's notifications (always scoped to tenant + user)."""

    def __init__(self, notification_repo: INotificationRepository) -> None:
        self.notification_repo = notification_repo

    async def list_notifications(
        self,
        tenant_id: str,
        user_id: str,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[NotificationResult]:
        return await self.notification_repo.list_for_user(
            tenant_id, user_id, unread_only=unread_only, skip=skip, limit=limit
        )

    async def mark_as_read(
        self, tenant_id: str, user_id: str, notification_id: str
    ) -> NotificationResult:
        """Mark one notification read; raise ResourceNotFoundException if not the user's."""
        result = await self.notification_repo.mark_read(notification_id, tenant_id, user_id)
        if result is None:
            raise ResourceNotFoundException(
                "notification", notification_id, "Notification not found"
            )
        return result

    async def mark_all_as_read(self, tenant_id: str, user_id: str) -> int:
        return await self.notification_repo.mark_all_read(tenant_id, user_id)

    async def unread_count(self, tenant_id: str, user_id: str) -> int:
        return await self.notification_repo.count_unread(tenant_id, user_id)
