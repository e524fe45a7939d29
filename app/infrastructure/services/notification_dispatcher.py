"""Roster notifications: in-app rows for affected users plus a log-only email sender."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationCreate
from app.application.interfaces.services import IEmailSender
from app.domain.enums import NotificationEvent
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.roster_repo import RosterRepository
from app.infrastructure.persistence.repositories.staff_repo import StaffRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_TITLES: dict[NotificationEvent, str] = {
    NotificationEvent.ROSTER_PUBLISHED: "Roster published",
    NotificationEvent.SHIFT_CREATED: "New shift assigned",
    NotificationEvent.SHIFT_UPDATED: "Shift updated",
    NotificationEvent.SHIFT_DELETED: "Shift removed",
    NotificationEvent.SYSTEM: "Notification",
}

_MESSAGES: dict[NotificationEvent, str] = {
    NotificationEvent.ROSTER_PUBLISHED: "Roster '{roster}' has been published.",
    NotificationEvent.SHIFT_CREATED: "You have a new shift in roster '{roster}'.",
    NotificationEvent.SHIFT_UPDATED: "One of your shifts in roster '{roster}' changed.",
    NotificationEvent.SHIFT_DELETED: "One of your shifts in roster '{roster}' was removed.",
    NotificationEvent.SYSTEM: "Update for roster '{roster}'.",
}


class LogOnlyEmailSender:
    """IEmailSender implementation that logs instead of sending email.

    Use when no SMTP is configured. Production can swap in an SMTP or queue-based implementation.
    """

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Log the email; nothing is sent."""
        recipients = list(to_emails or [])
        subject_preview = (subject or "")[:80]
        if not recipients:
            logger.info("Email notify: no recipients, skipping send (subject=%r)", subject_preview)
            return
        logger.info(
            "Email notify: would send to %d recipients (subject=%r)",
            len(recipients),
            subject_preview,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Email notify recipients: %s (at %s)", recipients, utc_now().isoformat()
            )
        logger.debug("Email notify body (first 500 chars): %s", (body or "")[:500])


class NotificationDispatcher:
    """INotificationDispatcher backed by the request session.

    Staff are matched to users by email within the tenant. Notification rows are
    written inside a savepoint, so a failure discards only those rows. Errors are
    logged and never raised.
    """

    def __init__(
        self,
        db: AsyncSession,
        email_sender: IEmailSender | None = None,
        email_enabled: bool = False,
    ) -> None:
        self.db = db
        self.email_sender = email_sender or LogOnlyEmailSender()
        self.email_enabled = email_enabled
        self.staff_repo = StaffRepository(db)
        self.user_repo = UserRepository(db)
        self.roster_repo = RosterRepository(db)
        self.notification_repo = NotificationRepository(db)

    async def dispatch(
        self,
        tenant_id: str,
        event: NotificationEvent,
        roster_id: str,
        staff_ids: list[str],
    ) -> None:
        try:
            await self._dispatch(tenant_id, event, roster_id, staff_ids)
        except Exception:
            logger.exception(
                "Notification dispatch failed: event=%s roster=%s", event.value, roster_id
            )

    async def _dispatch(
        self,
        tenant_id: str,
        event: NotificationEvent,
        roster_id: str,
        staff_ids: list[str],
    ) -> None:
        unique_ids = sorted(set(staff_ids))
        if not unique_ids:
            return
        staff = await self.staff_repo.get_by_ids(tenant_id, unique_ids)
        emails = sorted({s.email for s in staff})
        users = await self.user_repo.get_active_by_emails(tenant_id, emails)
        if not users:
            logger.info(
                "No users linked to %d staff for event %s; skipping", len(unique_ids), event.value
            )
            return

        roster = await self.roster_repo.get_by_id_and_tenant(roster_id, tenant_id)
        roster_name = roster.name if roster else roster_id
        title = _TITLES[event]
        message = _MESSAGES[event].format(roster=roster_name)
        items = [
            NotificationCreate(
                user_id=user.id,
                type=event.value,
                title=title,
                message=message,
                data={"roster_id": roster_id, "event": event.value},
            )
            for user in users
        ]
        async with self.db.begin_nested():
            await self.notification_repo.create_many(tenant_id, items)
        logger.info("Created %d notifications for event %s", len(items), event.value)

        if self.email_enabled:
            await self.email_sender.send([u.email for u in users], title, message)
