"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the core calls but does not own
(notification delivery, email).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from app.domain.enums import NotificationEvent

if TYPE_CHECKING:
    from app.application.dtos.role import RoleResult


class INotificationDispatcher(Protocol):
    """Receives roster/shift events and delivers them to affected staff.

    Implementations must not raise: delivery failures are logged and dropped so
    the triggering operation is never rolled back.
    """

    async def dispatch(
        self,
        tenant_id: str,
        event: NotificationEvent,
        roster_id: str,
        staff_ids: list[str],
    ) -> None:
        """Fan out event for roster_id to the users matching staff_ids."""


class IEmailSender(Protocol):
    """Outbound email (e.g. shift change notices)."""

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        """Send an email to the given addresses."""


class ITenantInitializationService(Protocol):
    """Seeds the system roles of a new company."""

    async def initialize_tenant_roles(self, tenant_id: str) -> dict[str, RoleResult]:
        """Create missing system roles for tenant; return them keyed by name. Idempotent."""
