"""DTOs for notifications (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class NotificationCreate:
    """One in-app notification to persist for a user."""

    user_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationResult:
    """Notification read-model."""

    id: str
    tenant_id: str
    user_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any]
    is_read: bool
    created_at: datetime | None = None
