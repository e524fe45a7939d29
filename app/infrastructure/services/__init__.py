"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.notification_dispatcher import (
    LogOnlyEmailSender,
    NotificationDispatcher,
)
from app.infrastructure.services.tenant_initialization_service import (
    DEFAULT_ROLES,
    TenantInitializationService,
)

__all__ = [
    "DEFAULT_ROLES",
    "LogOnlyEmailSender",
    "NotificationDispatcher",
    "TenantInitializationService",
]
