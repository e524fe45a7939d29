"""FastAPI dependencies: repositories, authentication/authorization, services."""

from app.api.v1.dependencies.auth import (
    get_access_policy,
    get_authorization_service,
    get_current_user,
    get_requested_tenant_id,
    require_company_access,
    require_permission,
)
from app.api.v1.dependencies.db import get_tenant_repo, get_user_repo
from app.api.v1.dependencies.services import (
    get_analytics_service,
    get_company_service,
    get_login_service,
    get_notification_service,
    get_roster_service,
    get_staff_service,
    get_store_location_service,
    get_user_management_service,
)

__all__ = [
    "get_access_policy",
    "get_analytics_service",
    "get_authorization_service",
    "get_company_service",
    "get_current_user",
    "get_login_service",
    "get_notification_service",
    "get_requested_tenant_id",
    "get_roster_service",
    "get_staff_service",
    "get_store_location_service",
    "get_tenant_repo",
    "get_user_management_service",
    "get_user_repo",
    "require_company_access",
    "require_permission",
]
