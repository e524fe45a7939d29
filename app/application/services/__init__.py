"""Application services: access policy, authorization, shift conflicts, companies."""

from app.application.services.access_policy import (
    DEFAULT_ROLE_PERMISSIONS,
    AccessPolicy,
    PolicyDecision,
    permission_grants,
)
from app.application.services.authorization_service import (
    AccessContext,
    AuthorizationService,
)
from app.application.services.company_service import CompanyService
from app.application.services.shift_conflict_checker import ShiftConflictChecker

__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "AccessContext",
    "AccessPolicy",
    "AuthorizationService",
    "CompanyService",
    "PolicyDecision",
    "ShiftConflictChecker",
    "permission_grants",
]
