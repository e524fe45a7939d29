"""Authorization service: loads the caller and applies AccessPolicy on every call (no caching)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.application.interfaces.repositories import IRoleRepository, IUserRepository
from app.application.services.access_policy import AccessPolicy
from app.domain.exceptions import AuthorizationException

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult


@dataclass(frozen=True)
class AccessContext:
    """Authorized caller: who they are and which tenant the request targets."""

    user_id: str
    tenant_id: str
    caller_tenant_id: str
    role: str
    is_platform_admin: bool = False


class AuthorizationService:
    """Validates tenant membership and role for a user before an operation."""

    def __init__(
        self,
        user_repo: IUserRepository,
        role_repo: IRoleRepository,
        policy: AccessPolicy,
    ) -> None:
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.policy = policy

    async def _load_active_user(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if user is None or not user.is_active:
            raise AuthorizationException(message="User not found or inactive")
        return user

    def _context(self, user: UserResult, tenant_id: str) -> AccessContext:
        return AccessContext(
            user_id=user.id,
            tenant_id=tenant_id,
            caller_tenant_id=user.tenant_id,
            role=user.role,
            is_platform_admin=self.policy.is_platform_admin(user.role, user.tenant_id),
        )

    async def validate_access(
        self,
        user_id: str,
        tenant_id: str,
        allowed_roles: Iterable[str] | None = None,
    ) -> AccessContext:
        """Return AccessContext if user is active, in tenant (or platform admin), and role allowed.

        Raises:
            AuthorizationException: User missing/inactive, cross-tenant, or role not allowed.
        """
        user = await self._load_active_user(user_id)
        if allowed_roles is None:
            decision = self.policy.check_tenant(user.role, tenant_id, user.tenant_id)
        else:
            decision = self.policy.evaluate_roles(
                user.role, allowed_roles, tenant_id, user.tenant_id
            )
        if not decision:
            raise AuthorizationException(message=decision.reason)
        return self._context(user, tenant_id)

    async def require_action(
        self,
        user_id: str,
        tenant_id: str,
        resource: str,
        action: str,
    ) -> AccessContext:
        """Return AccessContext if the user's role grants resource:action on tenant.

        Permission tokens are read from the user's role row; the seeded defaults
        apply when the role row is missing.
        """
        user = await self._load_active_user(user_id)
        role = await self.role_repo.get_by_name(user.tenant_id, user.role)
        decision = self.policy.evaluate(
            user.role,
            f"{resource}:{action}",
            tenant_id,
            user.tenant_id,
            permissions=role.permissions if role is not None else None,
        )
        if not decision:
            raise AuthorizationException(
                resource=resource, action=action, message=decision.reason
            )
        return self._context(user, tenant_id)
