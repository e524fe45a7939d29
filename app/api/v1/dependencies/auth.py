"""Authentication and authorization dependencies (composition root).

Every protected route resolves the caller from the bearer token, picks the
resource tenant (X-Tenant-ID header, else the caller's own tenant) and asks
AuthorizationService whether the caller's role grants resource:action there.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies.db import get_role_repo, get_tenant_repo, get_user_repo
from app.application.dtos.user import UserResult
from app.application.services.access_policy import AccessPolicy
from app.application.services.authorization_service import (
    AccessContext,
    AuthorizationService,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException, ResourceNotFoundException
from app.infrastructure.persistence.repositories import (
    RoleRepository,
    TenantRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token
from app.shared.context import set_current_user

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult:
    """Return the active user named by the JWT; 401 when missing or invalid."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Could not validate credentials") from e
    user = await user_repo.get_by_id(payload["sub"])
    if user is None or not user.is_active or user.tenant_id != payload["tenant_id"]:
        raise AuthenticationException("Could not validate credentials")
    set_current_user(user.id, user.tenant_id)
    return user


async def get_access_policy(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
) -> AccessPolicy:
    """AccessPolicy bound to the platform operator's tenant (if it exists)."""
    platform = await tenant_repo.get_by_domain(get_settings().platform_tenant_domain)
    return AccessPolicy(platform_tenant_id=platform.id if platform else None)


async def get_authorization_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    policy: Annotated[AccessPolicy, Depends(get_access_policy)],
) -> AuthorizationService:
    return AuthorizationService(user_repo, role_repo, policy)


def get_requested_tenant_id(
    request: Request,
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> str:
    """Tenant targeted by the request: the tenant header, else the caller's tenant."""
    value = request.headers.get(get_settings().tenant_header_name)
    return value.strip() if value and value.strip() else current_user.tenant_id


async def _authorize(
    auth_svc: AuthorizationService,
    tenant_repo: TenantRepository,
    user: UserResult,
    tenant_id: str,
    resource: str,
    action: str,
) -> AccessContext:
    ctx = await auth_svc.require_action(user.id, tenant_id, resource, action)
    # Only the platform admin gets here for a foreign tenant.
    if tenant_id != user.tenant_id and await tenant_repo.get_by_id(tenant_id) is None:
        raise ResourceNotFoundException("company", tenant_id, "Company not found")
    return ctx


def require_permission(resource: str, action: str):
    """Dependency factory: require JWT auth and resource:action on the requested tenant."""

    async def _require(
        current_user: Annotated[UserResult, Depends(get_current_user)],
        tenant_id: Annotated[str, Depends(get_requested_tenant_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
        tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
    ) -> AccessContext:
        return await _authorize(
            auth_svc, tenant_repo, current_user, tenant_id, resource, action
        )

    return _require


def require_company_access(action: str):
    """Dependency factory: like require_permission, with the tenant taken from the path."""

    async def _require(
        company_id: str,
        current_user: Annotated[UserResult, Depends(get_current_user)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
        tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
    ) -> AccessContext:
        return await _authorize(
            auth_svc, tenant_repo, current_user, company_id, "company", action
        )

    return _require
