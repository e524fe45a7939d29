"""User API: create, list and deactivate login users of the requested company."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_user_management_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.users import UserManagementService
from app.core.limiter import limit_writes
from app.schemas.user import UserCreateRequest, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreateRequest,
    users: Annotated[UserManagementService, Depends(get_user_management_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("user", "create"))],
):
    """Create a user. Who may create which role is enforced by the service."""
    user = await users.create_user(
        creator=ctx,
        tenant_id=ctx.tenant_id,
        email=body.email,
        name=body.name,
        role=body.role,
        password=body.password.get_secret_value(),
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    users: Annotated[UserManagementService, Depends(get_user_management_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("user", "read"))],
    role: str | None = None,
    is_active: bool | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List users of the requested company (paginated)."""
    result = await users.list_users(
        ctx.tenant_id, role=role, is_active=is_active, skip=skip, limit=limit
    )
    return [UserResponse.model_validate(u) for u in result]


@router.post("/{user_id}/deactivate", response_model=UserResponse)
@limit_writes
async def deactivate_user(
    request: Request,
    user_id: str,
    users: Annotated[UserManagementService, Depends(get_user_management_service)],
    ctx: Annotated[AccessContext, Depends(require_permission("user", "deactivate"))],
):
    """Deactivate a user. Callers cannot deactivate themselves or admin users."""
    user = await users.deactivate_user(ctx, ctx.tenant_id, user_id)
    return UserResponse.model_validate(user)
