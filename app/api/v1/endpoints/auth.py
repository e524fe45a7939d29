"""Auth API: login by company domain, email and password; current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_current_user, get_login_service
from app.application.dtos.user import UserResult
from app.application.use_cases.users import UserManagementService
from app.core.config import get_settings
from app.core.limiter import limit_auth
from app.domain.exceptions import AuthenticationException
from app.infrastructure.security.jwt import create_access_token
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    users: Annotated[UserManagementService, Depends(get_login_service)],
):
    """Authenticate against a company and return a JWT.

    Unknown company, suspended company, unknown email and wrong password all
    produce the same 401.
    """
    user = await users.authenticate(body.domain, body.email, body.password)
    if user is None:
        raise AuthenticationException("Invalid credentials")
    token = create_access_token(user.id, user.tenant_id, user.role)
    return TokenResponse(
        access_token=token,
        expires_in=get_settings().access_token_expire_minutes * 60,
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Annotated[UserResult, Depends(get_current_user)]):
    """Return the currently authenticated user. Requires Authorization: Bearer <token>."""
    return UserResponse.model_validate(current_user)
