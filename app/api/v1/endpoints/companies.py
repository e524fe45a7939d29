"""Company API: platform-level company management plus per-company read/update/stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_company_service,
    require_company_access,
    require_permission,
)
from app.application.services.authorization_service import AccessContext
from app.application.services.company_service import CompanyService
from app.core.limiter import limit_create_company, limit_writes
from app.domain.exceptions import AuthorizationException
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyResponse,
    CompanyStatsResponse,
    CompanyUpdateRequest,
)

router = APIRouter()

_LIMIT_FIELDS = ("user_limit", "manager_limit", "token_limit")


@router.post("", response_model=CompanyResponse, status_code=201)
@limit_create_company
async def create_company(
    request: Request,
    body: CompanyCreateRequest,
    companies: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[AccessContext, Depends(require_permission("company", "create"))],
):
    """Create a company, seed its system roles and optionally its owner (platform admin only)."""
    company = await companies.create_company(
        name=body.name,
        domain=body.domain,
        user_limit=body.user_limit,
        manager_limit=body.manager_limit,
        token_limit=body.token_limit,
        settings=body.settings,
        owner_email=body.owner_email,
        owner_name=body.owner_name,
        owner_password=(
            body.owner_password.get_secret_value() if body.owner_password else None
        ),
    )
    return CompanyResponse.model_validate(company)


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    companies: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[AccessContext, Depends(require_permission("company", "list"))],
    is_active: bool | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List all companies (platform admin only)."""
    result = await companies.list_companies(skip=skip, limit=limit, is_active=is_active)
    return [CompanyResponse.model_validate(c) for c in result]


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    companies: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[AccessContext, Depends(require_company_access("read"))],
):
    return CompanyResponse.model_validate(await companies.get_company(company_id))


@router.patch("/{company_id}", response_model=CompanyResponse)
@limit_writes
async def update_company(
    request: Request,
    company_id: str,
    body: CompanyUpdateRequest,
    companies: Annotated[CompanyService, Depends(get_company_service)],
    ctx: Annotated[AccessContext, Depends(require_company_access("update"))],
):
    """Update name and settings; capacity limits may only be changed by the platform admin."""
    patch = body.model_dump(exclude_unset=True)
    if any(patch.get(field) is not None for field in _LIMIT_FIELDS) and not (
        ctx.is_platform_admin
    ):
        raise AuthorizationException(
            resource="company",
            action="update",
            message="Platform administrator access required to change company limits",
        )
    company = await companies.update_company(
        company_id,
        name=patch.get("name"),
        user_limit=patch.get("user_limit"),
        manager_limit=patch.get("manager_limit"),
        token_limit=patch.get("token_limit"),
        settings=patch.get("settings"),
    )
    return CompanyResponse.model_validate(company)


@router.post("/{company_id}/deactivate", response_model=CompanyResponse)
@limit_writes
async def deactivate_company(
    request: Request,
    company_id: str,
    companies: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[AccessContext, Depends(require_company_access("deactivate"))],
):
    """Suspend a company (soft; platform admin only)."""
    return CompanyResponse.model_validate(await companies.deactivate_company(company_id))


@router.get("/{company_id}/stats", response_model=CompanyStatsResponse)
async def get_company_stats(
    company_id: str,
    companies: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[AccessContext, Depends(require_company_access("read"))],
):
    return CompanyStatsResponse.model_validate(
        await companies.get_company_stats(company_id)
    )
