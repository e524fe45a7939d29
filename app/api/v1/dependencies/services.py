"""Application service dependencies (composition root).

Services are built per request from repositories sharing one transactional
session, so a mutation and its notifications commit or roll back together
(notification rows sit in their own savepoint).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.db import (
    WriteSession,
    get_availability_repo_for_write,
    get_notification_repo_for_write,
    get_role_repo_for_write,
    get_roster_repo_for_write,
    get_shift_repo_for_write,
    get_staff_repo_for_write,
    get_store_location_repo_for_write,
    get_tenant_repo_for_write,
    get_user_repo_for_write,
    get_user_repo,
    get_role_repo,
    get_tenant_repo,
)
from app.application.services.company_service import CompanyService
from app.application.services.shift_conflict_checker import ShiftConflictChecker
from app.application.use_cases.analytics import AnalyticsService
from app.application.use_cases.locations import StoreLocationService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.rosters import RosterService
from app.application.use_cases.staff import StaffService
from app.application.use_cases.users import UserManagementService
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import (
    AvailabilityRepository,
    NotificationRepository,
    RoleRepository,
    RosterRepository,
    ShiftRepository,
    StaffRepository,
    StoreLocationRepository,
    TenantRepository,
    UserRepository,
)
from app.infrastructure.services import (
    NotificationDispatcher,
    TenantInitializationService,
)


async def get_roster_service(
    db: WriteSession,
    roster_repo: Annotated[RosterRepository, Depends(get_roster_repo_for_write)],
    shift_repo: Annotated[ShiftRepository, Depends(get_shift_repo_for_write)],
    staff_repo: Annotated[StaffRepository, Depends(get_staff_repo_for_write)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo_for_write)],
    availability_repo: Annotated[
        AvailabilityRepository, Depends(get_availability_repo_for_write)
    ],
) -> RosterService:
    """RosterService with conflict checker and notification dispatcher (same session)."""
    settings = get_settings()
    return RosterService(
        roster_repo=roster_repo,
        shift_repo=shift_repo,
        staff_repo=staff_repo,
        tenant_repo=tenant_repo,
        conflict_checker=ShiftConflictChecker(shift_repo, availability_repo),
        notifier=NotificationDispatcher(
            db, email_enabled=settings.email_notifications_enabled
        ),
        default_timezone=settings.default_timezone,
    )


async def get_staff_service(
    staff_repo: Annotated[StaffRepository, Depends(get_staff_repo_for_write)],
    availability_repo: Annotated[
        AvailabilityRepository, Depends(get_availability_repo_for_write)
    ],
    shift_repo: Annotated[ShiftRepository, Depends(get_shift_repo_for_write)],
) -> StaffService:
    return StaffService(staff_repo, availability_repo, shift_repo)


async def get_store_location_service(
    location_repo: Annotated[
        StoreLocationRepository, Depends(get_store_location_repo_for_write)
    ],
    staff_repo: Annotated[StaffRepository, Depends(get_staff_repo_for_write)],
    availability_repo: Annotated[
        AvailabilityRepository, Depends(get_availability_repo_for_write)
    ],
) -> StoreLocationService:
    return StoreLocationService(location_repo, staff_repo, availability_repo)


async def get_company_service(
    db: WriteSession,
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo_for_write)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    staff_repo: Annotated[StaffRepository, Depends(get_staff_repo_for_write)],
    roster_repo: Annotated[RosterRepository, Depends(get_roster_repo_for_write)],
) -> CompanyService:
    """CompanyService; role seeding runs in the same transaction as the tenant insert."""
    return CompanyService(
        tenant_repo=tenant_repo,
        init_service=TenantInitializationService(db),
        user_repo=user_repo,
        staff_repo=staff_repo,
        roster_repo=roster_repo,
        default_settings={"timezone": get_settings().default_timezone},
    )


async def get_user_management_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo_for_write)],
) -> UserManagementService:
    return UserManagementService(user_repo, role_repo, tenant_repo)


async def get_login_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
) -> UserManagementService:
    """UserManagementService on the read session (login only authenticates)."""
    return UserManagementService(user_repo, role_repo, tenant_repo)


async def get_notification_service(
    notification_repo: Annotated[
        NotificationRepository, Depends(get_notification_repo_for_write)
    ],
) -> NotificationService:
    return NotificationService(notification_repo)


async def get_analytics_service(
    staff_repo: Annotated[StaffRepository, Depends(get_staff_repo_for_write)],
    roster_repo: Annotated[RosterRepository, Depends(get_roster_repo_for_write)],
    shift_repo: Annotated[ShiftRepository, Depends(get_shift_repo_for_write)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo_for_write)],
) -> AnalyticsService:
    return AnalyticsService(
        staff_repo,
        roster_repo,
        shift_repo,
        tenant_repo,
        default_timezone=get_settings().default_timezone,
    )
