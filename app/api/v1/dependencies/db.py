"""Repository dependencies (composition root).

Read repositories share the plain request session; "_for_write" variants use
the transactional session (commit on success, rollback on error).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
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

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_tenant_repo(db: ReadSession) -> TenantRepository:
    """Tenant repository for lookups (auth, tenant header validation)."""
    return TenantRepository(db)


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository for authentication and the current-user lookup."""
    return UserRepository(db)


async def get_role_repo(db: ReadSession) -> RoleRepository:
    return RoleRepository(db)


async def get_notification_repo_for_write(db: WriteSession) -> NotificationRepository:
    return NotificationRepository(db)


async def get_staff_repo_for_write(db: WriteSession) -> StaffRepository:
    return StaffRepository(db)


async def get_availability_repo_for_write(db: WriteSession) -> AvailabilityRepository:
    return AvailabilityRepository(db)


async def get_store_location_repo_for_write(
    db: WriteSession,
) -> StoreLocationRepository:
    return StoreLocationRepository(db)


async def get_roster_repo_for_write(db: WriteSession) -> RosterRepository:
    return RosterRepository(db)


async def get_shift_repo_for_write(db: WriteSession) -> ShiftRepository:
    return ShiftRepository(db)


async def get_tenant_repo_for_write(db: WriteSession) -> TenantRepository:
    return TenantRepository(db)


async def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    return UserRepository(db)


async def get_role_repo_for_write(db: WriteSession) -> RoleRepository:
    return RoleRepository(db)
