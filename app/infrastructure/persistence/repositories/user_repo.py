"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import (
    hash_password_async,
    verify_password_async,
)

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await hash_password_async("not-a-real-password")
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User (role eagerly joined) to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        tenant_id=u.tenant_id,
        email=u.email,
        name=u.name,
        role=u.role.name,
        role_id=u.role_id,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate, create_user, list, count, activate/deactivate."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_entity(self, user_id: str, tenant_id: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def _get_entity_by_email(self, tenant_id: str, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.tenant_id == tenant_id, User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_by_id_and_tenant(
        self, user_id: str, tenant_id: str
    ) -> UserResult | None:
        user = await self._get_entity(user_id, tenant_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, tenant_id: str, email: str) -> UserResult | None:
        user = await self._get_entity_by_email(tenant_id, email)
        return _user_to_result(user) if user else None

    async def get_active_by_emails(
        self, tenant_id: str, emails: list[str]
    ) -> list[UserResult]:
        if not emails:
            return []
        result = await self.db.execute(
            select(User).where(
                User.tenant_id == tenant_id,
                User.email.in_(emails),
                User.is_active.is_(True),
            )
        )
        return [_user_to_result(u) for u in result.scalars().all()]

    async def create_user(
        self,
        tenant_id: str,
        role_id: str,
        email: str,
        name: str,
        password: str,
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on unique constraint violation."""
        user = User(
            tenant_id=tenant_id,
            role_id=role_id,
            email=email,
            name=name,
            hashed_password=await hash_password_async(password),
            is_active=True,
        )
        try:
            async with self.db.begin_nested():
                created = await self.create(user)
        except IntegrityError as e:
            raise UserAlreadyExistsException(email) from e
        return _user_to_result(created)

    async def list_users(
        self,
        tenant_id: str,
        role: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        stmt = select(User).where(User.tenant_id == tenant_id)
        if role is not None:
            stmt = stmt.join(User.role).where(Role.name == role)
        if is_active is not None:
            stmt = stmt.where(User.is_active.is_(is_active))
        result = await self.db.execute(
            stmt.order_by(User.name).offset(skip).limit(limit)
        )
        return [_user_to_result(u) for u in result.scalars().all()]

    async def count_users(self, tenant_id: str, role: str | None = None) -> int:
        """Count active users of tenant, optionally with the given role."""
        stmt = select(func.count(User.id)).where(
            User.tenant_id == tenant_id, User.is_active.is_(True)
        )
        if role is not None:
            stmt = stmt.join(Role, Role.id == User.role_id).where(Role.name == role)
        return await self.scalar_count(stmt)

    async def set_active(
        self, user_id: str, tenant_id: str, is_active: bool
    ) -> UserResult | None:
        user = await self._get_entity(user_id, tenant_id)
        if user is None:
            return None
        updated = await self.apply_fields(user, {"is_active": is_active})
        return _user_to_result(updated)

    async def authenticate(
        self, tenant_id: str, email: str, password: str
    ) -> UserResult | None:
        user = await self._get_entity_by_email(tenant_id, email)
        if not user:
            await verify_password_async(password, await _get_dummy_hash())
            return None
        if not user.is_active:
            return None
        if not await verify_password_async(password, user.hashed_password):
            return None
        return _user_to_result(user)
