"""Create the platform operator's company and its admin user (Postgres only).

The platform company is the one whose domain equals PLATFORM_TENANT_DOMAIN;
its admin users may manage every company. Run once after migrations.

Usage:
    python -m scripts.seed_platform <admin_email> [password]
If password is omitted, a random one is printed.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.domain.enums import RoleName
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import TenantRepository, UserRepository
from app.infrastructure.services import TenantInitializationService
from app.shared.utils.generators import generate_password


async def main() -> None:
    """Create platform company (if missing), seed its roles and add an admin user."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.seed_platform <admin_email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    password = sys.argv[2] if len(sys.argv) > 2 else generate_password()

    settings = get_settings()
    database.ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            tenant_repo = TenantRepository(session)
            user_repo = UserRepository(session)
            tenant = await tenant_repo.get_by_domain(settings.platform_tenant_domain)
            if tenant is None:
                tenant = await tenant_repo.create_tenant(
                    name="Platform",
                    domain=settings.platform_tenant_domain,
                    user_limit=settings.default_user_limit,
                    manager_limit=settings.default_manager_limit,
                    token_limit=settings.default_token_limit,
                    settings={"timezone": settings.default_timezone},
                )
                print(f"Created platform company: {tenant.id} ({tenant.domain})")
            roles = await TenantInitializationService(session).initialize_tenant_roles(
                tenant.id
            )
            if await user_repo.get_by_email(tenant.id, email):
                print(f"User already exists: {email}", file=sys.stderr)
                sys.exit(1)
            user = await user_repo.create_user(
                tenant_id=tenant.id,
                role_id=roles[RoleName.ADMIN.value].id,
                email=email,
                name="Platform Admin",
                password=password,
            )
            print(f"Created admin user: {user.id} ({email})")
            if len(sys.argv) <= 2:
                print(f"Password: {password}")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
