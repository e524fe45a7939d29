"""User management use cases."""

from app.application.use_cases.users.user_management import UserManagementService

__all__ = ["UserManagementService"]
