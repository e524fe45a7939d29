"""Staff use cases."""

from app.application.use_cases.staff.staff_operations import StaffService

__all__ = ["StaffService"]
