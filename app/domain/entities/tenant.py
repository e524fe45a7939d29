"""Tenant (company) domain entity.

Represents the business concept of a company, independent of persistence.
Capacity rules for new users live here.
"""

from dataclasses import dataclass

from app.domain.exceptions import (
    InvalidStateException,
    LimitExceededException,
    ValidationException,
)
from app.domain.value_objects.core import CompanyDomain


@dataclass
class TenantEntity:
    """Domain entity for a company (isolation boundary).

    Deactivation is a soft flag; companies are never deleted.
    """

    id: str
    name: str
    domain: CompanyDomain
    is_active: bool = True
    user_limit: int = 50
    manager_limit: int = 10
    token_limit: int = 50000

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate company business rules. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Company name is required", field="name")
        validate_limits(
            user_limit=self.user_limit,
            manager_limit=self.manager_limit,
            token_limit=self.token_limit,
        )

    def ensure_can_add_user(self, current_users: int) -> None:
        """Raise if the company is inactive or at its user limit."""
        if not self.is_active:
            raise InvalidStateException(
                "Company is suspended and cannot have new users created",
                "company",
                self.id,
            )
        if current_users >= self.user_limit:
            raise LimitExceededException("user_limit", self.user_limit)

    def ensure_can_add_manager(self, current_managers: int) -> None:
        if current_managers >= self.manager_limit:
            raise LimitExceededException("manager_limit", self.manager_limit)

    def deactivate(self) -> None:
        """Soft-deactivate. Raises InvalidStateException if already inactive."""
        if not self.is_active:
            raise InvalidStateException("Company is already inactive", "company", self.id)
        self.is_active = False


def validate_limits(**limits: int) -> None:
    """Raise ValidationException for any limit that is not a positive integer."""
    for field_name, value in limits.items():
        if value < 1:
            raise ValidationException(
                f"{field_name} must be a positive integer", field=field_name
            )
