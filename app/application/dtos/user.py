"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model with its role name. No password."""

    id: str
    tenant_id: str
    email: str
    name: str
    role: str
    role_id: str
    is_active: bool
