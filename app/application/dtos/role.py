"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleResult:
    """Role read-model: name plus its permission tokens (resource:action)."""

    id: str
    tenant_id: str
    name: str
    description: str | None
    permissions: tuple[str, ...]
    is_system: bool
