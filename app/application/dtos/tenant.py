"""DTOs for company (tenant) use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TenantResult:
    """Company read-model (result of get_by_id, get_by_domain, create)."""

    id: str
    name: str
    domain: str
    is_active: bool
    user_limit: int
    manager_limit: int
    token_limit: int
    settings: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass(frozen=True)
class CompanyStats:
    """Usage counts for a company compared with its limits."""

    company_id: str
    user_count: int
    user_limit: int
    manager_count: int
    manager_limit: int
    staff_count: int
    roster_count: int
