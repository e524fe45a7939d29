"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.roster import RosterEntity, validate_period
from app.domain.entities.tenant import TenantEntity, validate_limits

__all__ = [
    "RosterEntity",
    "TenantEntity",
    "validate_limits",
    "validate_period",
]
