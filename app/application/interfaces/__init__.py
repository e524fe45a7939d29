"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IAvailabilityRepository,
    INotificationRepository,
    IRoleRepository,
    IRosterRepository,
    IShiftRepository,
    IStaffRepository,
    IStoreLocationRepository,
    ITenantRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IEmailSender,
    INotificationDispatcher,
    ITenantInitializationService,
)

__all__ = [
    "IAvailabilityRepository",
    "IEmailSender",
    "INotificationDispatcher",
    "INotificationRepository",
    "IRoleRepository",
    "IRosterRepository",
    "IShiftRepository",
    "IStaffRepository",
    "IStoreLocationRepository",
    "ITenantInitializationService",
    "ITenantRepository",
    "IUserRepository",
]
