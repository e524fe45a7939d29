"""Store location use cases."""

from app.application.use_cases.locations.store_location_operations import (
    StoreLocationService,
)

__all__ = ["StoreLocationService"]
