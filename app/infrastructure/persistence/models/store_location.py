"""Store location and staff-to-location assignment ORM models."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.staff import Staff


class StoreLocation(MultiTenantModel, Base):
    """Physical site of a company. Table: store_location."""

    __tablename__ = "store_location"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), index=True
    )

    staff_assignments: Mapped[list["StaffStoreLocation"]] = relationship(
        back_populates="store_location",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class StaffStoreLocation(CuidMixin, TimestampMixin, Base):
    """Staff member assigned to a store location. Unique per (staff, location)."""

    __tablename__ = "staff_store_location"

    staff_id: Mapped[str] = mapped_column(
        String, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )
    store_location_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("store_location.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    store_location: Mapped[StoreLocation] = relationship(back_populates="staff_assignments")
    staff: Mapped[Staff] = relationship()

    __table_args__ = (
        UniqueConstraint(
            "staff_id", "store_location_id", name="uq_staff_store_location"
        ),
    )
