"""Staff and weekly availability ORM models."""

from datetime import date, time
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Numeric,
    SmallInteger,
    String,
    Time,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    TimestampMixin,
)


class Staff(MultiTenantModel, Base):
    """Schedulable person. Table: staff. Unique (tenant_id, email); soft deleted via is_active."""

    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), index=True
    )

    availability: Mapped[list["StaffAvailability"]] = relationship(
        back_populates="staff",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(StaffAvailability.day_of_week, StaffAvailability.start_time)",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_staff_tenant_email"),
        CheckConstraint("hourly_rate > 0", name="staff_hourly_rate_positive_check"),
    )


class StaffAvailability(CuidMixin, TimestampMixin, Base):
    """Recurring weekly window. day_of_week is ISO 8601 (Monday=1 .. Sunday=7)."""

    __tablename__ = "staff_availability"

    staff_id: Mapped[str] = mapped_column(
        String, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    staff: Mapped[Staff] = relationship(back_populates="availability")

    __table_args__ = (
        CheckConstraint(
            "day_of_week BETWEEN 1 AND 7", name="staff_availability_iso_weekday_check"
        ),
        CheckConstraint(
            "start_time < end_time", name="staff_availability_time_order_check"
        ),
    )
