"""Roster and Shift ORM models.

The shift table carries a GiST exclusion constraint (created in the initial
migration) so no two shifts of one staff member overlap on [start, end).
"""

from datetime import datetime

from sqlalchemy import (
    DDL,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    event,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import MultiTenantModel

SHIFT_NO_OVERLAP_CONSTRAINT = "shift_staff_no_overlap"


class Roster(MultiTenantModel, Base):
    """Schedule period. Table: roster. Immutable once is_published."""

    __tablename__ = "roster"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    is_template: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    shifts: Mapped[list["Shift"]] = relationship(
        back_populates="roster",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Shift.start_time",
    )

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="roster_period_check"),
        Index("ix_roster_tenant_period", "tenant_id", "start_date", "end_date"),
    )


class Shift(MultiTenantModel, Base):
    """Staff assignment within a roster. Table: shift."""

    __tablename__ = "shift"

    roster_id: Mapped[str] = mapped_column(
        String, ForeignKey("roster.id", ondelete="CASCADE"), nullable=False, index=True
    )
    staff_id: Mapped[str] = mapped_column(
        String, ForeignKey("staff.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )

    roster: Mapped[Roster] = relationship(back_populates="shifts")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="shift_time_order_check"),
        Index("ix_shift_staff_start", "staff_id", "start_time"),
    )


# Exclusion constraint backstop for concurrent writers; kept in sync with the
# initial Alembic revision. Requires the btree_gist extension.
SHIFT_NO_OVERLAP_DDL = (
    "ALTER TABLE shift ADD CONSTRAINT {name} EXCLUDE USING gist "
    "(staff_id WITH =, tstzrange(start_time, end_time, '[)') WITH &&)"
).format(name=SHIFT_NO_OVERLAP_CONSTRAINT)

event.listen(
    Shift.__table__,
    "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)
event.listen(
    Shift.__table__,
    "after_create",
    DDL(SHIFT_NO_OVERLAP_DDL).execute_if(dialect="postgresql"),
)
