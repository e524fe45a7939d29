"""Role ORM model. Tenant-scoped roles (admin, owner, manager, staff)."""

from sqlalchemy import JSON, Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import MultiTenantModel


class Role(MultiTenantModel, Base):
    """Role. Table: role. Unique (tenant_id, name). permissions holds resource:action tokens."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_role_tenant_name"),)
