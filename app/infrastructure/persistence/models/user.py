"""User ORM model for authentication (tenant-scoped)."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import MultiTenantModel
from app.infrastructure.persistence.models.role import Role


class User(MultiTenantModel, Base):
    """User model. Table: app_user. Unique (tenant_id, email)."""

    __tablename__ = "app_user"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    role: Mapped[Role] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_tenant_email"),
    )
