"""Tenant (company) ORM model. Root entity for multi-tenant hierarchy (no tenant_id)."""

from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Tenant(CuidMixin, TimestampMixin, Base):
    """Company. Table: tenant. Deactivated (is_active false), never hard deleted."""

    __tablename__ = "tenant"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain: Mapped[str] = mapped_column(
        String(253), unique=True, nullable=False, index=True
    )
    user_limit: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("50")
    )
    manager_limit: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("10")
    )
    token_limit: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("50000")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), index=True
    )
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        CheckConstraint(
            "user_limit > 0 AND manager_limit > 0 AND token_limit > 0",
            name="tenant_limits_positive_check",
        ),
    )
