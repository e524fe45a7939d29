"""Initial schema: companies, roles, users, staff, rosters, shifts, notifications

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _tenant_fk() -> sa.Column:
    return sa.Column(
        "tenant_id",
        sa.String(),
        sa.ForeignKey("tenant.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """Create scheduling schema with the shift no-overlap exclusion constraint."""
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    op.create_table(
        "tenant",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("domain", sa.String(253), nullable=False),
        sa.Column("user_limit", sa.Integer(), server_default=sa.text("50"), nullable=False),
        sa.Column("manager_limit", sa.Integer(), server_default=sa.text("10"), nullable=False),
        sa.Column(
            "token_limit", sa.Integer(), server_default=sa.text("50000"), nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("settings", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "user_limit > 0 AND manager_limit > 0 AND token_limit > 0",
            name="tenant_limits_positive_check",
        ),
    )
    op.create_index("ix_tenant_domain", "tenant", ["domain"], unique=True)
    op.create_index("ix_tenant_is_active", "tenant", ["is_active"])

    op.create_table(
        "role",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "name", name="uq_role_tenant_name"),
    )
    op.create_index("ix_role_tenant_id", "role", ["tenant_id"])

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "role_id",
            sa.String(),
            sa.ForeignKey("role.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "email", name="uq_tenant_email"),
    )
    op.create_index("ix_app_user_tenant_id", "app_user", ["tenant_id"])
    op.create_index("ix_app_user_role_id", "app_user", ["role_id"])

    op.create_table(
        "staff",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "email", name="uq_staff_tenant_email"),
        sa.CheckConstraint("hourly_rate > 0", name="staff_hourly_rate_positive_check"),
    )
    op.create_index("ix_staff_tenant_id", "staff", ["tenant_id"])
    op.create_index("ix_staff_department", "staff", ["department"])
    op.create_index("ix_staff_is_active", "staff", ["is_active"])

    op.create_table(
        "staff_availability",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "staff_id",
            sa.String(),
            sa.ForeignKey("staff.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "day_of_week BETWEEN 1 AND 7", name="staff_availability_iso_weekday_check"
        ),
        sa.CheckConstraint(
            "start_time < end_time", name="staff_availability_time_order_check"
        ),
    )
    op.create_index("ix_staff_availability_staff_id", "staff_availability", ["staff_id"])

    op.create_table(
        "roster",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "is_published", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "is_template", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_by",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.CheckConstraint("start_date < end_date", name="roster_period_check"),
    )
    op.create_index("ix_roster_tenant_id", "roster", ["tenant_id"])
    op.create_index(
        "ix_roster_tenant_period", "roster", ["tenant_id", "start_date", "end_date"]
    )

    op.create_table(
        "shift",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "roster_id",
            sa.String(),
            sa.ForeignKey("roster.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "staff_id",
            sa.String(),
            sa.ForeignKey("staff.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "is_confirmed", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        *_timestamps(),
        sa.CheckConstraint("start_time < end_time", name="shift_time_order_check"),
    )
    op.create_index("ix_shift_tenant_id", "shift", ["tenant_id"])
    op.create_index("ix_shift_roster_id", "shift", ["roster_id"])
    op.create_index("ix_shift_staff_id", "shift", ["staff_id"])
    op.create_index("ix_shift_staff_start", "shift", ["staff_id", "start_time"])
    op.execute(
        "ALTER TABLE shift ADD CONSTRAINT shift_staff_no_overlap EXCLUDE USING gist "
        "(staff_id WITH =, tstzrange(start_time, end_time, '[)') WITH &&)"
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "user_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('roster_published', 'shift_created', 'shift_updated', "
            "'shift_deleted', 'system')",
            name="notification_type_check",
        ),
    )
    op.create_index("ix_notification_tenant_id", "notification", ["tenant_id"])
    op.create_index("ix_notification_user_id", "notification", ["user_id"])


def downgrade() -> None:
    """Drop scheduling schema."""
    op.drop_table("notification")
    op.drop_table("shift")
    op.drop_table("roster")
    op.drop_table("staff_availability")
    op.drop_table("staff")
    op.drop_table("app_user")
    op.drop_table("role")
    op.drop_table("tenant")
