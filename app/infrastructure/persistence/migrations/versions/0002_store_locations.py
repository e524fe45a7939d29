"""Store locations and staff-to-location assignments

Revision ID: 0002_store_locations
Revises: 0001_initial
Create Date: 2026-10-19 14:00:00.000000

Adds store_location and staff_store_location, and backfills location
permission tokens onto the system roles of existing tenants. New tenants get
them from TenantInitializationService.
"""

import json
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy import text

# revision identifiers, used by Alembic.
revision: str = "0002_store_locations"
down_revision: Union[str, Sequence[str], None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Role name -> tokens added to its stored permissions (admin holds *:*).
NEW_PERMISSIONS = {
    "owner": ["location:*"],
    "manager": [
        "location:read",
        "location:create",
        "location:update",
        "location:assign",
        "location:stats",
    ],
    "staff": ["location:read"],
}


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


def _set_role_permissions(add: bool) -> None:
    conn = op.get_bind()
    for role_name, tokens in NEW_PERMISSIONS.items():
        rows = conn.execute(
            text("SELECT id, permissions FROM role WHERE is_system AND name = :name"),
            {"name": role_name},
        ).fetchall()
        for role_id, permissions in rows:
            current = permissions if isinstance(permissions, list) else json.loads(permissions)
            if add:
                updated = current + [t for t in tokens if t not in current]
            else:
                updated = [t for t in current if t not in tokens]
            conn.execute(
                text("UPDATE role SET permissions = CAST(:perms AS json) WHERE id = :id"),
                {"perms": json.dumps(updated), "id": role_id},
            )


def upgrade() -> None:
    """Create location tables and grant location tokens to system roles."""
    op.create_table(
        "store_location",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "tenant_id",
            sa.String(),
            sa.ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_store_location_tenant_id", "store_location", ["tenant_id"])
    op.create_index("ix_store_location_is_active", "store_location", ["is_active"])

    op.create_table(
        "staff_store_location",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "staff_id",
            sa.String(),
            sa.ForeignKey("staff.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "store_location_id",
            sa.String(),
            sa.ForeignKey("store_location.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "staff_id", "store_location_id", name="uq_staff_store_location"
        ),
    )
    op.create_index(
        "ix_staff_store_location_staff_id", "staff_store_location", ["staff_id"]
    )
    op.create_index(
        "ix_staff_store_location_store_location_id",
        "staff_store_location",
        ["store_location_id"],
    )

    _set_role_permissions(add=True)


def downgrade() -> None:
    """Drop location tables and revoke location tokens."""
    _set_role_permissions(add=False)
    op.drop_table("staff_store_location")
    op.drop_table("store_location")
