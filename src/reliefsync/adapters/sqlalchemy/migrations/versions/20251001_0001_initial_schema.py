"""Initial relief record schema.

Revision ID: 0001
Revises:
Create Date: 2025-10-01 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column[object]]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _created_by() -> list[sa.Column[object]]:
    return [
        sa.Column("created_by_id", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "disaster_area",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("county", sa.String(), nullable=True),
        sa.Column("township", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("center_lat", sa.Float(), nullable=False),
        sa.Column("center_lng", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        *_created_by(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_disaster_area"),
    )
    op.create_index("ix_disaster_area_name", "disaster_area", ["name"])

    op.create_table(
        "grid",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("grid_type", sa.String(), nullable=False),
        sa.Column("area_id", sa.String(), nullable=False),
        sa.Column("volunteer_needed", sa.Integer(), nullable=False),
        sa.Column("volunteer_registered", sa.Integer(), nullable=False),
        sa.Column("meeting_point", sa.String(), nullable=True),
        sa.Column("risks_notes", sa.Text(), nullable=True),
        sa.Column("contact_info", sa.String(), nullable=True),
        sa.Column("supplies_needed", sa.JSON(), nullable=True),
        sa.Column("center_lat", sa.Float(), nullable=False),
        sa.Column("center_lng", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        *_created_by(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["area_id"],
            ["disaster_area.id"],
            name="fk_grid_area_id_disaster_area",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_grid"),
    )
    op.create_index("ix_grid_code", "grid", ["code"])

    op.create_table(
        "volunteer_registration",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("grid_id", sa.String(), nullable=False),
        sa.Column("volunteer_name", sa.String(), nullable=False),
        sa.Column("volunteer_phone", sa.String(), nullable=True),
        sa.Column("volunteer_email", sa.String(), nullable=True),
        sa.Column("available_time", sa.String(), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=True),
        sa.Column("equipment", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_created_by(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["grid_id"],
            ["grid.id"],
            name="fk_volunteer_registration_grid_id_grid",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_volunteer_registration"),
    )
    op.create_index(
        "ix_volunteer_registration_phone_grid",
        "volunteer_registration",
        ["volunteer_phone", "grid_id"],
    )

    op.create_table(
        "supply_donation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("grid_id", sa.String(), nullable=False),
        sa.Column("supply_name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("donor_name", sa.String(), nullable=False),
        sa.Column("donor_phone", sa.String(), nullable=True),
        sa.Column("donor_email", sa.String(), nullable=True),
        sa.Column("delivery_method", sa.String(length=32), nullable=True),
        sa.Column("delivery_address", sa.String(), nullable=True),
        sa.Column("delivery_time", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        *_created_by(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["grid_id"],
            ["grid.id"],
            name="fk_supply_donation_grid_id_grid",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_supply_donation"),
    )
    op.create_index(
        "ix_supply_donation_natural_key",
        "supply_donation",
        ["donor_phone", "supply_name", "grid_id"],
    )

    op.create_table(
        "user_account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_blacklisted", sa.Boolean(), nullable=False),
        sa.Column("blacklisted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_user_account"),
    )
    op.create_index("ix_user_account_email", "user_account", ["email"])

    op.create_table(
        "announcement",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("external_links", sa.JSON(), nullable=True),
        sa.Column("contact_phone", sa.String(), nullable=True),
        sa.Column("priority", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("order", sa.Integer(), nullable=True),
        *_created_by(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_announcement"),
    )
    op.create_index("ix_announcement_title", "announcement", ["title"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("actor_role", sa.String(), nullable=False),
        sa.Column("action_type", sa.String(), nullable=False),
        sa.Column("resource_type", sa.String(), nullable=False),
        sa.Column("trash", sa.Boolean(), nullable=False),
        sa.Column("summary", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_audit_log"),
    )


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_index("ix_announcement_title", table_name="announcement")
    op.drop_table("announcement")
    op.drop_index("ix_user_account_email", table_name="user_account")
    op.drop_table("user_account")
    op.drop_index("ix_supply_donation_natural_key", table_name="supply_donation")
    op.drop_table("supply_donation")
    op.drop_index("ix_volunteer_registration_phone_grid", table_name="volunteer_registration")
    op.drop_table("volunteer_registration")
    op.drop_index("ix_grid_code", table_name="grid")
    op.drop_table("grid")
    op.drop_index("ix_disaster_area_name", table_name="disaster_area")
    op.drop_table("disaster_area")
