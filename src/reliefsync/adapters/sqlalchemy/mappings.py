"""SQLAlchemy mapping metadata for the relief record model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from reliefsync.domain.model import (
    Announcement,
    AnnouncementPriority,
    AnnouncementStatus,
    AreaStatus,
    DeliveryMethod,
    DisasterArea,
    Grid,
    GridStatus,
    SupplyDonation,
    SupplyStatus,
    User,
    UserRole,
    VolunteerRegistration,
    VolunteerStatus,
)

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum(enum_cls: type[StrEnum]) -> Enum:
    """Store enum values (not member names) in a plain VARCHAR column."""

    return Enum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        length=32,
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

disaster_area_table = Table(
    "disaster_area",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False, index=True),
    Column("county", String, nullable=True),
    Column("township", String, nullable=True),
    Column("description", Text, nullable=True),
    Column("center_lat", Float, nullable=False),
    Column("center_lng", Float, nullable=False),
    Column("status", _enum(AreaStatus), nullable=False),
    Column("created_by_id", String, nullable=True),
    Column("created_by", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
)

grid_table = Table(
    "grid",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("code", String, nullable=False, index=True),
    Column("grid_type", String, nullable=False),
    Column(
        "area_id",
        String,
        ForeignKey("disaster_area.id", ondelete="CASCADE"),
        key="_area_id",
        nullable=False,
    ),
    Column("volunteer_needed", Integer, nullable=False, default=0),
    Column("volunteer_registered", Integer, nullable=False, default=0),
    Column("meeting_point", String, nullable=True),
    Column("risks_notes", Text, nullable=True),
    Column("contact_info", String, nullable=True),
    Column("supplies_needed", JSON, nullable=True),
    Column("center_lat", Float, nullable=False),
    Column("center_lng", Float, nullable=False),
    Column("status", _enum(GridStatus), nullable=False),
    Column("created_by_id", String, nullable=True),
    Column("created_by", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
)

volunteer_registration_table = Table(
    "volunteer_registration",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column(
        "grid_id",
        String,
        ForeignKey("grid.id", ondelete="CASCADE"),
        key="_grid_id",
        nullable=False,
    ),
    Column("volunteer_name", String, nullable=False),
    Column("volunteer_phone", String, nullable=True),
    Column("volunteer_email", String, nullable=True),
    Column("available_time", String, nullable=True),
    Column("skills", JSON, nullable=True),
    Column("equipment", JSON, nullable=True),
    Column("status", _enum(VolunteerStatus), nullable=False),
    Column("notes", Text, nullable=True),
    Column("created_by_id", String, nullable=True),
    Column("created_by", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_volunteer_registration_phone_grid", "volunteer_phone", "_grid_id"),
)

supply_donation_table = Table(
    "supply_donation",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column(
        "grid_id",
        String,
        ForeignKey("grid.id", ondelete="CASCADE"),
        key="_grid_id",
        nullable=False,
    ),
    Column("supply_name", String, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit", String, nullable=False),
    Column("donor_name", String, nullable=False),
    Column("donor_phone", String, nullable=True),
    Column("donor_email", String, nullable=True),
    Column("delivery_method", _enum(DeliveryMethod), nullable=True),
    Column("delivery_address", String, nullable=True),
    Column("delivery_time", String, nullable=True),
    Column("notes", Text, nullable=True),
    Column("status", _enum(SupplyStatus), nullable=False),
    Column("created_by_id", String, nullable=True),
    Column("created_by", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_supply_donation_natural_key", "donor_phone", "supply_name", "_grid_id"),
)

user_account_table = Table(
    "user_account",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=True, index=True),
    Column("role", _enum(UserRole), nullable=False),
    Column("is_blacklisted", Boolean, nullable=False, default=False),
    Column("blacklisted_at", UTCDateTime(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
)

announcement_table = Table(
    "announcement",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False, index=True),
    Column("body", Text, nullable=False, default=""),
    Column("category", String, nullable=True),
    Column("is_pinned", Boolean, nullable=False, default=False),
    Column("external_links", JSON, nullable=True),
    Column("contact_phone", String, nullable=True),
    Column("priority", _enum(AnnouncementPriority), nullable=False),
    Column("status", _enum(AnnouncementStatus), nullable=False),
    Column("order", Integer, key="display_order", nullable=True),
    Column("created_by_id", String, nullable=True),
    Column("created_by", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("updated_at", UTCDateTime(), nullable=True),
)

# Written through Core by the audit sink; never mapped to a domain class.
audit_log_table = Table(
    "audit_log",
    mapper_registry.metadata,
    Column("id", String, primary_key=True, default=lambda: uuid.uuid4().hex),
    Column("actor_id", String, nullable=True),
    Column("actor_role", String, nullable=False),
    Column("action_type", String, nullable=False),
    Column("resource_type", String, nullable=False),
    Column("trash", Boolean, nullable=False, default=False),
    Column("summary", JSON, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the relief model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(DisasterArea, disaster_area_table)

    mapper_registry.map_imperatively(
        Grid,
        grid_table,
        properties={
            "area": relationship(DisasterArea, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(
        VolunteerRegistration,
        volunteer_registration_table,
        properties={
            "grid": relationship(Grid, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(
        SupplyDonation,
        supply_donation_table,
        properties={
            "grid": relationship(Grid, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(User, user_account_table)

    mapper_registry.map_imperatively(Announcement, announcement_table)

    configure_mappers()
    return mapper_registry

