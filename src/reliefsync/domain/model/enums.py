"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum

DELETED_STATUS = "deleted"


class ResourceFamily(StrEnum):
    """Record families handled by CSV import and export."""

    GRIDS = "grids"
    AREAS = "areas"
    VOLUNTEERS = "volunteers"
    SUPPLIES = "supplies"
    USERS = "users"
    BLACKLIST = "blacklist"
    ANNOUNCEMENTS = "announcements"


class GridStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    COMPLETED = "completed"
    DELETED = DELETED_STATUS


class AreaStatus(StrEnum):
    ACTIVE = "active"
    DELETED = DELETED_STATUS


class VolunteerStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SupplyStatus(StrEnum):
    PLEDGED = "pledged"
    CONFIRMED = "confirmed"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    RECEIVED = "received"
    CANCELLED = "cancelled"
    DELETED = DELETED_STATUS


class DeliveryMethod(StrEnum):
    DIRECT = "direct"
    PICKUP = "pickup"
    VOLUNTEER_PICKUP = "volunteer_pickup"


class UserRole(StrEnum):
    USER = "user"
    GRID_MANAGER = "grid_manager"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    GUEST = "guest"


class AnnouncementStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = DELETED_STATUS


class AnnouncementPriority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
