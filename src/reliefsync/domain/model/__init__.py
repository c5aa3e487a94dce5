"""Domain model for disaster-relief records."""

from __future__ import annotations

from .base import Entity, Trashable, new_id, utcnow
from .enums import (
    DELETED_STATUS,
    AnnouncementPriority,
    AnnouncementStatus,
    AreaStatus,
    DeliveryMethod,
    GridStatus,
    ResourceFamily,
    SupplyStatus,
    UserRole,
    VolunteerStatus,
)
from .relief import (
    Announcement,
    DisasterArea,
    Grid,
    JsonList,
    SupplyDonation,
    VolunteerRegistration,
)
from .user import Actor, User

__all__ = [
    "DELETED_STATUS",
    "Actor",
    "Announcement",
    "AnnouncementPriority",
    "AnnouncementStatus",
    "AreaStatus",
    "DeliveryMethod",
    "DisasterArea",
    "Entity",
    "Grid",
    "GridStatus",
    "JsonList",
    "ResourceFamily",
    "SupplyDonation",
    "SupplyStatus",
    "Trashable",
    "User",
    "UserRole",
    "VolunteerRegistration",
    "VolunteerStatus",
    "new_id",
    "utcnow",
]
