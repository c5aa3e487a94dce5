"""Relief records: disaster areas, grids, volunteer sign-ups, donations, announcements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from reliefsync.domain.model.base import Entity, Trashable
from reliefsync.domain.model.enums import (
    AnnouncementPriority,
    AnnouncementStatus,
    AreaStatus,
    GridStatus,
    SupplyStatus,
    VolunteerStatus,
)

if TYPE_CHECKING:
    from reliefsync.domain.model.enums import DeliveryMethod

type JsonList = list[Any]


@dataclass(eq=False, kw_only=True)
class DisasterArea(Entity, Trashable):
    ID_PREFIX: ClassVar[str] = "area"

    name: str
    center_lat: float
    center_lng: float
    county: str | None = None
    township: str | None = None
    description: str | None = None
    status: AreaStatus = AreaStatus.ACTIVE
    created_by_id: str | None = None
    created_by: str | None = None


@dataclass(eq=False, kw_only=True)
class Grid(Entity, Trashable):
    """A task cell inside a disaster area that volunteers and supplies attach to."""

    ID_PREFIX: ClassVar[str] = "grid"

    code: str
    grid_type: str
    area: DisasterArea = field(repr=False)
    center_lat: float
    center_lng: float
    volunteer_needed: int = 0
    volunteer_registered: int = 0
    meeting_point: str | None = None
    risks_notes: str | None = None
    contact_info: str | None = None
    supplies_needed: JsonList | None = None
    status: GridStatus = GridStatus.OPEN
    created_by_id: str | None = None
    created_by: str | None = None

    @property
    def area_name(self) -> str | None:
        return self.area.name if self.area is not None else None


@dataclass(eq=False, kw_only=True)
class VolunteerRegistration(Entity):
    ID_PREFIX: ClassVar[str] = "reg"

    grid: Grid = field(repr=False)
    volunteer_name: str
    volunteer_phone: str | None = None
    volunteer_email: str | None = None
    available_time: str | None = None
    skills: JsonList | None = None
    equipment: JsonList | None = None
    status: VolunteerStatus = VolunteerStatus.PENDING
    notes: str | None = None
    created_by_id: str | None = None
    created_by: str | None = None


@dataclass(eq=False, kw_only=True)
class SupplyDonation(Entity, Trashable):
    ID_PREFIX: ClassVar[str] = "donation"

    grid: Grid = field(repr=False)
    supply_name: str
    quantity: int
    unit: str
    donor_name: str
    donor_phone: str | None = None
    donor_email: str | None = None
    delivery_method: DeliveryMethod | None = None
    delivery_address: str | None = None
    delivery_time: str | None = None
    notes: str | None = None
    status: SupplyStatus = SupplyStatus.PLEDGED
    created_by_id: str | None = None
    created_by: str | None = None


@dataclass(eq=False, kw_only=True)
class Announcement(Entity, Trashable):
    ID_PREFIX: ClassVar[str] = "announcement"

    title: str
    body: str = ""
    category: str | None = None
    is_pinned: bool = False
    external_links: JsonList | None = None
    contact_phone: str | None = None
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    status: AnnouncementStatus = AnnouncementStatus.ACTIVE
    display_order: int | None = None
    created_by_id: str | None = None
    created_by: str | None = None
