"""Per-family reconciliation policies.

A handler turns one validated row into a write against the record store. The
shared template in :class:`FamilyHandler` runs the same four steps for every
family (validate, resolve related records, find a natural-key match, apply the
write); subclasses only supply the family-specific pieces.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Final

from reliefsync.domain.errors import UnsupportedOperationError
from reliefsync.domain.model import (
    DELETED_STATUS,
    Announcement,
    AnnouncementPriority,
    AnnouncementStatus,
    AreaStatus,
    DeliveryMethod,
    DisasterArea,
    Entity,
    Grid,
    GridStatus,
    ResourceFamily,
    SupplyDonation,
    SupplyStatus,
    Trashable,
    User,
    UserRole,
    VolunteerRegistration,
    VolunteerStatus,
)
from reliefsync.domain.reconciliation.columns import (
    AnnouncementFields,
    AreaFields,
    BlacklistFields,
    GridFields,
    SupplyFields,
    UserFields,
    VolunteerFields,
)
from reliefsync.domain.reconciliation.contracts import RowOutcome, RowRejected
from reliefsync.domain.reconciliation.fields import FieldResolver, JsonShape
from reliefsync.domain.reconciliation.lookup import find_or_create_area, require_grid

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reliefsync.domain.ports.persistence import Repository
    from reliefsync.domain.reconciliation.contracts import ImportOptions, RowContext
    from reliefsync.tabular import CsvRow

DEFAULT_GRID_TYPE: Final = "residential"
DEFAULT_SUPPLY_UNIT: Final = "個"


class FamilyHandler[TFields, TRelated, TRecord: Entity](ABC):
    """Reconciliation policy for one resource family.

    The base policy only inserts or skips. Families with a trash lifecycle
    derive from :class:`TrashableFamilyHandler` instead.
    """

    family: ClassVar[ResourceFamily]
    supports_trash: ClassVar[bool] = False

    @abstractmethod
    def validate(self, row: CsvRow, options: ImportOptions) -> TFields: ...

    @abstractmethod
    def repository(self, ctx: RowContext) -> Repository[TRecord]: ...

    def resolve_related(self, fields: TFields, ctx: RowContext) -> TRelated:  # noqa: ARG002
        return None  # type: ignore[return-value]

    @abstractmethod
    def find_duplicate(
        self, fields: TFields, related: TRelated, ctx: RowContext, options: ImportOptions
    ) -> TRecord | None: ...

    @abstractmethod
    def build(
        self, fields: TFields, related: TRelated, ctx: RowContext, options: ImportOptions
    ) -> TRecord: ...

    def reconcile(self, row: CsvRow, ctx: RowContext, options: ImportOptions) -> RowOutcome:
        fields = self.validate(row, options)
        related = self.resolve_related(fields, ctx)
        match = self.find_duplicate(fields, related, ctx, options)
        return self._apply(fields, related, match, ctx, options)

    def _apply(
        self,
        fields: TFields,
        related: TRelated,
        match: TRecord | None,
        ctx: RowContext,
        options: ImportOptions,
    ) -> RowOutcome:
        if match is not None and options.skip_duplicates:
            return RowOutcome.SKIPPED
        self.repository(ctx).add(self.build(fields, related, ctx, options))
        return RowOutcome.IMPORTED


class TrashableFamilyHandler[TFields, TRelated, TRecord: Entity](
    FamilyHandler[TFields, TRelated, TRecord]
):
    """Policy for families whose records can be moved to trash and refreshed."""

    supports_trash = True
    # Deleted matches are refreshed from the row when duplicates are not skipped
    refreshes_trashed: ClassVar[bool] = True

    @abstractmethod
    def update(self, record: TRecord, fields: TFields, related: TRelated) -> None: ...

    def updates_in_place(self, fields: TFields, match: TRecord) -> bool:  # noqa: ARG002
        return False

    def _apply(
        self,
        fields: TFields,
        related: TRelated,
        match: TRecord | None,
        ctx: RowContext,
        options: ImportOptions,
    ) -> RowOutcome:
        if options.trash:
            return self._apply_trash(fields, related, match, ctx, options)
        if match is not None and self.updates_in_place(fields, match):
            self.update(match, fields, related)
            match.touch()
            return RowOutcome.UPDATED
        return super()._apply(fields, related, match, ctx, options)

    def _apply_trash(
        self,
        fields: TFields,
        related: TRelated,
        match: TRecord | None,
        ctx: RowContext,
        options: ImportOptions,
    ) -> RowOutcome:
        if match is not None:
            trashable = _as_trashable(match)
            if trashable.move_to_trash():
                return RowOutcome.TRASHED
            if options.skip_duplicates or not self.refreshes_trashed:
                return RowOutcome.SKIPPED
            self.update(match, fields, related)
            trashable.move_to_trash()
            match.touch()
            return RowOutcome.UPDATED

        record = self.build(fields, related, ctx, options)
        _as_trashable(record).move_to_trash(record.created_at)
        if not self.repository(ctx).add_if_absent(record):
            return RowOutcome.SKIPPED
        return RowOutcome.IMPORTED

    def _record_id(self, row_id: str | None, options: ImportOptions) -> str:
        """Explicit ids are honoured only where the family keys on them."""

        return (row_id or "") if options.trash else ""


def _as_trashable(record: Entity) -> Trashable:
    if not isinstance(record, Trashable):
        raise UnsupportedOperationError(f"{type(record).__name__} has no trash lifecycle")
    return record



# Areas -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AreaRow:
    id: str | None
    name: str
    center_lat: float
    center_lng: float
    county: str | None
    township: str | None
    description: str | None
    status: AreaStatus | None


class AreaHandler(TrashableFamilyHandler[AreaRow, None, DisasterArea]):
    family = ResourceFamily.AREAS

    def validate(self, row: CsvRow, options: ImportOptions) -> AreaRow:
        resolver = FieldResolver(row)
        fields = AreaRow(
            id=resolver.text(AreaFields.ID),
            name=resolver.required_text(AreaFields.NAME),
            center_lat=resolver.number(AreaFields.CENTER_LAT) or 0.0,
            center_lng=resolver.number(AreaFields.CENTER_LNG) or 0.0,
            county=resolver.text(AreaFields.COUNTY),
            township=resolver.text(AreaFields.TOWNSHIP),
            description=resolver.text(AreaFields.DESCRIPTION),
            status=resolver.choice(
                AreaFields.STATUS, AreaStatus, None, allowed=_statuses(AreaStatus, options)
            ),
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[DisasterArea]:
        return ctx.repositories.areas

    def find_duplicate(
        self, fields: AreaRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> DisasterArea | None:
        areas = ctx.repositories.areas
        if options.trash:
            return areas.find_near(
                fields.name,
                lat=fields.center_lat,
                lng=fields.center_lng,
                tolerance=ctx.area_proximity,
            )
        return areas.get_by_name(fields.name)

    def build(
        self, fields: AreaRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> DisasterArea:
        return DisasterArea(
            id=self._record_id(fields.id, options),
            name=fields.name,
            center_lat=fields.center_lat,
            center_lng=fields.center_lng,
            county=fields.county,
            township=fields.township,
            description=fields.description,
            status=fields.status or AreaStatus.ACTIVE,
            created_by_id=ctx.actor.id,
            created_by=ctx.actor_name,
        )

    def update(self, record: DisasterArea, fields: AreaRow, related: None) -> None:
        record.county = fields.county
        record.township = fields.township
        record.description = fields.description
        record.center_lat = fields.center_lat
        record.center_lng = fields.center_lng


# Grids -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GridRow:
    id: str | None
    code: str
    grid_type: str
    area_name: str
    center_lat: float
    center_lng: float
    volunteer_needed: int
    meeting_point: str | None
    risks_notes: str | None
    contact_info: str | None
    supplies_needed: Any
    status: GridStatus | None


class GridHandler(TrashableFamilyHandler[GridRow, DisasterArea, Grid]):
    family = ResourceFamily.GRIDS

    def validate(self, row: CsvRow, options: ImportOptions) -> GridRow:
        resolver = FieldResolver(row)
        fields = GridRow(
            id=resolver.text(GridFields.ID),
            code=resolver.required_text(GridFields.CODE),
            grid_type=resolver.text(GridFields.GRID_TYPE) or DEFAULT_GRID_TYPE,
            area_name=resolver.required_text(GridFields.AREA_NAME),
            center_lat=resolver.number(GridFields.CENTER_LAT) or 0.0,
            center_lng=resolver.number(GridFields.CENTER_LNG) or 0.0,
            volunteer_needed=resolver.integer(GridFields.VOLUNTEER_NEEDED) or 0,
            meeting_point=resolver.text(GridFields.MEETING_POINT),
            risks_notes=resolver.text(GridFields.RISKS_NOTES),
            contact_info=resolver.text(GridFields.CONTACT_INFO),
            supplies_needed=resolver.json_list(GridFields.SUPPLIES_NEEDED),
            status=resolver.choice(
                GridFields.STATUS, GridStatus, None, allowed=_statuses(GridStatus, options)
            ),
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[Grid]:
        return ctx.repositories.grids

    def resolve_related(self, fields: GridRow, ctx: RowContext) -> DisasterArea:
        return find_or_create_area(
            ctx, name=fields.area_name, lat=fields.center_lat, lng=fields.center_lng
        )

    def find_duplicate(
        self, fields: GridRow, related: DisasterArea, ctx: RowContext, options: ImportOptions
    ) -> Grid | None:
        return ctx.repositories.grids.get_by_code(fields.code)

    def build(
        self, fields: GridRow, related: DisasterArea, ctx: RowContext, options: ImportOptions
    ) -> Grid:
        return Grid(
            id=self._record_id(fields.id, options),
            code=fields.code,
            grid_type=fields.grid_type,
            area=related,
            center_lat=fields.center_lat,
            center_lng=fields.center_lng,
            volunteer_needed=fields.volunteer_needed,
            meeting_point=fields.meeting_point,
            risks_notes=fields.risks_notes,
            contact_info=fields.contact_info,
            supplies_needed=fields.supplies_needed,
            status=fields.status or GridStatus.OPEN,
            created_by_id=ctx.actor.id,
            created_by=ctx.actor_name,
        )

    def update(self, record: Grid, fields: GridRow, related: DisasterArea) -> None:
        record.grid_type = fields.grid_type
        record.area = related
        record.center_lat = fields.center_lat
        record.center_lng = fields.center_lng
        record.volunteer_needed = fields.volunteer_needed
        record.meeting_point = fields.meeting_point
        record.risks_notes = fields.risks_notes
        record.contact_info = fields.contact_info
        record.supplies_needed = fields.supplies_needed


# Volunteers ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VolunteerRow:
    grid_code: str
    volunteer_name: str
    volunteer_phone: str | None
    volunteer_email: str | None
    available_time: str | None
    skills: Any
    equipment: Any
    notes: str | None
    status: VolunteerStatus


class VolunteerHandler(FamilyHandler[VolunteerRow, Grid, VolunteerRegistration]):
    family = ResourceFamily.VOLUNTEERS

    def validate(self, row: CsvRow, options: ImportOptions) -> VolunteerRow:
        _ = options
        resolver = FieldResolver(row)
        fields = VolunteerRow(
            grid_code=resolver.required_text(VolunteerFields.GRID_CODE),
            volunteer_name=resolver.required_text(VolunteerFields.NAME),
            volunteer_phone=resolver.text(VolunteerFields.PHONE),
            volunteer_email=resolver.text(VolunteerFields.EMAIL),
            available_time=resolver.text(VolunteerFields.AVAILABLE_TIME),
            skills=resolver.json_list(VolunteerFields.SKILLS, shape=JsonShape.SCALARS),
            equipment=resolver.json_list(VolunteerFields.EQUIPMENT, shape=JsonShape.SCALARS),
            notes=resolver.text(VolunteerFields.NOTES),
            status=resolver.choice(VolunteerFields.STATUS, VolunteerStatus, VolunteerStatus.PENDING)
            or VolunteerStatus.PENDING,
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[VolunteerRegistration]:
        return ctx.repositories.volunteers

    def resolve_related(self, fields: VolunteerRow, ctx: RowContext) -> Grid:
        return require_grid(ctx, fields.grid_code)

    def find_duplicate(
        self, fields: VolunteerRow, related: Grid, ctx: RowContext, options: ImportOptions
    ) -> VolunteerRegistration | None:
        if fields.volunteer_phone is None:
            return None
        return ctx.repositories.volunteers.find_by_phone_and_grid(
            fields.volunteer_phone, related.id
        )

    def build(
        self, fields: VolunteerRow, related: Grid, ctx: RowContext, options: ImportOptions
    ) -> VolunteerRegistration:
        return VolunteerRegistration(
            grid=related,
            volunteer_name=fields.volunteer_name,
            volunteer_phone=fields.volunteer_phone,
            volunteer_email=fields.volunteer_email,
            available_time=fields.available_time,
            skills=fields.skills,
            equipment=fields.equipment,
            notes=fields.notes,
            status=fields.status,
            created_by_id=ctx.actor.id,
            created_by=ctx.actor_name,
        )


# Supplies --------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SupplyRow:
    id: str | None
    grid_code: str
    supply_name: str
    quantity: int
    unit: str
    donor_name: str
    donor_phone: str | None
    donor_email: str | None
    delivery_method: DeliveryMethod | None
    delivery_address: str | None
    delivery_time: str | None
    notes: str | None
    status: SupplyStatus | None


class SupplyHandler(TrashableFamilyHandler[SupplyRow, Grid, SupplyDonation]):
    """Donations match by explicit id first, then by phone, item and grid."""

    family = ResourceFamily.SUPPLIES

    def validate(self, row: CsvRow, options: ImportOptions) -> SupplyRow:
        resolver = FieldResolver(row)
        fields = SupplyRow(
            id=resolver.text(SupplyFields.ID),
            grid_code=resolver.required_text(SupplyFields.GRID_CODE),
            supply_name=resolver.required_text(SupplyFields.SUPPLY_NAME),
            quantity=resolver.integer(SupplyFields.QUANTITY) or 0,
            unit=resolver.text(SupplyFields.UNIT) or DEFAULT_SUPPLY_UNIT,
            donor_name=resolver.required_text(SupplyFields.DONOR_NAME),
            donor_phone=resolver.text(SupplyFields.DONOR_PHONE),
            donor_email=resolver.text(SupplyFields.DONOR_EMAIL),
            delivery_method=resolver.choice(SupplyFields.DELIVERY_METHOD, DeliveryMethod, None),
            delivery_address=resolver.text(SupplyFields.DELIVERY_ADDRESS),
            delivery_time=resolver.text(SupplyFields.DELIVERY_TIME),
            notes=resolver.text(SupplyFields.NOTES),
            status=resolver.choice(
                SupplyFields.STATUS, SupplyStatus, None, allowed=_statuses(SupplyStatus, options)
            ),
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[SupplyDonation]:
        return ctx.repositories.supplies

    def resolve_related(self, fields: SupplyRow, ctx: RowContext) -> Grid:
        return require_grid(ctx, fields.grid_code)

    def find_duplicate(
        self, fields: SupplyRow, related: Grid, ctx: RowContext, options: ImportOptions
    ) -> SupplyDonation | None:
        supplies = ctx.repositories.supplies
        if fields.id is not None:
            match = supplies.get(fields.id)
            if match is not None:
                return match
        if fields.donor_phone is None:
            return None
        return supplies.find_by_natural_key(
            phone=fields.donor_phone, supply_name=fields.supply_name, grid_id=related.id
        )

    def updates_in_place(self, fields: SupplyRow, match: SupplyDonation) -> bool:
        return fields.id is not None and fields.id == match.id

    def build(
        self, fields: SupplyRow, related: Grid, ctx: RowContext, options: ImportOptions
    ) -> SupplyDonation:
        _ = options
        return SupplyDonation(
            id=fields.id or "",
            grid=related,
            supply_name=fields.supply_name,
            quantity=fields.quantity,
            unit=fields.unit,
            donor_name=fields.donor_name,
            donor_phone=fields.donor_phone,
            donor_email=fields.donor_email,
            delivery_method=fields.delivery_method,
            delivery_address=fields.delivery_address,
            delivery_time=fields.delivery_time,
            notes=fields.notes,
            status=fields.status or SupplyStatus.PLEDGED,
            created_by_id=ctx.actor.id,
            created_by=ctx.actor_name,
        )

    def update(self, record: SupplyDonation, fields: SupplyRow, related: Grid) -> None:
        record.grid = related
        record.supply_name = fields.supply_name
        record.quantity = fields.quantity
        record.unit = fields.unit
        record.donor_name = fields.donor_name
        record.donor_phone = fields.donor_phone
        record.donor_email = fields.donor_email
        record.delivery_method = fields.delivery_method
        record.delivery_address = fields.delivery_address
        record.delivery_time = fields.delivery_time
        record.notes = fields.notes
        if fields.status is not None:
            record.status = fields.status


# Users -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UserRow:
    name: str
    email: str | None
    role: UserRole
    is_blacklisted: bool


class UserHandler(FamilyHandler[UserRow, None, User]):
    family = ResourceFamily.USERS

    def validate(self, row: CsvRow, options: ImportOptions) -> UserRow:
        _ = options
        resolver = FieldResolver(row)
        fields = UserRow(
            name=resolver.required_text(UserFields.NAME),
            email=resolver.text(UserFields.EMAIL),
            role=resolver.choice(UserFields.ROLE, UserRole, UserRole.USER) or UserRole.USER,
            is_blacklisted=resolver.flag(UserFields.IS_BLACKLISTED),
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[User]:
        return ctx.repositories.users

    def find_duplicate(
        self, fields: UserRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> User | None:
        users = ctx.repositories.users
        if fields.email is not None:
            return users.get_by_email(fields.email)
        return users.get_by_name(fields.name)

    def build(
        self, fields: UserRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> User:
        user = User(name=fields.name, email=fields.email, role=fields.role)
        if fields.is_blacklisted:
            user.add_to_blacklist(user.created_at)
        return user


# Blacklist -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BlacklistRow:
    id: str | None
    name: str | None
    email: str | None


class BlacklistHandler(FamilyHandler[BlacklistRow, None, User]):
    """Flags existing accounts; unknown ids are created already blacklisted."""

    family = ResourceFamily.BLACKLIST

    def validate(self, row: CsvRow, options: ImportOptions) -> BlacklistRow:
        _ = options
        resolver = FieldResolver(row)
        fields = BlacklistRow(
            id=resolver.text(BlacklistFields.ID),
            name=resolver.text(BlacklistFields.NAME),
            email=resolver.text(BlacklistFields.EMAIL),
        )
        resolver.finish()
        if fields.id is None and fields.email is None:
            row_json = json.dumps(row.as_json(), ensure_ascii=False)
            raise RowRejected(f"Missing required fields (ID or Email) in row: {row_json}")
        return fields

    def repository(self, ctx: RowContext) -> Repository[User]:
        return ctx.repositories.users

    def find_duplicate(
        self, fields: BlacklistRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> User | None:
        users = ctx.repositories.users
        if fields.id is not None:
            user = users.get(fields.id)
            if user is not None:
                return user
        if fields.email is not None:
            return users.get_by_email(fields.email)
        return None

    def build(
        self, fields: BlacklistRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> User:
        if fields.id is None:
            raise RowRejected(f"User not found: {fields.email}")
        user = User(
            id=fields.id,
            name=fields.name or fields.email or fields.id,
            email=fields.email,
        )
        user.add_to_blacklist(user.created_at)
        return user

    def _apply(
        self,
        fields: BlacklistRow,
        related: None,
        match: User | None,
        ctx: RowContext,
        options: ImportOptions,
    ) -> RowOutcome:
        if match is None:
            self.repository(ctx).add(self.build(fields, related, ctx, options))
            return RowOutcome.IMPORTED
        if not match.add_to_blacklist():
            return RowOutcome.SKIPPED
        return RowOutcome.UPDATED


# Announcements ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AnnouncementRow:
    id: str | None
    title: str
    body: str
    category: str | None
    is_pinned: bool
    external_links: Any
    contact_phone: str | None
    priority: AnnouncementPriority
    status: AnnouncementStatus | None
    display_order: int | None


class AnnouncementHandler(TrashableFamilyHandler[AnnouncementRow, None, Announcement]):
    """Announcements match by title and are updated in place."""

    family = ResourceFamily.ANNOUNCEMENTS
    refreshes_trashed = False

    def validate(self, row: CsvRow, options: ImportOptions) -> AnnouncementRow:
        resolver = FieldResolver(row)
        fields = AnnouncementRow(
            id=resolver.text(AnnouncementFields.ID),
            title=resolver.required_text(AnnouncementFields.TITLE),
            body=resolver.text(AnnouncementFields.BODY) or "",
            category=resolver.text(AnnouncementFields.CATEGORY),
            is_pinned=resolver.flag(AnnouncementFields.IS_PINNED),
            external_links=resolver.json_list(AnnouncementFields.EXTERNAL_LINKS),
            contact_phone=resolver.text(AnnouncementFields.CONTACT_PHONE),
            priority=resolver.choice(
                AnnouncementFields.PRIORITY, AnnouncementPriority, AnnouncementPriority.NORMAL
            )
            or AnnouncementPriority.NORMAL,
            status=resolver.choice(
                AnnouncementFields.STATUS,
                AnnouncementStatus,
                None,
                allowed=_statuses(AnnouncementStatus, options),
            ),
            display_order=resolver.integer(AnnouncementFields.DISPLAY_ORDER, default=None),
        )
        resolver.finish()
        return fields

    def repository(self, ctx: RowContext) -> Repository[Announcement]:
        return ctx.repositories.announcements

    def find_duplicate(
        self, fields: AnnouncementRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> Announcement | None:
        return ctx.repositories.announcements.get_by_title(fields.title)

    def updates_in_place(self, fields: AnnouncementRow, match: Announcement) -> bool:
        return True

    def build(
        self, fields: AnnouncementRow, related: None, ctx: RowContext, options: ImportOptions
    ) -> Announcement:
        return Announcement(
            id=self._record_id(fields.id, options),
            title=fields.title,
            body=fields.body,
            category=fields.category,
            is_pinned=fields.is_pinned,
            external_links=fields.external_links,
            contact_phone=fields.contact_phone,
            priority=fields.priority,
            status=fields.status or AnnouncementStatus.ACTIVE,
            display_order=fields.display_order,
            created_by_id=ctx.actor.id,
            created_by=ctx.actor_name,
        )

    def update(self, record: Announcement, fields: AnnouncementRow, related: None) -> None:
        record.body = fields.body
        record.category = fields.category
        record.is_pinned = fields.is_pinned
        record.external_links = fields.external_links
        record.contact_phone = fields.contact_phone
        record.priority = fields.priority
        record.display_order = fields.display_order
        if fields.status is not None:
            record.status = fields.status


def _statuses[TStatus: StrEnum](
    enum_cls: type[TStatus], options: ImportOptions
) -> tuple[TStatus, ...]:
    """Status values a row may carry; ``deleted`` is reserved for trash imports."""

    if options.trash:
        return tuple(enum_cls)
    return tuple(status for status in enum_cls if status != DELETED_STATUS)


HANDLERS: Final[Mapping[ResourceFamily, FamilyHandler[Any, Any, Any]]] = {
    handler.family: handler
    for handler in (
        AreaHandler(),
        GridHandler(),
        VolunteerHandler(),
        SupplyHandler(),
        UserHandler(),
        BlacklistHandler(),
        AnnouncementHandler(),
    )
}


def handler_for(family: ResourceFamily, *, trash: bool = False) -> FamilyHandler[Any, Any, Any]:
    """Select the policy for ``family``; trash variants exist only where supported."""

    handler = HANDLERS[family]
    if trash and not handler.supports_trash:
        raise UnsupportedOperationError(f"Trash import/export is not available for {family}")
    return handler
