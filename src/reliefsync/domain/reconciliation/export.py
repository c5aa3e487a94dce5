"""Export of stored records to spreadsheet-friendly CSV, plus import templates."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING, Any, Final

from reliefsync.domain.model import ResourceFamily
from reliefsync.domain.reconciliation.columns import COLUMNS_BY_FAMILY
from reliefsync.domain.reconciliation.families import handler_for
from reliefsync.tabular import encode_rows, with_bom

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from reliefsync.domain.model import (
        Announcement,
        DisasterArea,
        Grid,
        SupplyDonation,
        User,
        VolunteerRegistration,
    )
    from reliefsync.domain.ports.unit_of_work import ReliefRepositories

log = logging.getLogger(__name__)

TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"
YES: Final = "是"
NO: Final = "否"

type ExportRow = dict[str, object]


@dataclass(frozen=True, slots=True)
class ExportFormatter:
    """Cell formatting shared by every family."""

    tz: tzinfo = field(default=UTC)

    def timestamp(self, value: datetime | str | None) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError:
                return ""
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(self.tz).strftime(TIMESTAMP_FORMAT)

    def flag(self, value: bool | None) -> str:  # noqa: FBT001
        return YES if value else NO

    def json_summary(self, value: Any) -> str:
        """Render a JSON-list field as ``;``-joined ``name:url``/``name`` items."""

        if value is None:
            return ""
        if isinstance(value, list):
            return ";".join(_summary_item(item) for item in value)
        return json.dumps(value, ensure_ascii=False)


def _summary_item(item: Any) -> str:
    if isinstance(item, dict):
        name = item.get("name")
        url = item.get("url")
        if name and url:
            return f"{name}:{url}"
        if name:
            return str(name)
        return json.dumps(item, ensure_ascii=False)
    if isinstance(item, str | int | float):
        return str(item)
    return json.dumps(item, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class ExportDocument:
    family: ResourceFamily
    trash: bool
    text: str
    count: int

    @property
    def filename(self) -> str:
        stamp = datetime.now(UTC).strftime("%Y%m%d")
        suffix = "_trash" if self.trash else ""
        return f"{self.family}{suffix}_{stamp}.csv"


def _area_row(area: DisasterArea, fmt: ExportFormatter) -> ExportRow:
    return {
        "id": area.id,
        "name": area.name,
        "county": area.county,
        "township": area.township,
        "description": area.description,
        "status": area.status,
        "center_lat": area.center_lat,
        "center_lng": area.center_lng,
        "created_at": fmt.timestamp(area.created_at),
    }


def _grid_row(grid: Grid, fmt: ExportFormatter) -> ExportRow:
    return {
        "id": grid.id,
        "code": grid.code,
        "grid_type": grid.grid_type,
        "area_name": grid.area_name,
        "volunteer_needed": grid.volunteer_needed,
        "volunteer_registered": grid.volunteer_registered,
        "meeting_point": grid.meeting_point,
        "risks_notes": grid.risks_notes,
        "contact_info": grid.contact_info,
        "supplies_needed": fmt.json_summary(grid.supplies_needed),
        "status": grid.status,
        "center_lat": grid.center_lat,
        "center_lng": grid.center_lng,
        "created_at": fmt.timestamp(grid.created_at),
    }


def _volunteer_row(registration: VolunteerRegistration, fmt: ExportFormatter) -> ExportRow:
    grid = registration.grid
    return {
        "id": registration.id,
        "volunteer_name": registration.volunteer_name,
        "volunteer_phone": registration.volunteer_phone,
        "volunteer_email": registration.volunteer_email,
        "available_time": registration.available_time,
        "skills": fmt.json_summary(registration.skills),
        "equipment": fmt.json_summary(registration.equipment),
        "status": registration.status,
        "grid_code": grid.code,
        "area_name": grid.area_name,
        "created_at": fmt.timestamp(registration.created_at),
    }


def _supply_row(donation: SupplyDonation, fmt: ExportFormatter) -> ExportRow:
    grid = donation.grid
    return {
        "id": donation.id,
        "grid_code": grid.code,
        "area_name": grid.area_name,
        "supply_name": donation.supply_name,
        "quantity": donation.quantity,
        "unit": donation.unit,
        "donor_name": donation.donor_name,
        "donor_phone": donation.donor_phone,
        "donor_email": donation.donor_email,
        "delivery_method": donation.delivery_method,
        "delivery_address": donation.delivery_address,
        "delivery_time": donation.delivery_time,
        "notes": donation.notes,
        "status": donation.status,
        "created_at": fmt.timestamp(donation.created_at),
    }


def _user_row(user: User, fmt: ExportFormatter) -> ExportRow:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "is_blacklisted": fmt.flag(user.is_blacklisted),
        "created_at": fmt.timestamp(user.created_at),
    }


def _blacklist_row(user: User, fmt: ExportFormatter) -> ExportRow:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "blacklisted_at": fmt.timestamp(user.blacklisted_at),
    }


def _announcement_row(announcement: Announcement, fmt: ExportFormatter) -> ExportRow:
    return {
        "id": announcement.id,
        "title": announcement.title,
        "body": announcement.body,
        "category": announcement.category,
        "is_pinned": fmt.flag(announcement.is_pinned),
        "external_links": fmt.json_summary(announcement.external_links),
        "contact_phone": announcement.contact_phone,
        "priority": announcement.priority,
        "status": announcement.status,
        "display_order": announcement.display_order,
        "created_at": fmt.timestamp(announcement.created_at),
        "updated_at": fmt.timestamp(announcement.updated_at),
    }


@dataclass(frozen=True, slots=True)
class _Projection:
    load: Callable[[ReliefRepositories, bool], Sequence[Any]]
    row: Callable[[Any, ExportFormatter], ExportRow]


def _active_or_deleted(name: str) -> Callable[[ReliefRepositories, bool], Sequence[Any]]:
    def load(repositories: ReliefRepositories, trash: bool) -> Sequence[Any]:  # noqa: FBT001
        repository = getattr(repositories, name)
        return repository.list_deleted() if trash else repository.list_active()

    return load


_PROJECTIONS: Final[dict[ResourceFamily, _Projection]] = {
    ResourceFamily.AREAS: _Projection(_active_or_deleted("areas"), _area_row),
    ResourceFamily.GRIDS: _Projection(_active_or_deleted("grids"), _grid_row),
    ResourceFamily.VOLUNTEERS: _Projection(_active_or_deleted("volunteers"), _volunteer_row),
    ResourceFamily.SUPPLIES: _Projection(_active_or_deleted("supplies"), _supply_row),
    ResourceFamily.USERS: _Projection(_active_or_deleted("users"), _user_row),
    ResourceFamily.BLACKLIST: _Projection(
        lambda repositories, _trash: repositories.users.list_blacklisted(), _blacklist_row
    ),
    ResourceFamily.ANNOUNCEMENTS: _Projection(
        _active_or_deleted("announcements"), _announcement_row
    ),
}


def export_family(
    family: ResourceFamily,
    repositories: ReliefRepositories,
    *,
    trash: bool = False,
    formatter: ExportFormatter | None = None,
) -> ExportDocument:
    """Serialize every active (or, with ``trash``, every deleted) record of ``family``.

    The result always carries the header row, even when there are no records,
    and is prefixed with a BOM.
    """

    handler_for(family, trash=trash)
    fmt = formatter or ExportFormatter()
    projection = _PROJECTIONS[family]
    records = projection.load(repositories, trash)
    rows = [projection.row(record, fmt) for record in records]
    text = with_bom(encode_rows(COLUMNS_BY_FAMILY[family].export, rows))
    log.info("Exported %s %s records (trash=%s)", len(rows), family, trash)
    return ExportDocument(family=family, trash=trash, text=text, count=len(rows))


def render_template(family: ResourceFamily) -> str:
    """Header row with hint-bearing labels plus one example row, BOM-prefixed."""

    columns = COLUMNS_BY_FAMILY[family]
    return with_bom(encode_rows(columns.template_columns, [columns.example]))
