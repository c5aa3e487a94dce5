"""Column tables for every resource family.

Each family declares its logical fields once; the export column order, the
accepted import headers and the downloadable template are derived from those
declarations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from reliefsync.domain.model import ResourceFamily
from reliefsync.domain.reconciliation.fields import FieldSpec
from reliefsync.tabular import Column

if TYPE_CHECKING:
    from collections.abc import Mapping

ID: Final = FieldSpec("id", "ID")
CREATED_AT: Final = FieldSpec("created_at", "建立時間")
STATUS: Final = FieldSpec("status", "狀態")
NOTES: Final = FieldSpec("notes", "備註")
EMAIL: Final = FieldSpec("email", "Email")


class AreaFields:
    ID = ID
    NAME = FieldSpec("name", "災區名稱", template=("災區名稱（必填）",), required=True)
    COUNTY = FieldSpec("county", "縣市", template=("縣市（必填）",))
    TOWNSHIP = FieldSpec("township", "鄉鎮區", template=("鄉鎮區（必填）",))
    DESCRIPTION = FieldSpec("description", "描述")
    STATUS = STATUS
    CENTER_LAT = FieldSpec("center_lat", "緯度", template=("緯度（必填）",), required=True)
    CENTER_LNG = FieldSpec("center_lng", "經度", template=("經度（必填）",), required=True)
    CREATED_AT = CREATED_AT


class GridFields:
    ID = ID
    CODE = FieldSpec("code", "網格代碼", template=("網格代碼（必填）",), required=True)
    GRID_TYPE = FieldSpec(
        "grid_type",
        "類型",
        template=("類型（必填：residential/commercial/industrial）", "類型（必填）"),
    )
    AREA_NAME = FieldSpec(
        "area_name", "災區", template=("災區名稱（必填）",), aliases=("災區名稱",), required=True
    )
    VOLUNTEER_NEEDED = FieldSpec("volunteer_needed", "需求人數")
    VOLUNTEER_REGISTERED = FieldSpec("volunteer_registered", "已登記人數")
    MEETING_POINT = FieldSpec("meeting_point", "集合點")
    RISKS_NOTES = FieldSpec("risks_notes", "風險備註")
    CONTACT_INFO = FieldSpec("contact_info", "聯絡資訊")
    SUPPLIES_NEEDED = FieldSpec("supplies_needed", "物資需求")
    STATUS = STATUS
    CENTER_LAT = AreaFields.CENTER_LAT
    CENTER_LNG = AreaFields.CENTER_LNG
    CREATED_AT = CREATED_AT


class VolunteerFields:
    ID = ID
    NAME = FieldSpec("volunteer_name", "志工姓名", template=("志工姓名（必填）",), required=True)
    PHONE = FieldSpec("volunteer_phone", "電話", aliases=("聯絡電話",))
    EMAIL = FieldSpec("volunteer_email", "Email")
    AVAILABLE_TIME = FieldSpec("available_time", "可服務時間")
    SKILLS = FieldSpec("skills", "技能")
    EQUIPMENT = FieldSpec("equipment", "裝備")
    STATUS = STATUS
    NOTES = NOTES
    GRID_CODE = GridFields.CODE
    AREA_NAME = FieldSpec("area_name", "災區")
    CREATED_AT = FieldSpec("created_at", "報名時間")


class SupplyFields:
    ID = ID
    GRID_CODE = GridFields.CODE
    AREA_NAME = VolunteerFields.AREA_NAME
    SUPPLY_NAME = FieldSpec(
        "supply_name", "物資名稱", template=("物資名稱（必填）",), aliases=("物資項目",), required=True
    )
    QUANTITY = FieldSpec("quantity", "數量", template=("數量（必填）",), required=True)
    UNIT = FieldSpec("unit", "單位", template=("單位（必填）",))
    DONOR_NAME = FieldSpec(
        "donor_name", "捐贈者姓名", template=("捐贈者姓名（必填）",), required=True
    )
    DONOR_PHONE = FieldSpec(
        "donor_phone", "聯絡電話", template=("聯絡電話（必填）",), aliases=("電話",)
    )
    DONOR_EMAIL = FieldSpec("donor_email", "Email")
    DELIVERY_METHOD = FieldSpec(
        "delivery_method", "配送方式", template=("配送方式（direct/pickup/volunteer_pickup）",)
    )
    DELIVERY_ADDRESS = FieldSpec("delivery_address", "送達地址")
    DELIVERY_TIME = FieldSpec("delivery_time", "預計送達時間")
    NOTES = NOTES
    STATUS = STATUS
    CREATED_AT = FieldSpec("created_at", "捐贈時間")


class UserFields:
    ID = ID
    NAME = FieldSpec("name", "姓名", template=("姓名（必填）",), required=True)
    EMAIL = FieldSpec("email", "Email", template=("Email（必填）",))
    ROLE = FieldSpec(
        "role",
        "角色",
        template=(
            "角色（user/grid_manager/admin/super_admin/guest）",
            "角色（user/admin/moderator）",
        ),
    )
    IS_BLACKLISTED = FieldSpec("is_blacklisted", "黑名單")
    CREATED_AT = FieldSpec("created_at", "註冊時間")


class BlacklistFields:
    ID = ID
    NAME = FieldSpec("name", "姓名", template=("姓名（必填）",))
    EMAIL = UserFields.EMAIL
    ROLE = UserFields.ROLE
    BLACKLISTED_AT = FieldSpec("blacklisted_at", "加入黑名單時間")


class AnnouncementFields:
    ID = ID
    TITLE = FieldSpec("title", "標題", template=("標題（必填）",), required=True)
    BODY = FieldSpec("body", "內容", template=("內容（必填）",))
    CATEGORY = FieldSpec("category", "分類")
    IS_PINNED = FieldSpec("is_pinned", "置頂", template=("置頂（是/否）",))
    EXTERNAL_LINKS = FieldSpec("external_links", "外部連結", template=("外部連結（名稱:網址;...）",))
    CONTACT_PHONE = FieldSpec("contact_phone", "聯絡電話")
    PRIORITY = FieldSpec("priority", "優先級", template=("優先級（low/normal/high）",))
    STATUS = FieldSpec("status", "狀態", template=("狀態（active/inactive）",))
    DISPLAY_ORDER = FieldSpec("display_order", "排序")
    CREATED_AT = CREATED_AT
    UPDATED_AT = FieldSpec("updated_at", "更新時間")


@dataclass(frozen=True, slots=True)
class FamilyColumns:
    """Export layout and template for one resource family."""

    export: tuple[Column, ...]
    template: tuple[FieldSpec, ...]
    example: Mapping[str, str]

    @property
    def template_columns(self) -> tuple[Column, ...]:
        return tuple(Column(spec.name, spec.template_label) for spec in self.template)


def _export(*specs: FieldSpec) -> tuple[Column, ...]:
    return tuple(Column(spec.name, spec.label) for spec in specs)


AREA_COLUMNS: Final = FamilyColumns(
    export=_export(
        AreaFields.ID,
        AreaFields.NAME,
        AreaFields.COUNTY,
        AreaFields.TOWNSHIP,
        AreaFields.DESCRIPTION,
        AreaFields.STATUS,
        AreaFields.CENTER_LAT,
        AreaFields.CENTER_LNG,
        AreaFields.CREATED_AT,
    ),
    template=(
        AreaFields.NAME,
        AreaFields.COUNTY,
        AreaFields.TOWNSHIP,
        AreaFields.DESCRIPTION,
        AreaFields.CENTER_LAT,
        AreaFields.CENTER_LNG,
    ),
    example={
        "name": "光復鄉",
        "county": "花蓮縣",
        "township": "光復鄉",
        "description": "馬太鞍溪堰塞湖溢流影響區域",
        "center_lat": "23.6688",
        "center_lng": "121.4213",
    },
)

GRID_COLUMNS: Final = FamilyColumns(
    export=_export(
        GridFields.ID,
        GridFields.CODE,
        GridFields.GRID_TYPE,
        GridFields.AREA_NAME,
        GridFields.VOLUNTEER_NEEDED,
        GridFields.VOLUNTEER_REGISTERED,
        GridFields.MEETING_POINT,
        GridFields.RISKS_NOTES,
        GridFields.CONTACT_INFO,
        GridFields.SUPPLIES_NEEDED,
        GridFields.STATUS,
        GridFields.CENTER_LAT,
        GridFields.CENTER_LNG,
        GridFields.CREATED_AT,
    ),
    template=(
        GridFields.CODE,
        GridFields.GRID_TYPE,
        GridFields.AREA_NAME,
        GridFields.VOLUNTEER_NEEDED,
        GridFields.MEETING_POINT,
        GridFields.RISKS_NOTES,
        GridFields.CONTACT_INFO,
        GridFields.CENTER_LAT,
        GridFields.CENTER_LNG,
    ),
    example={
        "code": "A-1",
        "grid_type": "residential",
        "area_name": "光復鄉",
        "volunteer_needed": "10",
        "meeting_point": "光復車站",
        "risks_notes": "注意積水",
        "contact_info": "0912-345-678",
        "center_lat": "23.6695",
        "center_lng": "121.4230",
    },
)

VOLUNTEER_COLUMNS: Final = FamilyColumns(
    export=_export(
        VolunteerFields.ID,
        VolunteerFields.NAME,
        VolunteerFields.PHONE,
        VolunteerFields.EMAIL,
        VolunteerFields.AVAILABLE_TIME,
        VolunteerFields.SKILLS,
        VolunteerFields.EQUIPMENT,
        VolunteerFields.STATUS,
        VolunteerFields.GRID_CODE,
        VolunteerFields.AREA_NAME,
        VolunteerFields.CREATED_AT,
    ),
    template=(
        VolunteerFields.NAME,
        VolunteerFields.PHONE,
        VolunteerFields.EMAIL,
        VolunteerFields.AVAILABLE_TIME,
        VolunteerFields.SKILLS,
        VolunteerFields.EQUIPMENT,
        VolunteerFields.GRID_CODE,
        VolunteerFields.NOTES,
    ),
    example={
        "volunteer_name": "王小明",
        "volunteer_phone": "0912-345-678",
        "volunteer_email": "volunteer@example.com",
        "available_time": "週末全天",
        "skills": "清潔;搬運",
        "equipment": "鏟子;雨鞋",
        "grid_code": "A-1",
        "notes": "",
    },
)

SUPPLY_COLUMNS: Final = FamilyColumns(
    export=_export(
        SupplyFields.ID,
        SupplyFields.GRID_CODE,
        SupplyFields.AREA_NAME,
        SupplyFields.SUPPLY_NAME,
        SupplyFields.QUANTITY,
        SupplyFields.UNIT,
        SupplyFields.DONOR_NAME,
        SupplyFields.DONOR_PHONE,
        SupplyFields.DONOR_EMAIL,
        SupplyFields.DELIVERY_METHOD,
        SupplyFields.DELIVERY_ADDRESS,
        SupplyFields.DELIVERY_TIME,
        SupplyFields.NOTES,
        SupplyFields.STATUS,
        SupplyFields.CREATED_AT,
    ),
    template=(
        SupplyFields.GRID_CODE,
        SupplyFields.SUPPLY_NAME,
        SupplyFields.QUANTITY,
        SupplyFields.UNIT,
        SupplyFields.DONOR_NAME,
        SupplyFields.DONOR_PHONE,
        SupplyFields.DONOR_EMAIL,
        SupplyFields.DELIVERY_METHOD,
        SupplyFields.DELIVERY_ADDRESS,
        SupplyFields.DELIVERY_TIME,
        SupplyFields.NOTES,
    ),
    example={
        "grid_code": "A-1",
        "supply_name": "礦泉水",
        "quantity": "100",
        "unit": "瓶",
        "donor_name": "李大華",
        "donor_phone": "0923-456-789",
        "donor_email": "donor@example.com",
        "delivery_method": "direct",
        "delivery_address": "光復車站",
        "delivery_time": "2025-10-01 10:00",
        "notes": "",
    },
)

USER_COLUMNS: Final = FamilyColumns(
    export=_export(
        UserFields.ID,
        UserFields.NAME,
        UserFields.EMAIL,
        UserFields.ROLE,
        UserFields.IS_BLACKLISTED,
        UserFields.CREATED_AT,
    ),
    template=(UserFields.NAME, UserFields.EMAIL, UserFields.ROLE),
    example={"name": "張三", "email": "user@example.com", "role": "user"},
)

BLACKLIST_COLUMNS: Final = FamilyColumns(
    export=_export(
        BlacklistFields.ID,
        BlacklistFields.NAME,
        BlacklistFields.EMAIL,
        BlacklistFields.ROLE,
        BlacklistFields.BLACKLISTED_AT,
    ),
    template=(BlacklistFields.ID, BlacklistFields.NAME, BlacklistFields.EMAIL),
    example={"id": "line_U0123456789abcdef", "name": "違規使用者", "email": "spam@example.com"},
)

ANNOUNCEMENT_COLUMNS: Final = FamilyColumns(
    export=_export(
        AnnouncementFields.ID,
        AnnouncementFields.TITLE,
        AnnouncementFields.BODY,
        AnnouncementFields.CATEGORY,
        AnnouncementFields.IS_PINNED,
        AnnouncementFields.EXTERNAL_LINKS,
        AnnouncementFields.CONTACT_PHONE,
        AnnouncementFields.PRIORITY,
        AnnouncementFields.STATUS,
        AnnouncementFields.DISPLAY_ORDER,
        AnnouncementFields.CREATED_AT,
        AnnouncementFields.UPDATED_AT,
    ),
    template=(
        AnnouncementFields.TITLE,
        AnnouncementFields.BODY,
        AnnouncementFields.CATEGORY,
        AnnouncementFields.IS_PINNED,
        AnnouncementFields.EXTERNAL_LINKS,
        AnnouncementFields.CONTACT_PHONE,
        AnnouncementFields.PRIORITY,
        AnnouncementFields.STATUS,
        AnnouncementFields.DISPLAY_ORDER,
    ),
    example={
        "title": "物資發放時間調整",
        "body": "明日起物資發放改為上午九點開始",
        "category": "物資",
        "is_pinned": "是",
        "external_links": "報名表單:https://example.com/form",
        "contact_phone": "03-870-0000",
        "priority": "high",
        "status": "active",
        "display_order": "1",
    },
)

COLUMNS_BY_FAMILY: Final[Mapping[ResourceFamily, FamilyColumns]] = {
    ResourceFamily.AREAS: AREA_COLUMNS,
    ResourceFamily.GRIDS: GRID_COLUMNS,
    ResourceFamily.VOLUNTEERS: VOLUNTEER_COLUMNS,
    ResourceFamily.SUPPLIES: SUPPLY_COLUMNS,
    ResourceFamily.USERS: USER_COLUMNS,
    ResourceFamily.BLACKLIST: BLACKLIST_COLUMNS,
    ResourceFamily.ANNOUNCEMENTS: ANNOUNCEMENT_COLUMNS,
}
