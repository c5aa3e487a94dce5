from __future__ import annotations

from typing import TYPE_CHECKING

from reliefsync.domain.model import (
    AnnouncementPriority,
    DeliveryMethod,
    ResourceFamily,
    User,
    UserRole,
    VolunteerStatus,
)
from tests.helpers.relief import csv_text, run_import, seed_grid

if TYPE_CHECKING:
    from collections.abc import Callable

    from reliefsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyReliefUnitOfWork

    UowFactory = Callable[[], SqlAlchemyReliefUnitOfWork]

VOLUNTEER_HEADER = "志工姓名（必填）,電話,Email,技能,網格代碼（必填）"
SUPPLY_HEADER = "ID,網格代碼（必填）,物資名稱（必填）,數量（必填）,單位,捐贈者姓名（必填）,聯絡電話（必填）"
ANNOUNCEMENT_HEADER = "標題（必填）,內容（必填）,置頂（是/否）,外部連結（名稱:網址;...）,優先級（low/normal/high）"


def test_area_import_skips_existing_names(sqlite_unit_of_work: UowFactory) -> None:
    text = csv_text(
        "災區名稱（必填）,縣市（必填）,鄉鎮區（必填）,緯度（必填）,經度（必填）",
        "光復鄉,花蓮縣,光復鄉,23.6688,121.4213",
        "光復鄉,花蓮縣,光復鄉,23.6688,121.4213",
    )

    result = run_import(sqlite_unit_of_work, ResourceFamily.AREAS, text)

    assert result.summary() == {"imported": 1, "skipped": 1, "errors": 0}
    with sqlite_unit_of_work() as uow:
        area = uow.repositories.areas.get_by_name("光復鄉")
        assert area is not None
        assert area.county == "花蓮縣"


def test_volunteer_import_requires_existing_grid(sqlite_unit_of_work: UowFactory) -> None:
    text = csv_text(VOLUNTEER_HEADER, "王小明,0912345678,,清潔;搬運,Z9")

    result = run_import(sqlite_unit_of_work, ResourceFamily.VOLUNTEERS, text)

    assert result.imported == 0
    assert result.errors == ["Row 2: Grid not found: Z9"]
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.volunteers.list_active() == []


def test_volunteer_import_links_grid_and_dedups_by_phone(
    sqlite_unit_of_work: UowFactory,
) -> None:
    grid_id = seed_grid(sqlite_unit_of_work, "A1")
    text = csv_text(
        VOLUNTEER_HEADER,
        "王小明,0912345678,ming@example.com,清潔;搬運,A1",
        "王小明,0912345678,ming@example.com,清潔;搬運,A1",
        "李小華,,,,A1",
        "李小華,,,,A1",
    )

    result = run_import(sqlite_unit_of_work, ResourceFamily.VOLUNTEERS, text)

    # rows without a phone have no natural key and are always inserted
    assert result.summary() == {"imported": 3, "skipped": 1, "errors": 0}
    with sqlite_unit_of_work() as uow:
        registration = uow.repositories.volunteers.find_by_phone_and_grid("0912345678", grid_id)
        assert registration is not None
        assert registration.grid.code == "A1"
        assert registration.skills == ["清潔", "搬運"]
        assert registration.status is VolunteerStatus.PENDING
        assert registration.created_by_id == "admin-1"


def test_volunteer_skills_keep_colons_inside_items(sqlite_unit_of_work: UowFactory) -> None:
    seed_grid(sqlite_unit_of_work, "A1")

    run_import(
        sqlite_unit_of_work,
        ResourceFamily.VOLUNTEERS,
        csv_text(VOLUNTEER_HEADER, "王小明,0912345678,,急救:初級;搬運,A1"),
    )

    with sqlite_unit_of_work() as uow:
        (registration,) = uow.repositories.volunteers.list_active()
        assert registration.skills == ["急救:初級", "搬運"]


def test_supply_import_defaults_unit(sqlite_unit_of_work: UowFactory) -> None:
    seed_grid(sqlite_unit_of_work, "A1")
    text = csv_text(
        "網格代碼（必填）,物資項目,數量（必填）,捐贈者姓名（必填）,電話,配送方式（direct/pickup/volunteer_pickup）",
        "A1,礦泉水,100,李大華,0923456789,pickup",
    )

    result = run_import(sqlite_unit_of_work, ResourceFamily.SUPPLIES, text)

    assert result.imported == 1
    with sqlite_unit_of_work() as uow:
        (donation,) = uow.repositories.supplies.list_active()
        assert donation.supply_name == "礦泉水"
        assert donation.unit == "個"
        assert donation.delivery_method is DeliveryMethod.PICKUP


def test_supply_import_updates_by_explicit_id(sqlite_unit_of_work: UowFactory) -> None:
    seed_grid(sqlite_unit_of_work, "A1")
    run_import(
        sqlite_unit_of_work,
        ResourceFamily.SUPPLIES,
        csv_text(SUPPLY_HEADER, "donation_1,A1,礦泉水,100,瓶,李大華,0923456789"),
    )

    result = run_import(
        sqlite_unit_of_work,
        ResourceFamily.SUPPLIES,
        csv_text(SUPPLY_HEADER, "donation_1,A1,礦泉水,250,箱,李大華,0923456789"),
    )

    assert result.summary() == {"imported": 1, "skipped": 0, "errors": 0}
    with sqlite_unit_of_work() as uow:
        (donation,) = uow.repositories.supplies.list_active()
        assert donation.id == "donation_1"
        assert donation.quantity == 250
        assert donation.unit == "箱"
        assert donation.updated_at is not None


def test_supply_import_skips_natural_key_duplicates(sqlite_unit_of_work: UowFactory) -> None:
    seed_grid(sqlite_unit_of_work, "A1")
    text = csv_text(SUPPLY_HEADER, ",A1,礦泉水,100,瓶,李大華,0923456789")
    run_import(sqlite_unit_of_work, ResourceFamily.SUPPLIES, text)

    again = run_import(sqlite_unit_of_work, ResourceFamily.SUPPLIES, text)

    assert again.summary() == {"imported": 0, "skipped": 1, "errors": 0}


def test_user_import_matches_email_and_reads_blacklist_flag(
    sqlite_unit_of_work: UowFactory,
) -> None:
    text = csv_text(
        "姓名（必填）,Email,角色（user/grid_manager/admin/super_admin/guest）,黑名單",
        "張三,zhang@example.com,grid_manager,否",
        "張三二號,zhang@example.com,user,否",
        "騷擾者,,user,是",
    )

    result = run_import(sqlite_unit_of_work, ResourceFamily.USERS, text)

    assert result.summary() == {"imported": 2, "skipped": 1, "errors": 0}
    with sqlite_unit_of_work() as uow:
        users = uow.repositories.users
        zhang = users.get_by_email("zhang@example.com")
        assert zhang is not None
        assert zhang.name == "張三"
        assert zhang.role is UserRole.GRID_MANAGER
        flagged = users.get_by_name("騷擾者")
        assert flagged is not None
        assert flagged.is_blacklisted is True
        assert flagged.blacklisted_at is not None


def test_user_import_rejects_unknown_role(sqlite_unit_of_work: UowFactory) -> None:
    text = csv_text("姓名,角色", "張三,moderator")

    result = run_import(sqlite_unit_of_work, ResourceFamily.USERS, text)

    assert result.imported == 0
    assert result.errors[0].startswith("Row 2: Invalid 角色: moderator")


def _seed_user(uow_factory: UowFactory, **fields: str) -> str:
    with uow_factory() as uow:
        user = User(**fields)
        uow.repositories.users.add(user)
        uow.commit()
        return user.id


def test_blacklist_import_flags_existing_user_once(sqlite_unit_of_work: UowFactory) -> None:
    user_id = _seed_user(sqlite_unit_of_work, name="違規使用者", email="spam@example.com")
    text = csv_text("ID,姓名,Email", ",違規使用者,spam@example.com")

    first = run_import(sqlite_unit_of_work, ResourceFamily.BLACKLIST, text)
    second = run_import(sqlite_unit_of_work, ResourceFamily.BLACKLIST, text)

    assert first.summary() == {"imported": 1, "skipped": 0, "errors": 0}
    assert second.summary() == {"imported": 0, "skipped": 1, "errors": 0}
    with sqlite_unit_of_work() as uow:
        user = uow.repositories.users.get(user_id)
        assert user is not None
        assert user.is_blacklisted is True


def test_blacklist_import_creates_unknown_ids(sqlite_unit_of_work: UowFactory) -> None:
    text = csv_text("ID,姓名（必填）,Email", "line_U0123,,")

    result = run_import(sqlite_unit_of_work, ResourceFamily.BLACKLIST, text)

    assert result.imported == 1
    with sqlite_unit_of_work() as uow:
        user = uow.repositories.users.get("line_U0123")
        assert user is not None
        assert user.name == "line_U0123"
        assert user.is_blacklisted is True


def test_blacklist_import_reports_unknown_email_and_missing_keys(
    sqlite_unit_of_work: UowFactory,
) -> None:
    text = csv_text("ID,姓名,Email", ",ghost,ghost@example.com", ",nobody,")

    result = run_import(sqlite_unit_of_work, ResourceFamily.BLACKLIST, text)

    assert result.imported == 0
    assert result.errors[0] == "Row 2: User not found: ghost@example.com"
    assert result.errors[1].startswith("Row 3: Missing required fields (ID or Email)")


def test_announcement_import_updates_by_title(sqlite_unit_of_work: UowFactory) -> None:
    run_import(
        sqlite_unit_of_work,
        ResourceFamily.ANNOUNCEMENTS,
        csv_text(ANNOUNCEMENT_HEADER, "物資發放,上午九點,否,,normal"),
    )

    result = run_import(
        sqlite_unit_of_work,
        ResourceFamily.ANNOUNCEMENTS,
        csv_text(ANNOUNCEMENT_HEADER, "物資發放,上午十點,是,報名表單:https://example.com/form,high"),
    )

    assert result.summary() == {"imported": 1, "skipped": 0, "errors": 0}
    with sqlite_unit_of_work() as uow:
        (announcement,) = uow.repositories.announcements.list_active()
        assert announcement.body == "上午十點"
        assert announcement.is_pinned is True
        assert announcement.priority is AnnouncementPriority.HIGH
        assert announcement.external_links == [
            {"name": "報名表單", "url": "https://example.com/form"}
        ]


def test_announcement_order_falls_back_to_zero_when_unparseable(
    sqlite_unit_of_work: UowFactory,
) -> None:
    result = run_import(
        sqlite_unit_of_work,
        ResourceFamily.ANNOUNCEMENTS,
        csv_text("標題,內容,排序", "停水通知,明日停水,first", "停電通知,今晚停電,"),
    )

    assert result.summary() == {"imported": 2, "skipped": 0, "errors": 0}
    with sqlite_unit_of_work() as uow:
        announcements = uow.repositories.announcements
        water = announcements.get_by_title("停水通知")
        power = announcements.get_by_title("停電通知")
        assert water is not None
        assert water.display_order == 0
        assert power is not None
        assert power.display_order is None
