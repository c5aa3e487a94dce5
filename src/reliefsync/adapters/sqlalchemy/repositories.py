"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from reliefsync.adapters.sqlalchemy.mappings import (
    announcement_table,
    disaster_area_table,
    grid_table,
    supply_donation_table,
    user_account_table,
    volunteer_registration_table,
)
from reliefsync.domain.model import (
    DELETED_STATUS,
    Announcement,
    DisasterArea,
    Entity,
    Grid,
    SupplyDonation,
    User,
    VolunteerRegistration,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select, Table
    from sqlalchemy.orm import Session


class SqlAlchemyRecordRepository[TRecord: Entity]:
    """Shared record access for one mapped table.

    Natural-key lookups that could match several rows return the one with the
    smallest id so repeated runs resolve ties the same way.
    """

    def __init__(self, session: Session, record_cls: type[TRecord], table: Table) -> None:
        self.session = session
        self._record_cls = record_cls
        self._table = table

    def get(self, record_id: str) -> TRecord | None:
        return self.session.get(self._record_cls, record_id)

    def add(self, record: TRecord) -> None:
        self.session.add(record)

    def add_if_absent(self, record: TRecord) -> bool:
        if self.get(record.id) is not None:
            return False
        self.add(record)
        return True

    def list_active(self) -> Sequence[TRecord]:
        stmt = self._newest_first()
        if "status" in self._table.c:
            stmt = stmt.where(self._table.c.status != DELETED_STATUS)
        return self.session.execute(stmt).scalars().all()

    def list_deleted(self) -> Sequence[TRecord]:
        if "status" not in self._table.c:
            return []
        stmt = self._newest_first().where(self._table.c.status == DELETED_STATUS)
        return self.session.execute(stmt).scalars().all()

    def _select(self) -> Select[tuple[TRecord]]:
        return select(self._record_cls)

    def _newest_first(self) -> Select[tuple[TRecord]]:
        return self._select().order_by(self._table.c.created_at.desc(), self._table.c.id.desc())

    def _first(self, stmt: Select[tuple[TRecord]]) -> TRecord | None:
        return self.session.execute(stmt.order_by(self._table.c.id).limit(1)).scalars().first()


class SqlAlchemyAreaRepository(SqlAlchemyRecordRepository[DisasterArea]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, DisasterArea, disaster_area_table)

    def get_by_name(self, name: str) -> DisasterArea | None:
        return self._first(self._select().where(disaster_area_table.c.name == name))

    def find_near(
        self, name: str, *, lat: float, lng: float, tolerance: float
    ) -> DisasterArea | None:
        columns = disaster_area_table.c
        stmt = (
            self._select()
            .where(columns.name == name)
            .where(columns.center_lat.between(lat - tolerance, lat + tolerance))
            .where(columns.center_lng.between(lng - tolerance, lng + tolerance))
        )
        return self._first(stmt)


class SqlAlchemyGridRepository(SqlAlchemyRecordRepository[Grid]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Grid, grid_table)

    def get_by_code(self, code: str) -> Grid | None:
        return self._first(self._select().where(grid_table.c.code == code))


class SqlAlchemyVolunteerRepository(SqlAlchemyRecordRepository[VolunteerRegistration]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, VolunteerRegistration, volunteer_registration_table)

    def find_by_phone_and_grid(
        self, phone: str | None, grid_id: str
    ) -> VolunteerRegistration | None:
        if phone is None:
            return None
        columns = volunteer_registration_table.c
        stmt = (
            self._select()
            .where(columns.volunteer_phone == phone)
            .where(columns._grid_id == grid_id)  # noqa: SLF001
        )
        return self._first(stmt)


class SqlAlchemySupplyRepository(SqlAlchemyRecordRepository[SupplyDonation]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, SupplyDonation, supply_donation_table)

    def find_by_natural_key(
        self, *, phone: str | None, supply_name: str, grid_id: str
    ) -> SupplyDonation | None:
        if phone is None:
            return None
        columns = supply_donation_table.c
        stmt = (
            self._select()
            .where(columns.donor_phone == phone)
            .where(columns.supply_name == supply_name)
            .where(columns._grid_id == grid_id)  # noqa: SLF001
        )
        return self._first(stmt)


class SqlAlchemyUserRepository(SqlAlchemyRecordRepository[User]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, User, user_account_table)

    def get_by_email(self, email: str) -> User | None:
        return self._first(self._select().where(user_account_table.c.email == email))

    def get_by_name(self, name: str) -> User | None:
        return self._first(self._select().where(user_account_table.c.name == name))

    def list_blacklisted(self) -> Sequence[User]:
        columns = user_account_table.c
        stmt = (
            self._select()
            .where(columns.is_blacklisted.is_(True))
            .order_by(columns.blacklisted_at.desc(), columns.id.desc())
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyAnnouncementRepository(SqlAlchemyRecordRepository[Announcement]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Announcement, announcement_table)

    def get_by_title(self, title: str) -> Announcement | None:
        return self._first(self._select().where(announcement_table.c.title == title))
