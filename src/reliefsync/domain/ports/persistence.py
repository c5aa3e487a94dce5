"""Ports for persisting relief records (the record store)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from reliefsync.domain.model import (
    Announcement,
    DisasterArea,
    Grid,
    SupplyDonation,
    User,
    VolunteerRegistration,
)

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class Repository[TRecord](Protocol):
    """Minimal record-access contract shared by every family."""

    def get(self, record_id: str) -> TRecord | None: ...

    def add(self, record: TRecord) -> None: ...

    def add_if_absent(self, record: TRecord) -> bool:
        """Insert unless a record with the same id exists ("insert or ignore")."""
        ...

    def list_active(self) -> Sequence[TRecord]:
        """Non-deleted records, newest first."""
        ...

    def list_deleted(self) -> Sequence[TRecord]:
        """Trashed records, newest first."""
        ...


@runtime_checkable
class AreaRepository(Repository[DisasterArea], Protocol):
    def get_by_name(self, name: str) -> DisasterArea | None: ...

    def find_near(
        self, name: str, *, lat: float, lng: float, tolerance: float
    ) -> DisasterArea | None: ...


@runtime_checkable
class GridRepository(Repository[Grid], Protocol):
    def get_by_code(self, code: str) -> Grid | None: ...


@runtime_checkable
class VolunteerRepository(Repository[VolunteerRegistration], Protocol):
    def find_by_phone_and_grid(
        self, phone: str | None, grid_id: str
    ) -> VolunteerRegistration | None: ...


@runtime_checkable
class SupplyRepository(Repository[SupplyDonation], Protocol):
    def find_by_natural_key(
        self, *, phone: str | None, supply_name: str, grid_id: str
    ) -> SupplyDonation | None: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    def get_by_email(self, email: str) -> User | None: ...

    def get_by_name(self, name: str) -> User | None: ...

    def list_blacklisted(self) -> Sequence[User]: ...


@runtime_checkable
class AnnouncementRepository(Repository[Announcement], Protocol):
    def get_by_title(self, title: str) -> Announcement | None: ...
