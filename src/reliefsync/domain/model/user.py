"""User accounts and the caller identity used by import/export runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from reliefsync.domain.model.base import Entity, utcnow
from reliefsync.domain.model.enums import UserRole

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class User(Entity):
    ID_PREFIX: ClassVar[str] = "user"

    name: str
    email: str | None = None
    role: UserRole = UserRole.USER
    is_blacklisted: bool = False
    blacklisted_at: datetime | None = None

    def add_to_blacklist(self, now: datetime | None = None) -> bool:
        """Flag the account. Returns ``False`` when it was already blacklisted."""

        if self.is_blacklisted:
            return False
        moment = now or utcnow()
        self.is_blacklisted = True
        self.blacklisted_at = moment
        self.touch(moment)
        return True


@dataclass(frozen=True, slots=True)
class Actor:
    """Who is running an import or export."""

    role: UserRole
    id: str | None = None
    name: str | None = None

    def display_name(self, default: str) -> str:
        return self.name or default
