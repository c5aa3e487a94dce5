"""
Base building blocks:
string identity, timestamps, soft-delete lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import uuid4

from reliefsync.domain.model.enums import DELETED_STATUS


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


@dataclass(eq=False, kw_only=True)
class Entity:
    """String identity exists immediately in the domain.

    Ids are strings so that identifiers carried by CSV rows (for example
    ``line_U6bb...`` user ids) can be stored verbatim.
    """

    ID_PREFIX: ClassVar[str] = "rec"

    id: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            self.id = new_id(self.ID_PREFIX)

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or utcnow()


class Trashable:
    """Soft-delete lifecycle shared by families with a status column.

    Subclasses declare their own ``status`` field; ``deleted`` is the only
    status value the lifecycle cares about.
    """

    status: str

    @property
    def is_deleted(self) -> bool:
        return self.status == DELETED_STATUS

    def move_to_trash(self, now: datetime | None = None) -> bool:
        """Transition to ``deleted``. Returns ``False`` when already trashed."""

        if self.is_deleted:
            return False
        self.status = type(self.status)(DELETED_STATUS)
        if isinstance(self, Entity):
            self.touch(now)
        return True
