"""Shared data contracts for row reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from reliefsync.domain.errors import CsvImportError

if TYPE_CHECKING:
    from reliefsync.domain.model import Actor
    from reliefsync.domain.ports.unit_of_work import ReliefRepositories


class ImportMode(StrEnum):
    NORMAL = "normal"
    TRASH = "trash"


class RowOutcome(StrEnum):
    """What happened to a single row; every outcome except SKIPPED counts as imported."""

    IMPORTED = "imported"
    UPDATED = "updated"
    TRASHED = "trashed"
    SKIPPED = "skipped"


class RowRejected(CsvImportError):
    """A single row failed validation or resolution; the batch continues."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportOptions:
    skip_duplicates: bool = True
    mode: ImportMode = ImportMode.NORMAL

    @property
    def trash(self) -> bool:
        return self.mode is ImportMode.TRASH


@dataclass(slots=True)
class BatchResult:
    """Running tally of a batch import.

    ``imported + skipped + len(errors)`` always equals the number of data rows
    processed.
    """

    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def record(self, outcome: RowOutcome) -> None:
        if outcome is RowOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.imported += 1

    def record_error(self, line: int, message: str) -> None:
        self.errors.append(f"Row {line}: {message}")

    @property
    def processed(self) -> int:
        return self.imported + self.skipped + len(self.errors)

    def summary(self) -> dict[str, int]:
        return {"imported": self.imported, "skipped": self.skipped, "errors": len(self.errors)}


@dataclass(slots=True, kw_only=True)
class RowContext:
    """Everything a family handler needs while writing one row."""

    repositories: ReliefRepositories
    actor: Actor
    area_proximity: float
    import_actor_name: str

    @property
    def actor_name(self) -> str:
        return self.actor.display_name(self.import_actor_name)
