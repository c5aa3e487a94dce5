"""JSON payloads exchanged with import callers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from reliefsync.domain.reconciliation import BatchResult


class ReliefSyncBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ImportRequest(ReliefSyncBaseModel):
    """Body of an import call: ``{"csv": "...", "skipDuplicates": true}``."""

    csv: str = ""
    # None defers to the configured default
    skip_duplicates: bool | None = Field(default=None, alias="skipDuplicates")


class ImportResultPayload(ReliefSyncBaseModel):
    imported: int
    skipped: int
    errors: list[str] | None = None

    @classmethod
    def from_result(cls, result: BatchResult) -> ImportResultPayload:
        return cls(
            imported=result.imported,
            skipped=result.skipped,
            errors=list(result.errors) or None,
        )

    def to_json(self) -> dict[str, Any]:
        """Dump with ``errors`` omitted when the batch had none."""

        return self.model_dump(exclude_none=True)
