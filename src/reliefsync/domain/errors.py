"""Errors surfaced past the reconciliation boundary."""

from __future__ import annotations


class ReliefSyncError(RuntimeError):
    """Base class for failures reported to callers of import/export services."""


class CsvImportError(ReliefSyncError):
    """The import payload could not be processed at all; no row was touched."""


class EmptyPayloadError(CsvImportError):
    """Raised when the request carries no CSV text."""


class MalformedCsvError(CsvImportError):
    """Raised when the CSV text cannot be parsed structurally."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        super().__init__(f"{message} (line {line})" if line is not None else message)


class PermissionDeniedError(ReliefSyncError):
    """Raised when the authorization gate refuses an operation."""


class UnsupportedOperationError(ReliefSyncError):
    """Raised for unknown families or trash variants a family does not offer."""
