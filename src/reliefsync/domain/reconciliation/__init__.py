"""Row-level reconciliation of CSV batches against the record store."""

from __future__ import annotations

from .columns import COLUMNS_BY_FAMILY, FamilyColumns
from .contracts import (
    BatchResult,
    ImportMode,
    ImportOptions,
    RowContext,
    RowOutcome,
    RowRejected,
)
from .engine import ReconciliationEngine
from .export import ExportDocument, ExportFormatter, export_family, render_template
from .families import FamilyHandler, TrashableFamilyHandler, handler_for
from .fields import FieldResolver, FieldSpec, parse_bool, parse_json_field

__all__ = [
    "COLUMNS_BY_FAMILY",
    "BatchResult",
    "ExportDocument",
    "ExportFormatter",
    "FamilyColumns",
    "FamilyHandler",
    "FieldResolver",
    "FieldSpec",
    "ImportMode",
    "ImportOptions",
    "ReconciliationEngine",
    "RowContext",
    "RowOutcome",
    "RowRejected",
    "TrashableFamilyHandler",
    "export_family",
    "handler_for",
    "parse_bool",
    "parse_json_field",
    "render_template",
]
