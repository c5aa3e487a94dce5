"""Batch driver for CSV imports.

Rows are reconciled one at a time, each inside its own commit, so a failing row
is rolled back and reported without disturbing the rows before or after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from reliefsync.domain.reconciliation.contracts import (
    BatchResult,
    ImportOptions,
    RowContext,
    RowRejected,
)
from reliefsync.domain.reconciliation.families import handler_for

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reliefsync.domain.model import Actor, ResourceFamily
    from reliefsync.domain.ports.unit_of_work import ReliefUnitOfWork
    from reliefsync.domain.reconciliation.families import FamilyHandler
    from reliefsync.tabular import CsvRow

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    handler: FamilyHandler[Any, Any, Any]
    options: ImportOptions

    @classmethod
    def for_family(cls, family: ResourceFamily, options: ImportOptions) -> ReconciliationEngine:
        """Select the family policy once for the whole batch."""

        return cls(handler=handler_for(family, trash=options.trash), options=options)

    def run(
        self,
        rows: Iterable[CsvRow],
        *,
        unit_of_work: ReliefUnitOfWork,
        actor: Actor,
        area_proximity: float,
        import_actor_name: str,
    ) -> BatchResult:
        result = BatchResult()
        ctx = RowContext(
            repositories=unit_of_work.repositories,
            actor=actor,
            area_proximity=area_proximity,
            import_actor_name=import_actor_name,
        )
        for row in rows:
            self._process_row(row, ctx, unit_of_work, result)

        log.info(
            "Imported %s %s rows (mode=%s, skipped=%s, errors=%s)",
            result.imported,
            self.handler.family,
            self.options.mode,
            result.skipped,
            len(result.errors),
        )
        return result

    def _process_row(
        self,
        row: CsvRow,
        ctx: RowContext,
        unit_of_work: ReliefUnitOfWork,
        result: BatchResult,
    ) -> None:
        try:
            outcome = self.handler.reconcile(row, ctx, self.options)
            unit_of_work.commit()
        except RowRejected as exc:
            unit_of_work.rollback()
            log.debug("Row %s rejected: %s", row.line, exc.message)
            result.record_error(row.line, exc.message)
            return
        except Exception as exc:  # noqa: BLE001
            # Store failures are reported per row; the batch keeps going.
            unit_of_work.rollback()
            log.exception("Row %s failed while writing %s", row.line, self.handler.family)
            result.record_error(row.line, f"Failed to write row: {exc}")
            return
        log.debug("Row %s: %s", row.line, outcome)
        result.record(outcome)
