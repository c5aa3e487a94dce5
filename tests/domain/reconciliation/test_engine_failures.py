from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from reliefsync.adapters.sqlalchemy.repositories import SqlAlchemyGridRepository
from reliefsync.domain.model import ResourceFamily
from reliefsync.domain.reconciliation import BatchResult, RowOutcome
from tests.helpers.relief import csv_text, run_import

if TYPE_CHECKING:
    from collections.abc import Callable

    from reliefsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyReliefUnitOfWork
    from reliefsync.domain.model import Grid

    UowFactory = Callable[[], SqlAlchemyReliefUnitOfWork]

HEADER = "網格代碼,類型,災區,緯度,經度"


def test_store_failure_rolls_back_only_that_row(
    sqlite_unit_of_work: UowFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    original_add = SqlAlchemyGridRepository.add

    def flaky_add(self: SqlAlchemyGridRepository, record: Grid) -> None:
        if record.code == "B2":
            raise OperationalError("INSERT INTO grid", {}, Exception("disk I/O error"))
        original_add(self, record)

    monkeypatch.setattr(SqlAlchemyGridRepository, "add", flaky_add)
    text = csv_text(
        HEADER,
        "A1,residential,光復鄉,23.66,121.42",
        "B2,residential,鳳林鎮,23.74,121.45",
        "C3,residential,光復鄉,23.66,121.42",
    )

    result = run_import(sqlite_unit_of_work, ResourceFamily.GRIDS, text)

    assert result.imported == 2
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Row 3: Failed to write row:")
    assert "disk I/O error" in result.errors[0]
    with sqlite_unit_of_work() as uow:
        codes = sorted(grid.code for grid in uow.repositories.grids.list_active())
        assert codes == ["A1", "C3"]
        # the area created for the failed row went with it
        assert uow.repositories.areas.get_by_name("鳳林鎮") is None


def test_batch_summary_is_logged(
    sqlite_unit_of_work: UowFactory, caplog: pytest.LogCaptureFixture
) -> None:
    text = csv_text(HEADER, "A1,residential,光復鄉,23.66,121.42", ",residential,x,1,2")

    with caplog.at_level(logging.INFO, logger="reliefsync.domain.reconciliation.engine"):
        run_import(sqlite_unit_of_work, ResourceFamily.GRIDS, text)

    assert "Imported 1 grids rows (mode=normal, skipped=0, errors=1)" in caplog.text


def test_batch_result_counts_every_outcome() -> None:
    result = BatchResult()

    for outcome in RowOutcome:
        result.record(outcome)
    result.record_error(7, "Grid not found: Z9")

    assert result.summary() == {"imported": 3, "skipped": 1, "errors": 1}
    assert result.errors == ["Row 7: Grid not found: Z9"]
    assert result.processed == 5
