from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from reliefsync.adapters.audit import LoggingAuditSink, SqlAlchemyAuditSink
from reliefsync.adapters.sqlalchemy.mappings import audit_log_table
from reliefsync.adapters.sqlalchemy.unit_of_work import shutdown
from reliefsync.domain.model import ResourceFamily, UserRole
from reliefsync.domain.ports.audit import AuditEvent, AuditSink
from reliefsync.domain.ports.authorization import Operation

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def _event(**overrides: object) -> AuditEvent:
    fields: dict[str, object] = {
        "actor_id": "admin-1",
        "actor_role": UserRole.ADMIN,
        "operation": Operation.IMPORT,
        "family": ResourceFamily.GRIDS,
        "summary": {"imported": 2, "skipped": 1, "errors": 0},
    }
    fields.update(overrides)
    return AuditEvent(**fields)  # type: ignore[arg-type]


def test_event_description_mentions_scope_and_counts() -> None:
    assert _event().describe() == "import grids (imported=2, skipped=1, errors=0)"
    assert _event(trash=True, summary={}).describe() == "import trash grids"


def test_logging_sink_writes_one_line(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingAuditSink()

    with caplog.at_level(logging.INFO, logger="reliefsync.adapters.audit"):
        sink.record(_event())

    assert isinstance(sink, AuditSink)
    assert "audit actor=admin-1 role=admin import grids" in caplog.text


def test_sqlalchemy_sink_appends_rows(sqlite_engine: Engine) -> None:
    sessions = sessionmaker(bind=sqlite_engine)
    sink = SqlAlchemyAuditSink(sessions)

    sink.record(_event())
    sink.record(_event(operation=Operation.EXPORT, trash=True, summary={"exported": 4}))

    with sqlite_engine.connect() as connection:
        rows = connection.execute(
            select(
                audit_log_table.c.action_type,
                audit_log_table.c.resource_type,
                audit_log_table.c.trash,
                audit_log_table.c.summary,
            ).order_by(audit_log_table.c.action_type)
        ).all()

    assert [tuple(row) for row in rows] == [
        ("export", "grids", True, {"exported": 4}),
        ("import", "grids", False, {"imported": 2, "skipped": 1, "errors": 0}),
    ]


def test_sqlalchemy_sink_without_store_only_warns(caplog: pytest.LogCaptureFixture) -> None:
    shutdown()
    sink = SqlAlchemyAuditSink()

    with caplog.at_level(logging.WARNING, logger="reliefsync.adapters.audit"):
        sink.record(_event())

    assert "Could not write audit event: import grids" in caplog.text
