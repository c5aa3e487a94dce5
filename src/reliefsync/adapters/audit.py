"""Audit sinks for completed imports and exports."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from reliefsync.adapters.sqlalchemy.mappings import audit_log_table
from reliefsync.adapters.sqlalchemy.unit_of_work import StartupError, session_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session

    from reliefsync.domain.ports.audit import AuditEvent

log = logging.getLogger(__name__)


class LoggingAuditSink:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    def record(self, event: AuditEvent) -> None:
        self._log.info(
            "audit actor=%s role=%s %s", event.actor_id, event.actor_role, event.describe()
        )


class SqlAlchemyAuditSink:
    """Appends one ``audit_log`` row per event.

    Write failures are logged and dropped; ``record`` never raises.
    """

    def __init__(self, sessions: Callable[[], Session] | None = None) -> None:
        self._sessions = sessions

    def record(self, event: AuditEvent) -> None:
        try:
            factory = self._sessions or session_factory()
            with factory() as session, session.begin():
                session.execute(
                    audit_log_table.insert().values(
                        actor_id=event.actor_id,
                        actor_role=str(event.actor_role),
                        action_type=str(event.operation),
                        resource_type=str(event.family),
                        trash=event.trash,
                        summary=dict(event.summary),
                    )
                )
        except (SQLAlchemyError, StartupError):
            log.warning("Could not write audit event: %s", event.describe(), exc_info=True)
            return
        log.debug("Audit event stored: %s", event.describe())
