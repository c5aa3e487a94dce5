"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

from reliefsync.adapters.audit import LoggingAuditSink
from reliefsync.adapters.authorization import RoleAuthorizer
from reliefsync.adapters.schema import ImportRequest, ImportResultPayload
from reliefsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReliefUnitOfWork,
    is_started,
    startup,
)
from reliefsync.config import get_reconciliation_config
from reliefsync.domain.errors import (
    EmptyPayloadError,
    PermissionDeniedError,
    UnsupportedOperationError,
)
from reliefsync.domain.model import ResourceFamily
from reliefsync.domain.ports.audit import AuditEvent
from reliefsync.domain.ports.authorization import Operation
from reliefsync.domain.ports.unit_of_work import ReliefUnitOfWork
from reliefsync.domain.reconciliation import (
    ExportDocument,
    ExportFormatter,
    ImportMode,
    ImportOptions,
    ReconciliationEngine,
    export_family,
    handler_for,
    render_template,
)
from reliefsync.tabular import decode_rows, strip_bom

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reliefsync.config import ReconciliationConfig
    from reliefsync.domain.model import Actor
    from reliefsync.domain.ports.audit import AuditSink
    from reliefsync.domain.ports.authorization import Authorizer
    from reliefsync.domain.reconciliation import BatchResult

UnitOfWorkFactory = Callable[[], ReliefUnitOfWork]

log = getLogger(__name__)


def _resolve_family(family: ResourceFamily | str) -> ResourceFamily:
    try:
        return ResourceFamily(family)
    except ValueError as exc:
        raise UnsupportedOperationError(f"Unknown resource family: {family}") from exc


def _default_unit_of_work() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyReliefUnitOfWork


def _authorize(
    authorizer: Authorizer,
    actor: Actor,
    family: ResourceFamily,
    operation: Operation,
    *,
    trash: bool,
) -> None:
    if not authorizer.may_perform(actor, family, operation, trash=trash):
        scope = f"trash {family}" if trash else str(family)
        raise PermissionDeniedError(f"Role {actor.role} may not {operation} {scope}")


def import_csv(
    family: ResourceFamily | str,
    csv_text: str,
    *,
    actor: Actor,
    skip_duplicates: bool | None = None,
    trash: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    authorizer: Authorizer | None = None,
    audit_sink: AuditSink | None = None,
    config: ReconciliationConfig | None = None,
) -> BatchResult:
    """Reconcile a CSV batch for ``family`` against the record store.

    Whole-batch problems (permission, unsupported trash variant, empty or
    malformed CSV) raise before any row is touched. Row-level problems are
    collected in the returned result.
    """

    resolved_family = _resolve_family(family)
    effective_config = config or get_reconciliation_config()
    _authorize(
        authorizer or RoleAuthorizer(), actor, resolved_family, Operation.IMPORT, trash=trash
    )

    options = ImportOptions(
        skip_duplicates=(
            effective_config.skip_duplicates_default if skip_duplicates is None else skip_duplicates
        ),
        mode=ImportMode.TRASH if trash else ImportMode.NORMAL,
    )
    engine = ReconciliationEngine.for_family(resolved_family, options)

    if not csv_text or not csv_text.strip():
        raise EmptyPayloadError("CSV payload is empty")
    rows = decode_rows(strip_bom(csv_text))
    log.info(
        "Starting %s import of %s rows: trash=%s, skip_duplicates=%s",
        resolved_family,
        len(rows),
        trash,
        options.skip_duplicates,
    )

    effective_uow = unit_of_work_factory or _default_unit_of_work()
    with effective_uow() as uow:
        result = engine.run(
            rows,
            unit_of_work=uow,
            actor=actor,
            area_proximity=effective_config.area_proximity_degrees,
            import_actor_name=effective_config.import_actor_name,
        )

    (audit_sink or LoggingAuditSink()).record(
        AuditEvent(
            actor_id=actor.id,
            actor_role=actor.role,
            operation=Operation.IMPORT,
            family=resolved_family,
            trash=trash,
            summary=result.summary(),
        )
    )
    return result


def import_payload(
    family: ResourceFamily | str,
    payload: Mapping[str, Any],
    *,
    actor: Actor,
    trash: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    authorizer: Authorizer | None = None,
    audit_sink: AuditSink | None = None,
    config: ReconciliationConfig | None = None,
) -> dict[str, Any]:
    """Import from a ``{"csv": ..., "skipDuplicates": ...}`` request body."""

    request = ImportRequest.model_validate(payload)
    result = import_csv(
        family,
        request.csv,
        actor=actor,
        skip_duplicates=request.skip_duplicates,
        trash=trash,
        unit_of_work_factory=unit_of_work_factory,
        authorizer=authorizer,
        audit_sink=audit_sink,
        config=config,
    )
    return ImportResultPayload.from_result(result).to_json()


def export_csv(
    family: ResourceFamily | str,
    *,
    actor: Actor,
    trash: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    authorizer: Authorizer | None = None,
    audit_sink: AuditSink | None = None,
    config: ReconciliationConfig | None = None,
) -> ExportDocument:
    """Export the active (or trashed) records of ``family`` as BOM-prefixed CSV."""

    resolved_family = _resolve_family(family)
    effective_config = config or get_reconciliation_config()
    _authorize(
        authorizer or RoleAuthorizer(), actor, resolved_family, Operation.EXPORT, trash=trash
    )
    handler_for(resolved_family, trash=trash)

    formatter = ExportFormatter(tz=effective_config.export_tz())
    effective_uow = unit_of_work_factory or _default_unit_of_work()
    with effective_uow() as uow:
        document = export_family(
            resolved_family, uow.repositories, trash=trash, formatter=formatter
        )

    (audit_sink or LoggingAuditSink()).record(
        AuditEvent(
            actor_id=actor.id,
            actor_role=actor.role,
            operation=Operation.EXPORT,
            family=resolved_family,
            trash=trash,
            summary={"exported": document.count},
        )
    )
    return document


def template_csv(
    family: ResourceFamily | str,
    *,
    actor: Actor,
    authorizer: Authorizer | None = None,
) -> str:
    """Downloadable import template for ``family``."""

    resolved_family = _resolve_family(family)
    _authorize(
        authorizer or RoleAuthorizer(), actor, resolved_family, Operation.TEMPLATE, trash=False
    )
    return render_template(resolved_family)
