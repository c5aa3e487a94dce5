"""Audit sink receiving one event per completed import or export."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from reliefsync.domain.model import ResourceFamily, UserRole
    from reliefsync.domain.ports.authorization import Operation


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditEvent:
    actor_id: str | None
    actor_role: UserRole
    operation: Operation
    family: ResourceFamily
    trash: bool = False
    summary: dict[str, int] = field(default_factory=dict[str, int])

    def describe(self) -> str:
        scope = f"trash {self.family}" if self.trash else str(self.family)
        counts = ", ".join(f"{key}={value}" for key, value in self.summary.items())
        return f"{self.operation} {scope} ({counts})" if counts else f"{self.operation} {scope}"


@runtime_checkable
class AuditSink(Protocol):
    """Fire-and-forget receiver; implementations must not raise."""

    def record(self, event: AuditEvent) -> None: ...
