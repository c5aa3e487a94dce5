"""Authorization gate consulted before any import or export runs."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from reliefsync.domain.model import Actor, ResourceFamily


class Operation(StrEnum):
    IMPORT = "import"
    EXPORT = "export"
    TEMPLATE = "template"


@runtime_checkable
class Authorizer(Protocol):
    def may_perform(
        self,
        actor: Actor,
        family: ResourceFamily,
        operation: Operation,
        *,
        trash: bool = False,
    ) -> bool: ...
