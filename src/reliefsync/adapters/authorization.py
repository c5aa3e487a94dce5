"""Role-table authorization gate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from reliefsync.domain.model import ResourceFamily, UserRole
from reliefsync.domain.ports.authorization import Operation

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reliefsync.domain.model import Actor

log = logging.getLogger(__name__)

type Grant = frozenset[tuple[ResourceFamily, Operation]]

_ALL_OPERATIONS: Final = tuple(Operation)
_READ_OPERATIONS: Final = (Operation.EXPORT, Operation.TEMPLATE)


def _grant(
    families: tuple[ResourceFamily, ...], operations: tuple[Operation, ...]
) -> Grant:
    return frozenset((family, operation) for family in families for operation in operations)


_ADMIN_FAMILIES: Final = tuple(
    family for family in ResourceFamily if family is not ResourceFamily.BLACKLIST
)
_FIELD_FAMILIES: Final = (
    ResourceFamily.GRIDS,
    ResourceFamily.AREAS,
    ResourceFamily.VOLUNTEERS,
    ResourceFamily.SUPPLIES,
)

DEFAULT_GRANTS: Final[Mapping[UserRole, Grant]] = {
    UserRole.SUPER_ADMIN: _grant(tuple(ResourceFamily), _ALL_OPERATIONS),
    UserRole.ADMIN: _grant(_ADMIN_FAMILIES, _ALL_OPERATIONS)
    - {(ResourceFamily.USERS, Operation.IMPORT)},
    UserRole.GRID_MANAGER: _grant(_FIELD_FAMILIES, _READ_OPERATIONS),
}
DEFAULT_TRASH_ROLES: Final = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN})


@dataclass(frozen=True, slots=True)
class RoleAuthorizer:
    """Grants operations per role; trash variants additionally need a trash role."""

    grants: Mapping[UserRole, Grant] = field(default_factory=lambda: DEFAULT_GRANTS)
    trash_roles: frozenset[UserRole] = DEFAULT_TRASH_ROLES

    def may_perform(
        self,
        actor: Actor,
        family: ResourceFamily,
        operation: Operation,
        *,
        trash: bool = False,
    ) -> bool:
        allowed = (family, operation) in self.grants.get(actor.role, frozenset())
        if allowed and trash:
            allowed = actor.role in self.trash_roles
        if not allowed:
            log.info(
                "Denied %s %s%s for role %s",
                operation,
                "trash " if trash else "",
                family,
                actor.role,
            )
        return allowed
