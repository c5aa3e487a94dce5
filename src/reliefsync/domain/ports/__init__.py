"""Domain port definitions for adapters."""

from __future__ import annotations

from .audit import AuditEvent, AuditSink
from .authorization import Authorizer, Operation
from .persistence import (
    AnnouncementRepository,
    AreaRepository,
    GridRepository,
    Repository,
    SupplyRepository,
    UserRepository,
    VolunteerRepository,
)
from .unit_of_work import (
    ReliefRepositories,
    ReliefUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AnnouncementRepository",
    "AreaRepository",
    "AuditEvent",
    "AuditSink",
    "Authorizer",
    "GridRepository",
    "Operation",
    "ReliefRepositories",
    "ReliefUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "SupplyRepository",
    "UnitOfWork",
    "UserRepository",
    "VolunteerRepository",
]
