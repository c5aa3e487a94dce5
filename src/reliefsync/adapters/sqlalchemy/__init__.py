"""SQLAlchemy adapter package for ReliefSync."""

from __future__ import annotations

from .mappings import (
    audit_log_table,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyAnnouncementRepository,
    SqlAlchemyAreaRepository,
    SqlAlchemyGridRepository,
    SqlAlchemyRecordRepository,
    SqlAlchemySupplyRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyVolunteerRepository,
)
from .unit_of_work import (
    SqlAlchemyReliefUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAnnouncementRepository",
    "SqlAlchemyAreaRepository",
    "SqlAlchemyGridRepository",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyReliefUnitOfWork",
    "SqlAlchemySupplyRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyVolunteerRepository",
    "StartupError",
    "audit_log_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
