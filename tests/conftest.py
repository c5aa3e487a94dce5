from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from reliefsync.adapters.sqlalchemy import start_mappers
from reliefsync.adapters.sqlalchemy.migrations import upgrade_head
from reliefsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReliefUnitOfWork,
    shutdown,
    startup,
)
from reliefsync.config import ReconciliationConfig
from reliefsync.domain.model import Actor, UserRole
from tests.helpers.relief import RecordingAuditSink

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyReliefUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyReliefUnitOfWork:
        return SqlAlchemyReliefUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(role=UserRole.SUPER_ADMIN, id="admin-1", name="Admin")


@pytest.fixture
def reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig()


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()
