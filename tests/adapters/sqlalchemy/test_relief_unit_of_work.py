from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from reliefsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReliefUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.relief import make_area

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    UowFactory = Callable[[], SqlAlchemyReliefUnitOfWork]


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyReliefUnitOfWork()


def test_startup_refuses_to_reconfigure_without_force(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    assert is_started()
    assert configured_engine() is sqlite_engine
    with pytest.raises(StartupError):
        startup(engine=sqlite_engine)

    shutdown()

    assert not is_started()


def test_commit_persists_and_rollback_discards(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.areas.add(make_area("光復鄉"))
        uow.commit()
        uow.repositories.areas.add(make_area("萬榮鄉"))
        uow.rollback()

    with sqlite_unit_of_work() as uow:
        names = [area.name for area in uow.repositories.areas.list_active()]

    assert names == ["光復鄉"]


def test_exception_inside_block_rolls_back(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.repositories.areas.add(make_area("光復鄉"))
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.areas.list_active() == []


def test_repositories_unavailable_outside_block(sqlite_unit_of_work: UowFactory) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_committed_records_stay_readable(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        area = make_area("光復鄉")
        uow.repositories.areas.add(area)
        uow.commit()

    # sessions are configured not to expire on commit
    assert area.name == "光復鄉"
