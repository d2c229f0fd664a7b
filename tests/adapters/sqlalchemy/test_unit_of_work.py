from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catsync.adapters.sqlalchemy.engine import create_database_engine
from catsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCategoryUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.category_tree import ROOT_ID, insert_root

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCategoryUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_database_engine("sqlite+pysqlite:///:memory:")
    engine_b = create_database_engine("sqlite+pysqlite:///:memory:")

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_startup_from_database_uri() -> None:
    startup(database_uri="sqlite+pysqlite:///:memory:")

    engine = configured_engine()
    assert engine is not None
    assert engine.dialect.name == "sqlite"


def test_repositories_require_an_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCategoryUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_committed_changes_are_visible_to_next_unit_of_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyCategoryUnitOfWork() as uow:
        insert_root(uow.session)
    with SqlAlchemyCategoryUnitOfWork() as uow:
        category_id = uow.repositories.categories.create(
            parent_id=ROOT_ID, description="English", ancestors=(ROOT_ID,)
        )
        uow.repositories.assignments.add_many(500, [category_id])
        uow.commit()

    with SqlAlchemyCategoryUnitOfWork() as uow:
        assert uow.repositories.categories.exists(category_id)
        assert uow.repositories.assignments.category_ids_for(500) == {category_id}


def test_exception_rolls_back_pending_changes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyCategoryUnitOfWork() as uow:
        insert_root(uow.session)

    with pytest.raises(RuntimeError), SqlAlchemyCategoryUnitOfWork() as uow:
        uow.repositories.categories.create(
            parent_id=ROOT_ID, description="English", ancestors=(ROOT_ID,)
        )
        raise RuntimeError("abort")

    with SqlAlchemyCategoryUnitOfWork() as uow:
        assert uow.repositories.categories.find_children_named(ROOT_ID, "English") == []
