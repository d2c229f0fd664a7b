from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from catsync.adapters.sqlalchemy import start_mappers
from catsync.adapters.sqlalchemy.engine import create_database_engine
from catsync.adapters.sqlalchemy.migrations import upgrade_head
from catsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCategoryUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.category_tree import ROOT_ID, insert_root

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_database_engine("sqlite+pysqlite:///:memory:")
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
def rooted_session(sqlite_session: Session) -> Session:
    insert_root(sqlite_session, ROOT_ID)
    return sqlite_session


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCategoryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyCategoryUnitOfWork:
        return SqlAlchemyCategoryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
