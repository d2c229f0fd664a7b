"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catsync.adapters.sqlalchemy.mappings import (
    article_category_table,
    assignment_backlog_table,
    category_attribute_table,
    category_table,
)
from catsync.domain.errors import StorageError
from catsync.domain.model import AssignmentChange, AssignmentEvent, CategoryNode

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

    from sqlalchemy import Insert, Table
    from sqlalchemy.orm import Session

log = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as :class:`StorageError`."""

    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to {action}: {exc}") from exc


def insert_ignoring_duplicates(table: Table, dialect_name: str) -> Insert:
    """Build an INSERT that skips rows colliding with a unique key."""

    if dialect_name == "sqlite":
        return sqlite_insert(table).on_conflict_do_nothing()
    if dialect_name == "postgresql":
        return postgresql_insert(table).on_conflict_do_nothing()
    if dialect_name in {"mysql", "mariadb"}:
        return insert(table).prefix_with("IGNORE")
    raise StorageError(f"Unsupported database dialect for idempotent inserts: {dialect_name}")


def _dialect_name(session: Session) -> str:
    return session.get_bind().dialect.name


class SqlAlchemyCategoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, category_id: int) -> bool:
        stmt = select(category_table.c.id).where(category_table.c.id == category_id)
        with storage_errors(f"check category {category_id}"):
            return self.session.execute(stmt).scalar_one_or_none() is not None

    def has_children(self, category_id: int) -> bool:
        stmt = select(category_table.c.id).where(category_table.c.parent_id == category_id).limit(1)
        with storage_errors(f"check children of category {category_id}"):
            return self.session.execute(stmt).scalar_one_or_none() is not None

    def find_children_named(self, parent_id: int, description: str) -> list[int]:
        stmt = (
            select(category_table.c.id)
            .where(category_table.c.parent_id == parent_id)
            .where(category_table.c.description == description)
            .order_by(category_table.c.id)
        )
        with storage_errors(f"look up category {description!r}"):
            return list(self.session.execute(stmt).scalars())

    def create(self, *, parent_id: int, description: str, ancestors: tuple[int, ...]) -> int:
        node = CategoryNode(parent_id=parent_id, description=description, ancestors=ancestors)
        with storage_errors(f"create category {description!r}"):
            try:
                with self.session.begin_nested():
                    self.session.add(node)
            except IntegrityError:
                winners = self.find_children_named(parent_id, description)
                if len(winners) != 1:
                    raise
                log.info(
                    "Category %r under %s was created concurrently, using %s",
                    description,
                    parent_id,
                    winners[0],
                )
                return winners[0]
        return cast("int", node.id)

    def root_exists(self, root_id: int) -> bool:
        return self.exists(root_id)


class SqlAlchemyAssignmentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def category_ids_for(self, article_id: int) -> set[int]:
        stmt = select(article_category_table.c.category_id).where(
            article_category_table.c.article_id == article_id
        )
        with storage_errors(f"load assignments of article {article_id}"):
            return set(self.session.execute(stmt).scalars())

    def add_many(self, article_id: int, category_ids: Collection[int]) -> None:
        if not category_ids:
            return
        rows = [
            {"article_id": article_id, "category_id": category_id}
            for category_id in category_ids
        ]
        with storage_errors(f"assign categories to article {article_id}"):
            stmt = insert_ignoring_duplicates(article_category_table, _dialect_name(self.session))
            self.session.execute(stmt, rows)

    def remove_many(self, article_id: int, category_ids: Collection[int]) -> None:
        if not category_ids:
            return
        stmt = (
            delete(article_category_table)
            .where(article_category_table.c.article_id == article_id)
            .where(article_category_table.c.category_id.in_(list(category_ids)))
        )
        with storage_errors(f"unassign categories from article {article_id}"):
            self.session.execute(stmt)


class SqlAlchemyCategoryAttributeRepository:
    """Creates the attribute side record of a category.

    Runs in a savepoint so a failure leaves the surrounding transaction usable.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def ensure(self, category_id: int) -> None:
        with storage_errors(f"create attributes for category {category_id}"):
            stmt = insert_ignoring_duplicates(category_attribute_table, _dialect_name(self.session))
            with self.session.begin_nested():
                self.session.execute(stmt, [{"category_id": category_id}])

    def __call__(self, category_id: int) -> None:
        self.ensure(category_id)


class SqlAlchemyAssignmentBacklog:
    """Queues assignment changes for the read-optimised assignment view rebuild."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def assignment_added(self, article_id: int, category_id: int) -> None:
        self._record(AssignmentChange.ADDED, article_id, category_id)

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        self._record(AssignmentChange.REMOVED, article_id, category_id)

    def pending(self, *, limit: int = 100) -> list[AssignmentEvent]:
        stmt = (
            select(
                assignment_backlog_table.c.change,
                assignment_backlog_table.c.article_id,
                assignment_backlog_table.c.category_id,
            )
            .order_by(assignment_backlog_table.c.id)
            .limit(limit)
        )
        with storage_errors("read the assignment backlog"):
            rows = self.session.execute(stmt).all()
        return [
            AssignmentEvent(change=change, article_id=article_id, category_id=category_id)
            for change, article_id, category_id in rows
        ]

    def _record(self, change: AssignmentChange, article_id: int, category_id: int) -> None:
        stmt = insert(assignment_backlog_table).values(
            change=change,
            article_id=article_id,
            category_id=category_id,
            created_at=datetime.now(tz=UTC),
        )
        action = f"queue {change} assignment for article {article_id}"
        with storage_errors(action), self.session.begin_nested():
            self.session.execute(stmt)


if TYPE_CHECKING:
    from catsync.domain.ports import (
        AssignmentEvents,
        AssignmentRepository,
        CategoryAttributeRepository,
        CategoryCreatedHook,
        CategoryRepository,
    )

    _session_stub = cast("Session", object())
    _category_repo: CategoryRepository = SqlAlchemyCategoryRepository(_session_stub)
    _assignment_repo: AssignmentRepository = SqlAlchemyAssignmentRepository(_session_stub)
    _attribute_repo: CategoryAttributeRepository = SqlAlchemyCategoryAttributeRepository(
        _session_stub
    )
    _attribute_hook: CategoryCreatedHook = SqlAlchemyCategoryAttributeRepository(_session_stub)
    _backlog: AssignmentEvents = SqlAlchemyAssignmentBacklog(_session_stub)
