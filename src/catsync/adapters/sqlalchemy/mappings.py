"""SQLAlchemy mapping metadata for the catsync domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from catsync.domain.model import AssignmentChange, CategoryNode

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class AncestorPathType(TypeDecorator[tuple[int, ...]]):
    """Materialized path stored as ``|1|5|7|`` (root-most first)."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: tuple[int, ...] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if not value:
            return None
        return "|" + "|".join(str(ancestor) for ancestor in value) + "|"

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[int, ...]:
        _ = dialect
        if not value:
            return ()
        return tuple(int(part) for part in value.strip("|").split("|") if part)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

category_table = Table(
    "category",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("parent_id", Integer, ForeignKey("category.id"), nullable=True),
    Column("path", AncestorPathType, key="ancestors", nullable=True),
    Column("description", String(255), nullable=False),
    Column("active", Boolean, nullable=False, default=True),
    Column("added", UTCDateTime, nullable=False),
    Column("changed", UTCDateTime, nullable=False),
    UniqueConstraint("parent_id", "description"),
    Index("ix_category_parent_id", "parent_id"),
)

category_attribute_table = Table(
    "category_attribute",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("category_id", Integer, ForeignKey("category.id"), nullable=False),
    UniqueConstraint("category_id"),
)

article_category_table = Table(
    "article_category",
    mapper_registry.metadata,
    Column("article_id", Integer, primary_key=True, autoincrement=False),
    Column(
        "category_id",
        Integer,
        ForeignKey("category.id"),
        primary_key=True,
        autoincrement=False,
    ),
    Index("ix_article_category_category_id", "category_id"),
)

assignment_backlog_table = Table(
    "assignment_backlog",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("change", Enum(AssignmentChange, native_enum=False, length=16), nullable=False),
    Column("article_id", Integer, nullable=False),
    Column("category_id", Integer, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(CategoryNode, category_table)
    configure_mappers()
    return mapper_registry

