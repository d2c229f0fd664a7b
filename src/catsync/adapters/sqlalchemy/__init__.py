"""SQLAlchemy adapter package for catsync."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAssignmentBacklog,
    SqlAlchemyAssignmentRepository,
    SqlAlchemyCategoryAttributeRepository,
    SqlAlchemyCategoryRepository,
)
from .unit_of_work import SqlAlchemyCategoryUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyAssignmentBacklog",
    "SqlAlchemyAssignmentRepository",
    "SqlAlchemyCategoryAttributeRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyCategoryUnitOfWork",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
