"""Domain port definitions for adapters."""

from __future__ import annotations

from .notifications import AssignmentEvents, CategoryCreatedHook, NullAssignmentEvents
from .persistence import AssignmentRepository, CategoryAttributeRepository, CategoryRepository
from .unit_of_work import (
    CategoryRepositories,
    CategoryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AssignmentEvents",
    "AssignmentRepository",
    "CategoryAttributeRepository",
    "CategoryCreatedHook",
    "CategoryRepositories",
    "CategoryRepository",
    "CategoryUnitOfWork",
    "NullAssignmentEvents",
    "RepositoryCollection",
    "UnitOfWork",
]
