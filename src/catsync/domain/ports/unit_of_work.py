"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from catsync.domain.ports.notifications import AssignmentEvents
    from catsync.domain.ports.persistence import (
        AssignmentRepository,
        CategoryAttributeRepository,
        CategoryRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


TRepositories = TypeVar("TRepositories", bound=RepositoryCollection)


@runtime_checkable
class UnitOfWork(Protocol[TRepositories]):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CategoryRepositories(RepositoryCollection):
    """Repositories required to resolve categories and reconcile assignments."""

    categories: CategoryRepository
    assignments: AssignmentRepository
    category_attributes: CategoryAttributeRepository
    backlog: AssignmentEvents


CategoryUnitOfWork: TypeAlias = UnitOfWork[CategoryRepositories]
