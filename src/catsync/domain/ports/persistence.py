"""Ports for reading and writing the category tree and its assignments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection


@runtime_checkable
class CategoryRepository(Protocol):
    """Persistence contract for category nodes."""

    def exists(self, category_id: int) -> bool: ...

    def has_children(self, category_id: int) -> bool: ...

    def find_children_named(self, parent_id: int, description: str) -> list[int]:
        """Return the ids of every child of ``parent_id`` called ``description``."""
        ...

    def create(self, *, parent_id: int, description: str, ancestors: tuple[int, ...]) -> int:
        """Insert a node and return its id.

        If a concurrent writer created the same ``(parent_id, description)`` first,
        return the winner's id instead of failing.
        """
        ...

    def root_exists(self, root_id: int) -> bool: ...


@runtime_checkable
class AssignmentRepository(Protocol):
    """Persistence contract for article/category assignment rows."""

    def category_ids_for(self, article_id: int) -> set[int]: ...

    def add_many(self, article_id: int, category_ids: Collection[int]) -> None:
        """Insert assignments; an already stored pair is a no-op."""
        ...

    def remove_many(self, article_id: int, category_ids: Collection[int]) -> None: ...


@runtime_checkable
class CategoryAttributeRepository(Protocol):
    """Side table holding one attribute record per category."""

    def ensure(self, category_id: int) -> None: ...
