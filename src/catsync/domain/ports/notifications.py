"""Ports for notifying collaborators about category and assignment changes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssignmentEvents(Protocol):
    """Fire-and-forget sink for assignment changes.

    Implementations may raise; callers log the failure and carry on.
    """

    def assignment_added(self, article_id: int, category_id: int) -> None: ...

    def assignment_removed(self, article_id: int, category_id: int) -> None: ...


@runtime_checkable
class CategoryCreatedHook(Protocol):
    """Called once for every category node created during path resolution."""

    def __call__(self, category_id: int) -> None: ...


class NullAssignmentEvents:
    """Sink that ignores every change."""

    def assignment_added(self, article_id: int, category_id: int) -> None:
        _ = (article_id, category_id)

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        _ = (article_id, category_id)


__all__ = ["AssignmentEvents", "CategoryCreatedHook", "NullAssignmentEvents"]
