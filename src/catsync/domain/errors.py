"""Errors raised while resolving categories and reconciling assignments."""

from __future__ import annotations


class CategoryAssignmentError(Exception):
    """Base class for category resolution and assignment failures."""


class NotFoundError(CategoryAssignmentError):
    """Raised when a referenced category identifier does not exist."""

    def __init__(self, category_id: int) -> None:
        super().__init__(f"Category with id {category_id} could not be found")
        self.category_id = category_id


class DuplicateSiblingError(CategoryAssignmentError):
    """Raised when more than one sibling shares the same description.

    This signals broken data rather than bad input; it is surfaced the same way.
    """

    def __init__(self, description: str, *, parent_id: int, matches: int) -> None:
        super().__init__(
            f"Category with name {description!r} is duplicated "
            f"({matches} matches under parent {parent_id})"
        )
        self.description = description
        self.parent_id = parent_id
        self.matches = matches


class NotLeafError(CategoryAssignmentError):
    """Raised when a category path resolves to a node that has children."""

    def __init__(self, category_id: int, *, path: tuple[str, ...] = ()) -> None:
        super().__init__(f"Category with id {category_id} is not a leaf")
        self.category_id = category_id
        self.path = path


class RootMissingError(CategoryAssignmentError):
    """Raised when the root category is absent. Needs out-of-band repair."""

    def __init__(self, root_id: int) -> None:
        super().__init__(f"Root category {root_id} does not exist")
        self.root_id = root_id


class StorageError(CategoryAssignmentError):
    """Raised when the underlying store fails; usually safe to retry the whole call."""
