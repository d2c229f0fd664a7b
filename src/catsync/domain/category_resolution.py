"""Resolve category references to concrete category ids.

Identifier references are taken as-is once the id is known to exist. Path
references are walked from the root downwards; every segment without a matching
child is created on the way. A path must end on a leaf, an identifier need not.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catsync.domain.errors import (
    DuplicateSiblingError,
    NotFoundError,
    NotLeafError,
    RootMissingError,
)
from catsync.domain.model.category import DEFAULT_ROOT_CATEGORY_ID

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catsync.domain.model import CategoryReference
    from catsync.domain.ports import CategoryCreatedHook, CategoryRepository

log = logging.getLogger(__name__)


class CategoryResolver:
    """Turn one :class:`CategoryReference` into one existing category id."""

    def __init__(
        self,
        categories: CategoryRepository,
        *,
        root_category_id: int = DEFAULT_ROOT_CATEGORY_ID,
        on_category_created: CategoryCreatedHook | None = None,
    ) -> None:
        self._categories = categories
        self._root_id = root_category_id
        self._on_category_created = on_category_created
        self._root_verified = False

    @property
    def root_category_id(self) -> int:
        return self._root_id

    def resolve(self, reference: CategoryReference) -> int:
        """Return the category id ``reference`` points at.

        Raises:
            NotFoundError: the identifier is unknown and there is no path to fall back on.
            DuplicateSiblingError: a path segment matches more than one sibling.
            NotLeafError: the path ends on a category that has children.
            RootMissingError: a first-level category must be created but the root is absent.
        """

        if reference.identifier is not None:
            if self._categories.exists(reference.identifier):
                return reference.identifier
            if not reference.has_path:
                raise NotFoundError(reference.identifier)
            log.info(
                "Category %s not found, resolving by path %s instead",
                reference.identifier,
                reference.display(),
            )
        return self.resolve_path(reference.path)

    def resolve_path(self, segments: Sequence[str]) -> int:
        """Walk ``segments`` from the root, creating missing categories, and return the leaf."""

        if not segments:
            raise ValueError("category path must not be empty")
        parent_id = self._root_id
        child_ancestors: tuple[int, ...] = (self._root_id,)
        for description in segments:
            category_id = self._child_id(parent_id, description, child_ancestors)
            parent_id = category_id
            child_ancestors = (*child_ancestors, category_id)

        if self._categories.has_children(parent_id):
            raise NotLeafError(parent_id, path=tuple(segments))
        return parent_id

    def _child_id(
        self,
        parent_id: int,
        description: str,
        ancestors: tuple[int, ...],
    ) -> int:
        matches = self._categories.find_children_named(parent_id, description)
        if len(matches) > 1:
            raise DuplicateSiblingError(description, parent_id=parent_id, matches=len(matches))
        if matches:
            return matches[0]

        if parent_id == self._root_id:
            self._ensure_root()
        category_id = self._categories.create(
            parent_id=parent_id,
            description=description,
            ancestors=ancestors,
        )
        log.info("Created category %s (%r) under %s", category_id, description, parent_id)
        self._notify_created(category_id)
        return category_id

    def _ensure_root(self) -> None:
        if self._root_verified:
            return
        if not self._categories.root_exists(self._root_id):
            raise RootMissingError(self._root_id)
        self._root_verified = True

    def _notify_created(self, category_id: int) -> None:
        if self._on_category_created is None:
            return
        try:
            self._on_category_created(category_id)
        except Exception:  # noqa: BLE001
            log.exception("Category-created hook failed for category %s", category_id)
