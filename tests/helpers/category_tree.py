"""Reusable fakes and helpers for category tree tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catsync.domain.model import CategoryNode

if TYPE_CHECKING:
    from collections.abc import Collection

    from sqlalchemy.orm import Session

ROOT_ID = 1


def insert_root(session: Session, root_id: int = ROOT_ID) -> CategoryNode:
    root = CategoryNode(id=root_id, parent_id=None, description="Root")
    session.add(root)
    session.commit()
    return root


class FakeCategoryRepository:
    """In-memory implementation of the category repository port."""

    def __init__(self, *, root_id: int | None = ROOT_ID) -> None:
        self.nodes: dict[int, CategoryNode] = {}
        self.created: list[int] = []
        self.root_checks = 0
        self._next_id = 100
        if root_id is not None:
            self.nodes[root_id] = CategoryNode(id=root_id, parent_id=None, description="Root")

    def add_node(self, description: str, *, parent_id: int, category_id: int | None = None) -> int:
        """Insert a node directly, bypassing sibling checks (used to seed broken data)."""
        if category_id is None:
            category_id = self._allocate_id()
        parent = self.nodes.get(parent_id)
        ancestors = (*parent.ancestors, parent_id) if parent is not None else (parent_id,)
        self.nodes[category_id] = CategoryNode(
            id=category_id,
            parent_id=parent_id,
            description=description,
            ancestors=ancestors,
        )
        return category_id

    def exists(self, category_id: int) -> bool:
        return category_id in self.nodes

    def has_children(self, category_id: int) -> bool:
        return any(node.parent_id == category_id for node in self.nodes.values())

    def find_children_named(self, parent_id: int, description: str) -> list[int]:
        return sorted(
            category_id
            for category_id, node in self.nodes.items()
            if node.parent_id == parent_id and node.description == description
        )

    def create(self, *, parent_id: int, description: str, ancestors: tuple[int, ...]) -> int:
        category_id = self._allocate_id()
        self.nodes[category_id] = CategoryNode(
            id=category_id,
            parent_id=parent_id,
            description=description,
            ancestors=ancestors,
        )
        self.created.append(category_id)
        return category_id

    def root_exists(self, root_id: int) -> bool:
        self.root_checks += 1
        return root_id in self.nodes and self.nodes[root_id].parent_id is None

    def _allocate_id(self) -> int:
        while self._next_id in self.nodes:
            self._next_id += 1
        allocated = self._next_id
        self._next_id += 1
        return allocated


class FakeAssignmentRepository:
    """In-memory assignment store that records every write call."""

    def __init__(self, rows: Collection[tuple[int, int]] = ()) -> None:
        self.rows: set[tuple[int, int]] = set(rows)
        self.inserts: list[tuple[int, tuple[int, ...]]] = []
        self.deletes: list[tuple[int, tuple[int, ...]]] = []
        self.fail_on_add: Exception | None = None

    @property
    def writes(self) -> int:
        return len(self.inserts) + len(self.deletes)

    def category_ids_for(self, article_id: int) -> set[int]:
        return {category_id for owner, category_id in self.rows if owner == article_id}

    def add_many(self, article_id: int, category_ids: Collection[int]) -> None:
        if self.fail_on_add is not None:
            raise self.fail_on_add
        self.inserts.append((article_id, tuple(category_ids)))
        self.rows.update((article_id, category_id) for category_id in category_ids)

    def remove_many(self, article_id: int, category_ids: Collection[int]) -> None:
        self.deletes.append((article_id, tuple(category_ids)))
        self.rows.difference_update((article_id, category_id) for category_id in category_ids)


class RecordingEvents:
    """Assignment sink that remembers what it was told, optionally failing."""

    def __init__(self, *, fail: bool = False) -> None:
        self.added: list[tuple[int, int]] = []
        self.removed: list[tuple[int, int]] = []
        self.fail = fail

    def assignment_added(self, article_id: int, category_id: int) -> None:
        self.added.append((article_id, category_id))
        if self.fail:
            raise RuntimeError("sink unavailable")

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        self.removed.append((article_id, category_id))
        if self.fail:
            raise RuntimeError("sink unavailable")
