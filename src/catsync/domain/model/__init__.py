"""Public domain model surface."""

from __future__ import annotations

from catsync.domain.model.assignment import AssignmentChange, AssignmentEvent
from catsync.domain.model.category import (
    DEFAULT_PATH_SEPARATOR,
    DEFAULT_ROOT_CATEGORY_ID,
    CategoryNode,
    CategoryReference,
)

__all__ = [
    "DEFAULT_PATH_SEPARATOR",
    "DEFAULT_ROOT_CATEGORY_ID",
    "AssignmentChange",
    "AssignmentEvent",
    "CategoryNode",
    "CategoryReference",
]
