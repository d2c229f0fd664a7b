"""Article-to-category assignment changes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AssignmentChange(StrEnum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class AssignmentEvent:
    """A single change to the (article, category) pairs, as published to sinks."""

    change: AssignmentChange
    article_id: int
    category_id: int
