"""Reconcile an article's stored category assignments with a desired set."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catsync.domain.ports.notifications import NullAssignmentEvents

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from catsync.domain.category_resolution import CategoryResolver
    from catsync.domain.model import CategoryReference
    from catsync.domain.ports import AssignmentEvents, AssignmentRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssignmentDiff:
    """Minimal insert/delete plan turning ``current`` into ``desired``."""

    to_add: tuple[int, ...]
    to_remove: tuple[int, ...]
    unchanged: tuple[int, ...]

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def diff_assignments(current: Iterable[int], desired: Iterable[int]) -> AssignmentDiff:
    """Compute the assignment diff; ``to_add`` keeps the order of ``desired``."""

    current_ids = set(current)
    desired_ids = list(dict.fromkeys(desired))
    desired_set = set(desired_ids)
    return AssignmentDiff(
        to_add=tuple(category_id for category_id in desired_ids if category_id not in current_ids),
        to_remove=tuple(sorted(current_ids - desired_set)),
        unchanged=tuple(sorted(current_ids & desired_set)),
    )


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of one reconcile call."""

    article_id: int
    added: tuple[int, ...] = ()
    removed: tuple[int, ...] = ()
    unchanged: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class AssignmentSynchronizer:
    """Make an article's assignment rows match the categories its references resolve to."""

    def __init__(
        self,
        resolver: CategoryResolver,
        assignments: AssignmentRepository,
        *,
        events: AssignmentEvents | None = None,
    ) -> None:
        self._resolver = resolver
        self._assignments = assignments
        self._events: AssignmentEvents = events or NullAssignmentEvents()

    def resolve_all(self, references: Sequence[CategoryReference]) -> list[int]:
        """Resolve every reference, dropping duplicates but keeping first-seen order."""

        resolved = [self._resolver.resolve(reference) for reference in references]
        return list(dict.fromkeys(resolved))

    def reconcile(
        self,
        article_id: int,
        references: Sequence[CategoryReference],
    ) -> ReconcileResult:
        """Resolve ``references`` and apply the minimal diff for ``article_id``.

        Every reference is resolved before anything is written, so a resolution
        error leaves the assignments untouched. Inserts run before deletes. A
        storage failure part-way is not undone here; running the same call
        again converges.
        """

        desired = self.resolve_all(references)
        current = self._assignments.category_ids_for(article_id)
        diff = diff_assignments(current, desired)

        if diff.is_empty:
            log.debug("Assignments for article %s already up to date", article_id)
            return ReconcileResult(article_id=article_id, unchanged=diff.unchanged)

        if diff.to_add:
            self._assignments.add_many(article_id, diff.to_add)
            for category_id in diff.to_add:
                self._publish(self._events.assignment_added, article_id, category_id)

        if diff.to_remove:
            self._assignments.remove_many(article_id, diff.to_remove)
            for category_id in diff.to_remove:
                self._publish(self._events.assignment_removed, article_id, category_id)

        log.info(
            "Reconciled article %s: added=%s, removed=%s, unchanged=%s",
            article_id,
            list(diff.to_add),
            list(diff.to_remove),
            len(diff.unchanged),
        )
        return ReconcileResult(
            article_id=article_id,
            added=diff.to_add,
            removed=diff.to_remove,
            unchanged=diff.unchanged,
        )

    @staticmethod
    def _publish(notify: Callable[[int, int], None], article_id: int, category_id: int) -> None:
        try:
            notify(article_id, category_id)
        except Exception:  # noqa: BLE001
            log.exception(
                "Assignment notification failed for article %s, category %s",
                article_id,
                category_id,
            )
