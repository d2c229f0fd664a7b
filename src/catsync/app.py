"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from catsync.adapters.notifications import FanOutAssignmentEvents, QueueAssignmentEvents
from catsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCategoryUnitOfWork,
    is_started,
    startup,
)
from catsync.config import get_category_tree_config
from catsync.domain.assignment_sync import AssignmentSynchronizer
from catsync.domain.category_resolution import CategoryResolver
from catsync.domain.ports.unit_of_work import CategoryUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catsync.config import CategoryTreeConfig
    from catsync.domain.assignment_sync import ReconcileResult
    from catsync.domain.model import CategoryReference
    from catsync.domain.ports import AssignmentEvents

UnitOfWorkFactory = Callable[[], CategoryUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyCategoryUnitOfWork


def write_article_categories(
    article_id: int,
    references: Sequence[CategoryReference],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: AssignmentEvents | None = None,
    tree_config: CategoryTreeConfig | None = None,
) -> ReconcileResult:
    """Resolve ``references`` and store them as the complete category set of an article.

    Changes are always queued on the assignment backlog inside the transaction.
    ``events`` only receives them once the transaction has committed.
    """

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    effective_config = tree_config or get_category_tree_config()
    log.info(
        "Writing %s category reference(s) for article %s (root=%s)",
        len(references),
        article_id,
        effective_config.root_category_id,
    )

    pending = QueueAssignmentEvents() if events is not None else None
    with effective_uow() as uow:
        repositories = uow.repositories
        resolver = CategoryResolver(
            repositories.categories,
            root_category_id=effective_config.root_category_id,
            on_category_created=repositories.category_attributes.ensure,
        )
        sink = (
            repositories.backlog
            if pending is None
            else FanOutAssignmentEvents((repositories.backlog, pending))
        )
        synchronizer = AssignmentSynchronizer(resolver, repositories.assignments, events=sink)
        result = synchronizer.reconcile(article_id, references)
        uow.commit()

    if pending is not None and events is not None:
        pending.forward(events)

    log.info(
        "Finished article %s: added=%s, removed=%s, unchanged=%s",
        article_id,
        len(result.added),
        len(result.removed),
        len(result.unchanged),
    )
    return result


def list_article_categories(
    article_id: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[int]:
    """Return the category ids currently assigned to ``article_id``."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return sorted(uow.repositories.assignments.category_ids_for(article_id))
