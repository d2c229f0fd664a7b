"""In-process assignment notification sinks."""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable
from typing import TYPE_CHECKING

from catsync.domain.model import AssignmentChange, AssignmentEvent

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catsync.domain.ports import AssignmentEvents

log = logging.getLogger(__name__)

AssignmentCallback = Callable[[int, int], None]


class QueueAssignmentEvents:
    """Buffers changes on a queue so a consumer can process them later.

    Publishing never blocks; a bounded queue that is full drops the event with a
    warning instead.
    """

    def __init__(self, events: queue.Queue[AssignmentEvent] | None = None) -> None:
        self.events: queue.Queue[AssignmentEvent] = events if events is not None else queue.Queue()

    def assignment_added(self, article_id: int, category_id: int) -> None:
        self._put(AssignmentEvent(AssignmentChange.ADDED, article_id, category_id))

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        self._put(AssignmentEvent(AssignmentChange.REMOVED, article_id, category_id))

    def drain(self) -> list[AssignmentEvent]:
        """Return and remove every queued event."""
        drained: list[AssignmentEvent] = []
        while True:
            try:
                drained.append(self.events.get_nowait())
            except queue.Empty:
                return drained

    def forward(self, sink: AssignmentEvents) -> int:
        """Drain the queue into ``sink`` in order and return how many events were sent.

        A failing ``sink`` call is logged and the remaining events are still sent.
        """
        relay = FanOutAssignmentEvents((sink,))
        drained = self.drain()
        for event in drained:
            if event.change is AssignmentChange.ADDED:
                relay.assignment_added(event.article_id, event.category_id)
            else:
                relay.assignment_removed(event.article_id, event.category_id)
        return len(drained)

    def _put(self, event: AssignmentEvent) -> None:
        try:
            self.events.put_nowait(event)
        except queue.Full:
            log.warning("Assignment event queue full, dropping %s", event)


class CallbackAssignmentEvents:
    def __init__(
        self,
        *,
        on_added: AssignmentCallback | None = None,
        on_removed: AssignmentCallback | None = None,
    ) -> None:
        self._on_added = on_added
        self._on_removed = on_removed

    def assignment_added(self, article_id: int, category_id: int) -> None:
        if self._on_added is not None:
            self._on_added(article_id, category_id)

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        if self._on_removed is not None:
            self._on_removed(article_id, category_id)


class FanOutAssignmentEvents:
    """Forwards every change to several sinks; one failing sink does not starve the others."""

    def __init__(self, sinks: Iterable[AssignmentEvents]) -> None:
        self._sinks = tuple(sinks)

    def assignment_added(self, article_id: int, category_id: int) -> None:
        for sink in self._sinks:
            self._forward(sink.assignment_added, article_id, category_id)

    def assignment_removed(self, article_id: int, category_id: int) -> None:
        for sink in self._sinks:
            self._forward(sink.assignment_removed, article_id, category_id)

    @staticmethod
    def _forward(notify: AssignmentCallback, article_id: int, category_id: int) -> None:
        try:
            notify(article_id, category_id)
        except Exception:  # noqa: BLE001
            log.exception(
                "Assignment sink failed for article %s, category %s", article_id, category_id
            )
