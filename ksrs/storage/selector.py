"""
Due-Set Selector.

Read-only queries over the Review Store deciding what to present next.
"Now" is always an explicit input; every comparison is made against the
review-day boundaries of the store's cutoff hour. Results are snapshots
of the stored entries.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..core.clock import day_offset_unix, day_start_unix
from .review_store import SRSStorage, SrsItem


def _snapshot(items: Iterable[SrsItem]) -> list[SrsItem]:
    return [i.model_copy(deep=True) for i in items]


class DueSetSelector:
    """Due / new / tomorrow / future partitions of a Review Store."""

    def __init__(self, srs_storage: SRSStorage):
        self._srs = srs_storage

    @property
    def cutoff_hour(self) -> int:
        return self._srs.cutoff_hour

    def due(self, now: datetime | None = None) -> list[SrsItem]:
        """Items in learning whose review day has come, ascending by id."""
        today = day_start_unix(now, self.cutoff_hour)
        due = [i for i in self._srs if i.in_learning and 0 < i.due_on <= today]
        return _snapshot(sorted(due, key=lambda i: i.id))

    def new(self) -> list[SrsItem]:
        """Items never reviewed, ascending by id."""
        return _snapshot(sorted((i for i in self._srs if not i.in_learning), key=lambda i: i.id))

    def due_tomorrow(self, now: datetime | None = None) -> list[SrsItem]:
        """Items falling due on the next review day, ascending by id."""
        tomorrow = day_offset_unix(1, now, self.cutoff_hour)
        day_after = day_offset_unix(2, now, self.cutoff_hour)
        items = [i for i in self._srs if i.in_learning and tomorrow <= i.due_on < day_after]
        return _snapshot(sorted(items, key=lambda i: i.id))

    def future(self, now: datetime | None = None, limit: int = 20) -> list[SrsItem]:
        """
        Upcoming reviews after tomorrow.

        Args:
            now: Reference time
            limit: Maximum entries returned

        Returns:
            Items ordered by (due_on, id)
        """
        tomorrow = day_offset_unix(1, now, self.cutoff_hour)
        items = [i for i in self._srs if i.in_learning and i.due_on > tomorrow]
        items.sort(key=lambda i: (i.due_on, i.id))
        return _snapshot(items[:limit])
