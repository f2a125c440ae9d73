"""
Review Store: SM-2 scheduling state per item.

Keyed by the same ids as the Item Store. Each entry records the SM-2
state, the unix timestamp at which the item is due again (0 when never
reviewed) and whether the item has entered the learning cycle.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field

from ..core.clock import DAY_CUTOFF_HOUR, day_offset_unix, day_start_unix
from ..core.sm2 import Quality, SM2Scheduler, SM2State
from .persistence import atomic_save, load_document

_scheduler = SM2Scheduler()

# =============================================================================
# Models
# =============================================================================


class SrsItem(BaseModel):
    """Scheduling state of a single item."""

    id: int = Field(ge=1)
    srs_data: SM2State = Field(default_factory=_scheduler.initial_state)
    due_on: int = Field(default=0, ge=0)  # unix seconds, 0 = never scheduled
    in_learning: bool = False

    def review(
        self,
        quality: Quality,
        now: datetime | None = None,
        cutoff_hour: int = DAY_CUTOFF_HOUR,
    ) -> int:
        """
        Apply a review and schedule the next one.

        Args:
            quality: Grade of the response
            now: Review time (defaults to the local clock)
            cutoff_hour: Hour at which review days start

        Returns:
            Days until the item is due again
        """
        self.in_learning = True
        self.srs_data, interval = _scheduler.review(self.srs_data, quality)
        self.due_on = day_offset_unix(interval, now, cutoff_hour)
        return interval

    def reset(self) -> None:
        """Drop all progress, as if the item had just been added."""
        self.srs_data = _scheduler.initial_state()
        self.due_on = 0
        self.in_learning = False

    def can_be_reviewed(
        self,
        now: datetime | None = None,
        cutoff_hour: int = DAY_CUTOFF_HOUR,
    ) -> bool:
        """True for items never started or whose review day has come."""
        if not self.in_learning or self.due_on == 0:
            return True
        return self.due_on <= day_start_unix(now, cutoff_hour)


class SrsDocument(BaseModel):
    """On-disk layout of the Review Store."""

    items: list[SrsItem] = Field(default_factory=list)


# =============================================================================
# SRS Storage
# =============================================================================


class SRSStorage:
    """Persistent mapping of item id to SrsItem."""

    def __init__(
        self,
        path: Path,
        items: list[SrsItem] | None = None,
        cutoff_hour: int = DAY_CUTOFF_HOUR,
    ):
        self.path = Path(path)
        self.cutoff_hour = cutoff_hour
        self._data: dict[int, SrsItem] = {i.id: i for i in items or []}

    @classmethod
    def load(cls, path: Path, cutoff_hour: int = DAY_CUTOFF_HOUR) -> SRSStorage:
        """
        Load the store from disk.

        Args:
            path: Store file. A missing file yields an empty store.
            cutoff_hour: Hour at which review days start

        Raises:
            StorageCorruptedError: If the file exists but is not a valid store
        """
        path = Path(path)
        document = load_document(path, SrsDocument)
        if document is None:
            return cls(path, cutoff_hour=cutoff_hour)

        logger.info(f"SRS storage loaded: {len(document.items)} entries")
        return cls(path, document.items, cutoff_hour)

    def save(self) -> None:
        atomic_save(self.path, self.to_document())

    def to_document(self) -> SrsDocument:
        return SrsDocument(items=[self._data[i] for i in sorted(self._data)])

    # =========================================================================
    # Queries
    # =========================================================================

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[SrsItem]:
        return iter(self._data.values())

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._data

    def is_empty(self) -> bool:
        return not self._data

    def ids(self) -> set[int]:
        return set(self._data)

    def find(self, item_id: int) -> SrsItem | None:
        return self._data.get(item_id)

    def can_review(self, item_id: int, now: datetime | None = None) -> bool:
        item = self.find(item_id)
        return item is not None and item.can_be_reviewed(now, self.cutoff_hour)

    # =========================================================================
    # Mutation (Storage coordinator only)
    # =========================================================================

    def add(self, item_id: int) -> bool:
        """Insert a fresh entry. False if the id already has one."""
        if item_id in self._data:
            return False
        self._data[item_id] = SrsItem(id=item_id)
        return True

    def remove(self, item_id: int) -> SrsItem | None:
        return self._data.pop(item_id, None)

    def review(self, item_id: int, quality: Quality, now: datetime | None = None) -> bool:
        item = self.find(item_id)
        if item is None:
            return False
        interval = item.review(quality, now, self.cutoff_hour)
        logger.debug(f"Reviewed #{item_id} as {Quality(quality).name}, next in {interval}d")
        return True

    def reset(self, item_id: int) -> bool:
        item = self.find(item_id)
        if item is None:
            return False
        item.reset()
        return True
