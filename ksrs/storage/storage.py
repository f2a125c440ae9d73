"""
Storage Coordinator.

Owns the Item Store and the Review Store and keeps them consistent: both
must hold exactly the same set of ids. Every mutation goes through
Storage so the pair is always changed together.

Typical use::

    with open_storage(settings.storage_dir) as storage:
        storage.add("日")

``open_storage`` takes the process lock, loads both files in parallel and
saves both on the way out, whatever the exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from loguru import logger

from ..core.clock import DAY_CUTOFF_HOUR
from ..core.sm2 import Quality, SM2State
from .item_store import Item, ItemStorage
from .lock import StorageLock
from .review_store import SRSStorage, SrsItem
from .selector import DueSetSelector

ITEM_STORAGE_FILE = "item_storage"
SRS_STORAGE_FILE = "srs_storage"


# =============================================================================
# Combined View
# =============================================================================


@dataclass(frozen=True)
class StoredItem:
    """
    Read-only view of an item joined with its scheduling state.

    ``srs`` is a snapshot; changes to it never reach the Review Store.
    """

    item: Item
    srs: SrsItem
    cutoff_hour: int = DAY_CUTOFF_HOUR

    @property
    def id(self) -> int:
        return self.item.id

    @property
    def literal(self) -> str:
        return self.item.literal

    @property
    def srs_data(self) -> SM2State:
        return self.srs.srs_data

    @property
    def due_on(self) -> int:
        return self.srs.due_on

    @property
    def is_learning(self) -> bool:
        return self.srs.in_learning

    def can_be_reviewed(self, now: datetime | None = None) -> bool:
        return self.srs.can_be_reviewed(now, self.cutoff_hour)


# =============================================================================
# Storage
# =============================================================================


class Storage:
    """Item Store and Review Store combined for operations needing both."""

    def __init__(self, item_storage: ItemStorage, srs_storage: SRSStorage):
        self._items = item_storage
        self._srs = srs_storage
        self._selector = DueSetSelector(srs_storage)

    # =========================================================================
    # Read Access
    # =========================================================================

    @property
    def selector(self) -> DueSetSelector:
        return self._selector

    @property
    def last_id(self) -> int:
        return self._items.last_id

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return len(self) == 0

    def get_by_id(self, item_id: int) -> StoredItem | None:
        item = self._items.item_by_id(item_id)
        srs = self._srs.find(item_id)
        if item is None or srs is None:
            return None
        return StoredItem(item, srs.model_copy(deep=True), self._srs.cutoff_hour)

    def get_by_literal(self, literal: str) -> StoredItem | None:
        item = self._items.item_by_literal(literal)
        if item is None:
            return None
        return self.get_by_id(item.id)

    def __iter__(self) -> Iterator[StoredItem]:
        """All complete items, ascending by id."""
        for item_id in sorted(self._srs.ids()):
            stored = self.get_by_id(item_id)
            if stored is not None:
                yield stored

    def resolve(self, srs_items: list[SrsItem]) -> list[StoredItem]:
        """Join selector results with their literals, dropping orphans."""
        return [s for s in (self.get_by_id(i.id) for i in srs_items) if s is not None]

    def learning_count(self) -> int:
        """Amount of items currently in learning."""
        return sum(1 for i in self._srs if i.in_learning)

    # =========================================================================
    # Mutation
    # =========================================================================

    def add(self, literal: str) -> bool:
        """Add a literal to both stores. False if it is already present."""
        item = self._items.add(literal)
        if item is None:
            return False
        return self._srs.add(item.id)

    def remove(self, literal: str) -> bool:
        """
        Remove a literal from both stores.

        Returns:
            True only if the id was removed from both. A partial removal
            leaves the stores diverged and is reported by check().
        """
        item = self._items.item_by_literal(literal)
        if item is None:
            return False
        return self._items.remove(item.id) and self._srs.remove(item.id) is not None

    def reset(self, literal: str) -> bool:
        """Discard all learning progress of a literal."""
        stored = self.get_by_literal(literal)
        if stored is None:
            return False
        return self._srs.reset(stored.id)

    def review(self, literal: str, quality: Quality, now: datetime | None = None) -> bool:
        """Record a review of a literal."""
        stored = self.get_by_literal(literal)
        if stored is None:
            return False
        return self._srs.review(stored.id, quality, now)

    # =========================================================================
    # Consistency
    # =========================================================================

    def check(self) -> bool:
        """True if the storage is empty or both stores hold the same ids."""
        if self._items.is_empty() and self._srs.is_empty():
            return True

        if self._items.is_empty() or self._srs.is_empty():
            return False

        item_ids = {i.id for i in self._items}
        srs_ids = self._srs.ids()
        return item_ids <= srs_ids and srs_ids <= item_ids

    def repair(self) -> bool:
        """
        Try to bring both stores back in sync.

        Only the cases where one store is empty are repaired. Partially
        overlapping stores are left alone.

        Returns:
            True if something was repaired, False if nothing had to be
            done or the damage cannot be repaired automatically
        """
        if self.check():
            return False

        if self._srs.is_empty():
            return self._repair_srs()

        if self._items.is_empty():
            return self._prune_srs()

        logger.warning(
            f"Cannot repair storage: {len(self._items)} items and "
            f"{len(self._srs)} srs entries overlap only partially"
        )
        return False

    def _repair_srs(self) -> bool:
        """Create fresh srs entries for every item."""
        added = sum(1 for i in self._items if self._srs.add(i.id))
        logger.info(f"Repair: created {added} srs entries")
        return added > 0

    def _prune_srs(self) -> bool:
        """Drop srs entries that have no item left."""
        orphans = self._srs.ids()
        for item_id in orphans:
            self._srs.remove(item_id)
        logger.info(f"Repair: pruned {len(orphans)} orphaned srs entries")
        return bool(orphans)

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self) -> None:
        """Persist both stores, Item Store first."""
        self._items.save()
        self._srs.save()


# =============================================================================
# Scoped Acquisition
# =============================================================================


def load_storage(directory: Path, cutoff_hour: int = DAY_CUTOFF_HOUR) -> Storage:
    """Load both stores in parallel; they are independent files."""
    directory = Path(directory)
    with ThreadPoolExecutor(max_workers=2) as executor:
        items_future = executor.submit(ItemStorage.load, directory / ITEM_STORAGE_FILE)
        srs_future = executor.submit(SRSStorage.load, directory / SRS_STORAGE_FILE, cutoff_hour)
        # result() re-raises StorageCorruptedError from the worker
        item_storage = items_future.result()
        srs_storage = srs_future.result()

    return Storage(item_storage, srs_storage)


@contextmanager
def open_storage(directory: Path, cutoff_hour: int = DAY_CUTOFF_HOUR) -> Iterator[Storage]:
    """
    Lock, load and yield the storage; save both stores on exit.

    Args:
        directory: Storage directory
        cutoff_hour: Hour at which review days start

    Raises:
        StorageLockedError: If another process uses the directory
        StorageCorruptedError: If a store file is unreadable or fails to save
    """
    directory = Path(directory)
    with StorageLock(directory):
        storage = load_storage(directory, cutoff_hour)
        if not storage.check():
            logger.warning("Storage is inconsistent, run 'ksrs fix-db'")

        try:
            yield storage
        finally:
            storage.save()
