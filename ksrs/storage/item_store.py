"""
Item Store: the characters being learned.

Maps a stable integer id to a single literal. Ids are handed out
sequentially starting at 1 and are never reused, even after removal:
``last_id`` is persisted with the items and only ever grows.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .persistence import atomic_save, load_document

# =============================================================================
# Models
# =============================================================================


class Item(BaseModel):
    """A single item to learn."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    literal: str = Field(min_length=1, max_length=1)


class ItemDocument(BaseModel):
    """On-disk layout of the Item Store."""

    items: list[Item] = Field(default_factory=list)
    last_id: int = Field(default=0, ge=0)


# =============================================================================
# Item Storage
# =============================================================================


class ItemStorage:
    """
    Persistent collection of learnable items.

    Lookups are linear scans; a personal collection stays in the
    hundreds to low thousands of entries.
    """

    def __init__(self, path: Path, items: list[Item] | None = None, last_id: int = 0):
        self.path = Path(path)
        self._items: list[Item] = list(items or [])
        self._last_id = last_id

    @classmethod
    def load(cls, path: Path) -> ItemStorage:
        """
        Load the store from disk.

        Args:
            path: Store file. A missing file yields an empty store.

        Raises:
            StorageCorruptedError: If the file exists but is not a valid store
        """
        path = Path(path)
        document = load_document(path, ItemDocument)
        if document is None:
            return cls(path)

        # The counter must never fall behind an id already handed out
        last_id = max([document.last_id, *(i.id for i in document.items)])
        logger.info(f"Item storage loaded: {len(document.items)} items, last id {last_id}")
        return cls(path, document.items, last_id)

    def save(self) -> None:
        atomic_save(self.path, self.to_document())

    def to_document(self) -> ItemDocument:
        return ItemDocument(items=list(self._items), last_id=self._last_id)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def last_id(self) -> int:
        return self._last_id

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def item_by_id(self, item_id: int) -> Item | None:
        return next((i for i in self._items if i.id == item_id), None)

    def item_by_literal(self, literal: str) -> Item | None:
        return next((i for i in self._items if i.literal == literal), None)

    # =========================================================================
    # Mutation (Storage coordinator only)
    # =========================================================================

    def add(self, literal: str) -> Item | None:
        """
        Add a new literal.

        Returns:
            The new Item, or None if the literal is already stored
        """
        if self.item_by_literal(literal) is not None:
            return None

        item = Item(id=self._last_id + 1, literal=literal)
        self._items.append(item)
        self._last_id = item.id
        return item

    def remove(self, item_id: int) -> bool:
        """Remove an item by id. True if it existed."""
        before = len(self._items)
        self._items = [i for i in self._items if i.id != item_id]
        return len(self._items) < before
