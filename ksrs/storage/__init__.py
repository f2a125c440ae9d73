"""
Persistent dual-store scheduling engine.

Components:
- ItemStorage: id -> literal, append-only id allocation
- SRSStorage: id -> SM-2 scheduling state
- DueSetSelector: due / new / tomorrow / future queries
- Storage: coordinator keeping both stores consistent
- open_storage: lock, load, yield, save
"""

from .item_store import Item, ItemStorage
from .lock import StorageLock
from .persistence import StorageCorruptedError, StorageError, StorageLockedError
from .review_store import SRSStorage, SrsItem
from .selector import DueSetSelector
from .storage import Storage, StoredItem, load_storage, open_storage

__all__ = [
    # Stores
    "Item",
    "ItemStorage",
    "SrsItem",
    "SRSStorage",
    # Coordination
    "Storage",
    "StoredItem",
    "DueSetSelector",
    "load_storage",
    "open_storage",
    "StorageLock",
    # Errors
    "StorageError",
    "StorageCorruptedError",
    "StorageLockedError",
]
