"""
Store file persistence.

Every store file is written with the same protocol:

1. Copy the live file to ``<name>_backup`` (best effort)
2. Serialize the document to ``<name>_new``
3. Read ``<name>_new`` back and compare it with the in-memory document
4. Only then rename ``<name>_new`` over the live file

A failed step 3 raises StorageCorruptedError, removes ``<name>_new`` and never
touches the live file. File system errors surface as StorageError.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

DocumentT = TypeVar("DocumentT", bound=BaseModel)

BACKUP_SUFFIX = "_backup"
TEMP_SUFFIX = "_new"


# =============================================================================
# Errors
# =============================================================================


class StorageError(Exception):
    """Base class for unrecoverable storage failures."""
    pass


class StorageCorruptedError(StorageError):
    """Raised when a store file cannot be read back as a valid document."""
    pass


class StorageLockedError(StorageError):
    """Raised when another process holds the storage lock."""
    pass


# =============================================================================
# Paths
# =============================================================================


def backup_path(path: Path) -> Path:
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}")


def temp_path(path: Path) -> Path:
    return path.with_name(f"{path.name}{TEMP_SUFFIX}")


# =============================================================================
# Load / Save
# =============================================================================


def read_document(path: Path, model: type[DocumentT]) -> DocumentT:
    """
    Deserialize a store document.

    Args:
        path: File to read
        model: Document model to validate against

    Returns:
        The validated document

    Raises:
        StorageCorruptedError: If the file is unreadable or not a valid document
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise StorageCorruptedError(f"Cannot read {path}: {e}") from e

    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise StorageCorruptedError(
            f"{path} is not a valid {model.__name__}: {e.error_count()} error(s)"
        ) from e


def load_document(path: Path, model: type[DocumentT]) -> DocumentT | None:
    """Load a document, or None if the file does not exist yet."""
    if not path.exists():
        logger.debug(f"{path} does not exist, starting empty")
        return None

    document = read_document(path, model)
    logger.debug(f"Loaded {model.__name__} from {path}")
    return document


def backup(path: Path) -> bool:
    """Copy the live file next to itself. Failures are logged and ignored."""
    target = backup_path(path)
    try:
        shutil.copyfile(path, target)
    except OSError as e:
        logger.debug(f"Backup of {path} skipped: {e}")
        return False
    return True


def atomic_save(path: Path, document: BaseModel) -> None:
    """
    Persist a document with the backup / write / verify / rename protocol.

    Args:
        path: Live file path
        document: Document to persist

    Raises:
        StorageCorruptedError: If the freshly written file does not round-trip
        StorageError: If the file system refuses the write or the rename
    """
    new_file = temp_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        backup(path)
        new_file.write_bytes(document.model_dump_json().encode("utf-8"))
    except OSError as e:
        raise StorageError(f"Cannot write {new_file}: {e}") from e

    try:
        written = read_document(new_file, type(document))
        if written != document:
            raise StorageCorruptedError(f"{new_file} does not match the in-memory store")
    except StorageCorruptedError:
        new_file.unlink(missing_ok=True)
        raise

    try:
        os.replace(new_file, path)
    except OSError as e:
        raise StorageError(f"Cannot replace {path}: {e}") from e
    logger.debug(f"Saved {type(document).__name__} to {path}")
