"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ksrs.storage import ItemStorage, SRSStorage, Storage  # noqa: E402
from ksrs.storage.storage import ITEM_STORAGE_FILE, SRS_STORAGE_FILE  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def setup_logging():
    """Route loguru output to stderr at DEBUG for the duration of a test."""
    from loguru import logger

    logger.remove()
    logger.add(sys.stderr, level="DEBUG", format="<level>{level: <8}</level> | {message}")

    yield

    logger.remove()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """A fixed review time: 2024-03-10 12:00 UTC (after the 04:00 cutoff)."""
    return datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def one_day():
    return timedelta(days=1)


@pytest.fixture
def storage_dir(tmp_path):
    """An empty storage directory."""
    path = tmp_path / "storage"
    path.mkdir()
    return path


@pytest.fixture
def item_path(storage_dir):
    return storage_dir / ITEM_STORAGE_FILE


@pytest.fixture
def srs_path(storage_dir):
    return storage_dir / SRS_STORAGE_FILE


@pytest.fixture
def storage(item_path, srs_path):
    """An empty, unlocked coordinator backed by the temporary directory."""
    return Storage(ItemStorage(item_path), SRSStorage(srs_path))


@pytest.fixture
def sample_kanji():
    """A handful of kanji in insertion order."""
    return ["日", "本", "語", "学", "生"]


@pytest.fixture
def berlin_local_time(monkeypatch):
    """Run the test with the process local zone set to Europe/Berlin."""
    import time

    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()

    yield

    monkeypatch.undo()
    time.tzset()
