"""Shared test fixtures for all tests."""

from unittest.mock import MagicMock

import pytest

from config.settings import reset_settings
from file_storage.backends.local import LocalStorageBackend
from file_storage.factory import reset_storage_backend

STORAGE_ENV_VARS = (
    "STORAGE_TYPE",
    "STORAGE_BASE_PATH",
    "STORAGE_MAX_SIZE_GB",
    "STORAGE_CHUNK_SIZE",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep environment and singletons from leaking between tests."""
    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_storage_backend()
    yield
    reset_settings()
    reset_storage_backend()


@pytest.fixture
def mock_logger():
    """Injected logger capturing calls instead of writing to sinks."""
    return MagicMock()


@pytest.fixture
def storage_root(tmp_path):
    """Base directory for a backend under test."""
    return tmp_path / "store"


@pytest.fixture
def backend(storage_root, mock_logger):
    """Local backend rooted in a fresh temp directory."""
    return LocalStorageBackend(base_path=storage_root, logger=mock_logger)
