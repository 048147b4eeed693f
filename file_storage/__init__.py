"""Local file storage behind an async, non-raising backend interface"""

from file_storage.backends.base import StorageBackend
from file_storage.backends.local import LocalStorageBackend
from file_storage.exceptions import (
    InvalidContentError,
    InvalidKeyError,
    StorageError,
    StorageQuotaExceededError,
)
from file_storage.factory import create_storage_backend, get_storage_backend, reset_storage_backend
from file_storage.models import FileRecord, StorageFailure, StorageResult
from file_storage.streams import bytes_to_stream, read_stream_bytes

__all__ = [
    "FileRecord",
    "InvalidContentError",
    "InvalidKeyError",
    "LocalStorageBackend",
    "StorageBackend",
    "StorageError",
    "StorageFailure",
    "StorageQuotaExceededError",
    "StorageResult",
    "bytes_to_stream",
    "create_storage_backend",
    "get_storage_backend",
    "read_stream_bytes",
    "reset_storage_backend",
]
