"""Storage backend contract and the local filesystem implementation"""

from file_storage.backends.base import ContentSource, StorageBackend
from file_storage.backends.local import DEFAULT_CHUNK_SIZE, LocalStorageBackend

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ContentSource",
    "LocalStorageBackend",
    "StorageBackend",
]
