"""Abstract storage backend interface"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, BinaryIO

from file_storage.models import FileRecord, StorageResult
from file_storage.streams import read_stream_bytes

ContentSource = bytes | bytearray | memoryview | BinaryIO


class StorageBackend(ABC):
    """
    Abstract storage backend interface for file operations.

    Expected outcomes (missing file, conflict, invalid input, I/O fault) are
    reported through StorageResult; implementations must not raise for them.
    """

    @abstractmethod
    async def get_metadata(self, key: str) -> StorageResult[FileRecord]:
        """
        Get file metadata (name, size, modification time).

        Args:
            key: Relative path within storage

        Returns:
            Result holding FileRecord, or failure NOT_FOUND if there is no file
        """

    @abstractmethod
    async def get_content(self, key: str) -> StorageResult[Any]:
        """
        Open file for reading.

        Args:
            key: Relative path within storage

        Returns:
            Result holding an open async binary stream. The caller owns
            the stream and must close it.
        """

    @abstractmethod
    async def save(
        self,
        key: str,
        content: ContentSource,
        metadata: Mapping[str, str] | None = None,
        overwrite: bool = False,
    ) -> StorageResult[None]:
        """
        Save file to storage.

        Args:
            key: Relative path within storage
            content: Bytes or a sync/async binary stream. Streams are always
                closed before this method returns.
            metadata: Optional metadata (e.g. content-type, tags)
            overwrite: Replace an existing file instead of failing

        Returns:
            Successful result, or failure with ALREADY_EXISTS, INVALID_KEY,
            INVALID_CONTENT, QUOTA_EXCEEDED or IO_ERROR
        """

    @abstractmethod
    async def delete(self, key: str) -> StorageResult[None]:
        """
        Delete file from storage.

        Args:
            key: Relative path within storage

        Returns:
            Successful result if file was deleted, NOT_FOUND if there was none
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if file exists in storage.

        Args:
            key: Relative path within storage

        Returns:
            True if file exists, False otherwise
        """

    @abstractmethod
    async def get_signed_url(self, key: str, expiry_minutes: int = 60) -> StorageResult[str]:
        """
        Generate a temporary download URL.

        Args:
            key: Relative path within storage
            expiry_minutes: Minutes before the link expires

        Returns:
            Result holding the URL, or NOT_SUPPORTED if the provider has none
        """

    async def load(self, key: str) -> StorageResult[bytes]:
        """Read whole file content into memory."""
        result = await self.get_content(key)
        if not result:
            return StorageResult.failed(result.failure, result.detail)
        return StorageResult.success(await read_stream_bytes(result.value))

    async def get_size(self, key: str) -> StorageResult[int]:
        """Get file size in bytes."""
        result = await self.get_metadata(key)
        if not result:
            return StorageResult.failed(result.failure, result.detail)
        return StorageResult.success(result.value.size_bytes)
