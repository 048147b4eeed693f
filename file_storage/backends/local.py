"""Local filesystem storage backend"""

import asyncio
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from config.settings import get_settings
from file_storage.backends.base import ContentSource, StorageBackend
from file_storage.exceptions import InvalidContentError, InvalidKeyError, StorageQuotaExceededError
from file_storage.keys import StorageKeyResolver
from file_storage.models import FileRecord, StorageFailure, StorageResult
from file_storage.streams import bytes_to_stream, close_stream, read_chunk
from logger import format_details, get_logger

DEFAULT_CHUNK_SIZE = 64 * 1024

_BYTES_TYPES = (bytes, bytearray, memoryview)


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage backend.

    Keys are joined onto ``base`` and must stay inside it. Writes go to a
    temporary sibling file that is then moved into place, so readers
    see either the old or the new content.

    With ``overwrite=False`` the temp file is hard-linked into place, which
    fails if the target appeared in the meantime, so an existing file is never
    replaced. With ``overwrite=True`` concurrent writers race and the last
    rename wins. The same applies to several processes sharing ``base``.
    """

    def __init__(
        self,
        base_path: Path | str | None = None,
        max_size_gb: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger=None,
    ):
        """
        Initialize backend.

        A base directory that cannot be created is logged, not raised;
        operations then fail one by one with IO_ERROR / NOT_FOUND.

        Args:
            base_path: Storage root (None = STORAGE_BASE_PATH or <temp dir>/FileStorage)
            max_size_gb: Optional quota for the whole storage root
            chunk_size: Bytes per read/write when streaming content
            logger: Logger to report to (defaults to the module loguru logger)
        """
        if base_path is None:
            base_path = get_settings().storage.resolved_base_path

        self.base = Path(base_path).absolute()
        self.max_size_gb = max_size_gb
        self.chunk_size = chunk_size
        self.logger = logger or get_logger(__name__).bind(backend="LOCAL")
        self.resolver = StorageKeyResolver(self.base)

        self._ensure_base_dir()

    def _ensure_base_dir(self) -> None:
        if self.base.is_dir():
            return
        try:
            self.base.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Base storage directory created: {self.base}")
        except OSError:
            self.logger.exception(f"Failed to create base storage directory: {self.base}")

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    async def get_metadata(self, key: str) -> StorageResult[FileRecord]:
        try:
            path = await self._resolve(key)
        except InvalidKeyError as exc:
            return self._invalid_key("get_metadata", exc)

        try:
            if not await aiofiles.os.path.isfile(path):
                self.logger.debug(f"File not found: {path}")
                return StorageResult.failed(StorageFailure.NOT_FOUND)
            stat = await aiofiles.os.stat(path)
        except FileNotFoundError:
            self.logger.debug(f"File disappeared while reading metadata: {path}")
            return StorageResult.failed(StorageFailure.NOT_FOUND)
        except OSError as exc:
            self.logger.exception(f"Error retrieving file info for: {key} at {path}")
            return StorageResult.failed(StorageFailure.IO_ERROR, str(exc))

        return StorageResult.success(
            FileRecord(
                name=key,
                size_bytes=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
            )
        )

    async def get_content(self, key: str) -> StorageResult[Any]:
        try:
            path = await self._resolve(key)
        except InvalidKeyError as exc:
            return self._invalid_key("get_content", exc)

        try:
            if not await aiofiles.os.path.isfile(path):
                self.logger.debug(f"File not found: {path}")
                return StorageResult.failed(StorageFailure.NOT_FOUND)
            stream = await aiofiles.open(path, "rb")
        except FileNotFoundError:
            self.logger.debug(f"File not found at: {path} (FileNotFoundError)")
            return StorageResult.failed(StorageFailure.NOT_FOUND)
        except OSError as exc:
            self.logger.exception(f"Error reading file: {key} at {path}")
            return StorageResult.failed(StorageFailure.IO_ERROR, str(exc))

        return StorageResult.success(stream)

    async def exists(self, key: str) -> bool:
        try:
            path = await self._resolve(key)
        except InvalidKeyError as exc:
            self.logger.debug(f"exists() called with invalid key: {exc.reason}")
            return False
        return await aiofiles.os.path.isfile(path)

    async def get_signed_url(self, key: str, expiry_minutes: int = 60) -> StorageResult[str]:
        self.logger.warning("Signed URL generation not supported for local file system storage")
        return StorageResult.failed(StorageFailure.NOT_SUPPORTED, "local storage has no signed URLs")

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    async def save(
        self,
        key: str,
        content: ContentSource,
        metadata: Mapping[str, str] | None = None,
        overwrite: bool = False,
    ) -> StorageResult[None]:
        try:
            return await self._save(key, content, metadata, overwrite)
        finally:
            if content is not None and not isinstance(content, _BYTES_TYPES):
                await self._release(content)

    async def _save(
        self,
        key: str,
        content: ContentSource,
        metadata: Mapping[str, str] | None,
        overwrite: bool,
    ) -> StorageResult[None]:
        try:
            path = await self._resolve(key)
        except InvalidKeyError as exc:
            return self._invalid_key("save", exc)

        if content is None:
            self.logger.warning(f"save() called without content for: {key}")
            return StorageResult.failed(StorageFailure.INVALID_CONTENT, "content is missing")

        stream = bytes_to_stream(bytes(content)) if isinstance(content, _BYTES_TYPES) else content

        try:
            first_chunk = await read_chunk(stream, self.chunk_size)
            if not first_chunk:
                self.logger.warning(f"save() called with empty content for: {key}")
                return StorageResult.failed(StorageFailure.INVALID_CONTENT, "content is empty")

            if not overwrite and await aiofiles.os.path.exists(path):
                self.logger.warning(f"File already exists and overwrite is disabled: {key}")
                return StorageResult.failed(StorageFailure.ALREADY_EXISTS)

            if metadata:
                self.logger.debug(f"Metadata is not persisted by local storage | {format_details(**metadata)}")

            size = await self._write(path, first_chunk, stream, overwrite)
        except InvalidContentError as exc:
            self.logger.warning(f"save() called with unreadable content for {key}: {exc.reason}")
            return StorageResult.failed(StorageFailure.INVALID_CONTENT, exc.reason)
        except FileExistsError:
            self.logger.warning(f"File created concurrently and overwrite is disabled: {key}")
            return StorageResult.failed(StorageFailure.ALREADY_EXISTS)
        except StorageQuotaExceededError as exc:
            self.logger.warning(f"Storage quota exceeded while saving {key}: {exc}")
            return StorageResult.failed(StorageFailure.QUOTA_EXCEEDED, str(exc))
        except OSError as exc:
            self.logger.exception(f"Error saving file: {key} to {path}")
            return StorageResult.failed(StorageFailure.IO_ERROR, str(exc))

        self.logger.info(f"File saved | {format_details(key=key, size=size, overwrite=overwrite)}")
        return StorageResult.success()

    async def _write(self, path: Path, first_chunk: bytes, stream: Any, overwrite: bool) -> int:
        """
        Stream content to a temp file next to ``path`` and move it into place.

        Raises:
            FileExistsError: If ``overwrite`` is False and ``path`` exists by commit time
        """
        quota_left = await self._quota_left(path)

        parent = path.parent
        if not await aiofiles.os.path.isdir(parent):
            await aiofiles.os.makedirs(parent, exist_ok=True)
            self.logger.info(f"Directory created: {parent}")

        tmp_path = parent / f".{path.name}.{uuid.uuid4().hex[:8]}.tmp"
        written = 0
        replaced = False
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                chunk = first_chunk
                while chunk:
                    if quota_left is not None and written + len(chunk) > quota_left:
                        raise StorageQuotaExceededError(
                            current_bytes=self.max_size_gb * (1024**3) - quota_left,
                            incoming_bytes=written + len(chunk),
                            max_size_gb=self.max_size_gb,
                        )
                    await f.write(chunk)
                    written += len(chunk)
                    chunk = await read_chunk(stream, self.chunk_size)

            if overwrite:
                await aiofiles.os.replace(tmp_path, path)
                replaced = True
            else:
                await aiofiles.os.link(tmp_path, path)
        finally:
            if not replaced:
                await self._discard(tmp_path)

        return written

    async def delete(self, key: str) -> StorageResult[None]:
        try:
            path = await self._resolve(key)
        except InvalidKeyError as exc:
            return self._invalid_key("delete", exc)

        try:
            if not await aiofiles.os.path.isfile(path):
                self.logger.warning(f"File not found for deletion: {key}")
                return StorageResult.failed(StorageFailure.NOT_FOUND)
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            self.logger.warning(f"File not found for deletion: {key}")
            return StorageResult.failed(StorageFailure.NOT_FOUND)
        except OSError as exc:
            self.logger.exception(f"Error deleting file: {key}")
            return StorageResult.failed(StorageFailure.IO_ERROR, str(exc))

        self.logger.info(f"File deleted: {key}")
        return StorageResult.success()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve(self, key: object) -> Path:
        """Resolve key off the event loop (symlink resolution touches the disk)"""
        return await asyncio.to_thread(self.resolver.resolve, key)

    def _invalid_key(self, operation: str, exc: InvalidKeyError) -> StorageResult:
        self.logger.warning(f"{operation}() called with invalid key {exc.key!r}: {exc.reason}")
        return StorageResult.failed(StorageFailure.INVALID_KEY, exc.reason)

    async def _release(self, stream: Any) -> None:
        try:
            await close_stream(stream)
        except OSError:
            self.logger.exception("Failed to close content stream")

    async def _discard(self, tmp_path: Path) -> None:
        try:
            await aiofiles.os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            self.logger.exception(f"Failed to remove temp file: {tmp_path}")

    async def _quota_left(self, target: Path) -> int | None:
        """Bytes that may still be written to ``target`` (None = unlimited)"""
        if not self.max_size_gb:
            return None
        current_size = await asyncio.to_thread(self._get_total_size, exclude=target)
        return max(self.max_size_gb * (1024**3) - current_size, 0)

    def _get_total_size(self, exclude: Path | None = None) -> int:
        """Calculate total storage size (used for quota checks)"""
        return sum(
            self._file_size(file_path)
            for file_path in self.base.rglob("*")
            if file_path != exclude and file_path.is_file()
        )

    @staticmethod
    def _file_size(file_path: Path) -> int:
        """Size of a file, 0 if it can't be accessed"""
        try:
            return file_path.stat().st_size
        except OSError:
            return 0
