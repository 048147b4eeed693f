"""Helpers for binary streams that may be sync or async"""

import inspect
import io
from typing import Any

from file_storage.exceptions import InvalidContentError

_BYTES_TYPES = (bytes, bytearray, memoryview)


async def read_chunk(stream: Any, size: int) -> bytes:
    """
    Read up to ``size`` bytes from a sync or async binary stream.

    Raises:
        InvalidContentError: If the stream is closed, unreadable or yields text
    """
    read = getattr(stream, "read", None)
    if read is None:
        raise InvalidContentError(f"{type(stream).__name__} is neither bytes nor a readable stream")

    try:
        chunk = read(size)
        if inspect.isawaitable(chunk):
            chunk = await chunk
    except ValueError as exc:
        # Closed file
        raise InvalidContentError(str(exc)) from exc

    if not chunk:
        return b""
    if not isinstance(chunk, _BYTES_TYPES):
        raise InvalidContentError(f"stream returned {type(chunk).__name__}, expected bytes")
    return bytes(chunk)


async def close_stream(stream: Any) -> None:
    """Close a sync or async stream; streams without close() are left alone."""
    close = getattr(stream, "close", None)
    if close is None:
        return
    result = close()
    if inspect.isawaitable(result):
        await result


async def read_stream_bytes(stream: Any, chunk_size: int = 64 * 1024) -> bytes:
    """
    Read a stream to EOF and close it.

    Args:
        stream: Sync or async binary stream (e.g. value of a get_content() result)
        chunk_size: Bytes per read call

    Returns:
        Whole stream content
    """
    buffer = bytearray()
    try:
        while chunk := await read_chunk(stream, chunk_size):
            buffer.extend(chunk)
    finally:
        await close_stream(stream)
    return bytes(buffer)


def bytes_to_stream(data: bytes) -> io.BytesIO:
    """Wrap bytes in a readable binary stream positioned at the start."""
    return io.BytesIO(data)
