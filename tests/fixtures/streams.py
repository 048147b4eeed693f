"""Stream doubles for storage tests."""

import asyncio


class AsyncChunkStream:
    """Async binary stream yielding preset chunks, optionally slowly."""

    def __init__(self, chunks: list[bytes], delays: list[float] | None = None):
        self.chunks = list(chunks)
        self.delays = list(delays or [])
        self.closed = False

    async def read(self, size: int = -1) -> bytes:
        if self.delays:
            await asyncio.sleep(self.delays.pop(0))
        if not self.chunks:
            return b""
        return self.chunks.pop(0)

    async def close(self) -> None:
        self.closed = True


class FailingStream:
    """Sync binary stream whose read() fails after the first chunk."""

    def __init__(self, first_chunk: bytes):
        self.first_chunk = first_chunk
        self.reads = 0
        self.closed = False

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if self.reads == 1:
            return self.first_chunk
        raise OSError("device disconnected")

    def close(self) -> None:
        self.closed = True
