"""Async byte streams usable as framer readers and writers.

A reader has ``async read(n) -> bytes`` returning at most ``n`` bytes and
``b""`` at end of stream. A writer has ``async write_all(data)`` and
``async flush()``. Failures are raised as ``OSError``.
"""

from __future__ import annotations

import asyncio
from typing import Optional


class Noop:
    """A stream that accepts every write and fills every read.

    It counts the bytes it has swallowed and the flushes it has seen.
    """

    def __init__(self) -> None:
        self.written = 0
        self.flushes = 0

    async def read(self, n: int) -> bytes:
        return bytes(n)

    async def write_all(self, data: bytes) -> None:
        self.written += len(data)

    async def flush(self) -> None:
        self.flushes += 1


class _Pipe:
    """One direction of an in-memory duplex with bounded capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.data = bytearray()
        self.writer_closed = False
        self.reader_closed = False
        self._changed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self.writer_closed or self.reader_closed

    def notify(self) -> None:
        self._changed.set()

    async def _wait(self) -> None:
        self._changed.clear()
        await self._changed.wait()

    async def read(self, n: int) -> bytes:
        if n <= 0:
            return b""
        while not self.data:
            if self.closed:
                return b""
            await self._wait()
        chunk = bytes(self.data[:n])
        del self.data[:n]
        self.notify()
        return chunk

    async def write(self, data: bytes) -> None:
        view = memoryview(bytes(data))
        while len(view):
            if self.closed:
                raise BrokenPipeError("duplex peer is closed")
            room = self.capacity - len(self.data)
            if room <= 0:
                await self._wait()
                continue
            self.data += view[:room]
            view = view[room:]
            self.notify()


class DuplexStream:
    """One end of an in-memory bidirectional byte stream."""

    def __init__(self, incoming: _Pipe, outgoing: _Pipe) -> None:
        self._incoming = incoming
        self._outgoing = outgoing

    async def read(self, n: int) -> bytes:
        return await self._incoming.read(n)

    async def write_all(self, data: bytes) -> None:
        await self._outgoing.write(data)

    async def flush(self) -> None:
        """Written bytes are already visible to the peer; fail if it is gone."""
        if self._outgoing.closed:
            raise BrokenPipeError("duplex peer is closed")

    def close(self) -> None:
        """Close this end; the peer reads EOF and its writes fail."""
        self._outgoing.writer_closed = True
        self._outgoing.notify()
        self._incoming.reader_closed = True
        self._incoming.notify()


def duplex(max_size: int) -> tuple[DuplexStream, DuplexStream]:
    """Two connected streams, each direction buffering at most ``max_size`` bytes."""
    forward = _Pipe(max_size)
    backward = _Pipe(max_size)
    return DuplexStream(backward, forward), DuplexStream(forward, backward)


class StreamAdapter:
    """Adapts an ``asyncio`` reader and/or writer to the framer interface."""

    def __init__(
        self,
        reader: Optional[asyncio.StreamReader] = None,
        writer: Optional[asyncio.StreamWriter] = None,
    ) -> None:
        self.reader = reader
        self.writer = writer

    async def read(self, n: int) -> bytes:
        if self.reader is None:
            raise RuntimeError("adapter has no reader")
        return await self.reader.read(n)

    async def write_all(self, data: bytes) -> None:
        if self.writer is None:
            raise RuntimeError("adapter has no writer")
        self.writer.write(data)
        await self.writer.drain()

    async def flush(self) -> None:
        if self.writer is None:
            raise RuntimeError("adapter has no writer")
        await self.writer.drain()