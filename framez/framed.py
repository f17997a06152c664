"""Framers that read frames from and write frames to async byte streams."""

from __future__ import annotations

from typing import Any, AsyncIterator, Callable, Optional, Tuple, Union

from .framed_core import FrameSink, FramedCore
from .state import ReadState, ReadWriteState, WriteState

BufferLike = Union[bytearray, int]
MapFn = Optional[Callable[[Any], Any]]


def _buffer(buffer: BufferLike) -> bytearray:
    if isinstance(buffer, bytearray):
        return buffer
    if isinstance(buffer, int) and not isinstance(buffer, bool):
        if buffer < 0:
            raise ValueError("buffer size must not be negative")
        return bytearray(buffer)
    raise TypeError("buffer must be a bytearray or a size")


class _CoreAccess:
    core: FramedCore

    def __repr__(self) -> str:
        return f"{type(self).__name__}(core={self.core!r})"

    @property
    def codec(self) -> Any:
        """The codec."""
        return self.core.codec

    @codec.setter
    def codec(self, codec: Any) -> None:
        self.core.codec = codec

    @property
    def inner(self) -> Any:
        """The underlying byte stream."""
        return self.core.inner

    @inner.setter
    def inner(self, inner: Any) -> None:
        self.core.inner = inner


class Framed(_CoreAccess):
    """Decodes frames read from a stream and encodes frames written to it."""

    def __init__(
        self,
        codec: Any,
        inner: Any,
        read_buffer: BufferLike,
        write_buffer: BufferLike,
    ) -> None:
        state = ReadWriteState(
            ReadState(_buffer(read_buffer)), WriteState(_buffer(write_buffer))
        )
        self.core = FramedCore(codec, inner, state)

    def into_parts(self) -> Tuple[Any, Any, ReadWriteState]:
        """Return the codec, the stream and the read/write state."""
        return self.core.into_parts()

    @classmethod
    def from_parts(cls, codec: Any, inner: Any, state: ReadWriteState) -> "Framed":
        """Build a framer from a codec, a stream and a read/write state."""
        framed = cls.__new__(cls)
        framed.core = FramedCore.from_parts(codec, inner, state)
        return framed

    def framable(self) -> int:
        """Number of buffered bytes that have not been framed yet."""
        return self.core.framable()

    async def maybe_next(self) -> Any:
        """Make one step towards the next frame.

        Returns a frame, ``PENDING`` when the call should be repeated, or
        ``EOF`` when the stream has ended. Raises a ``ReadError`` on failure,
        after which reading should stop.
        """
        return await self.core.maybe_next()

    async def next(self, map: MapFn = None) -> Any:
        """Read the next frame, mapped if ``map`` is given; ``None`` at the end."""
        return await self.core.next(map)

    def stream(self, map: MapFn = None) -> AsyncIterator[Any]:
        """Iterate over frames, mapped if ``map`` is given, until the stream ends."""
        return self.core.stream(map)

    async def send(self, item: Any) -> None:
        """Encode ``item``, write it to the stream and flush."""
        await self.core.send(item)

    def sink(self) -> FrameSink:
        """A sink that sends every item it is given."""
        return self.core.sink()


class FramedRead(_CoreAccess):
    """Decodes frames read from a stream."""

    def __init__(self, codec: Any, reader: Any, buffer: BufferLike) -> None:
        state = ReadWriteState(ReadState(_buffer(buffer)), WriteState.empty())
        self.core = FramedCore(codec, reader, state)

    def into_parts(self) -> Tuple[Any, Any, ReadState]:
        """Return the codec, the reader and the read state."""
        codec, reader, state = self.core.into_parts()
        return codec, reader, state.read

    @classmethod
    def from_parts(cls, codec: Any, reader: Any, state: ReadState) -> "FramedRead":
        """Build a framer from a codec, a reader and a read state."""
        framed = cls.__new__(cls)
        framed.core = FramedCore.from_parts(
            codec, reader, ReadWriteState(state, WriteState.empty())
        )
        return framed

    def framable(self) -> int:
        """Number of buffered bytes that have not been framed yet."""
        return self.core.framable()

    async def maybe_next(self) -> Any:
        """Make one step towards the next frame; see ``Framed.maybe_next``."""
        return await self.core.maybe_next()

    async def next(self, map: MapFn = None) -> Any:
        """Read the next frame, mapped if ``map`` is given; ``None`` at the end."""
        return await self.core.next(map)

    def stream(self, map: MapFn = None) -> AsyncIterator[Any]:
        """Iterate over frames, mapped if ``map`` is given, until the stream ends."""
        return self.core.stream(map)


class FramedWrite(_CoreAccess):
    """Encodes frames and writes them to a stream."""

    def __init__(self, codec: Any, writer: Any, buffer: BufferLike) -> None:
        state = ReadWriteState(ReadState.empty(), WriteState(_buffer(buffer)))
        self.core = FramedCore(codec, writer, state)

    def into_parts(self) -> Tuple[Any, Any, WriteState]:
        """Return the codec, the writer and the write state."""
        codec, writer, state = self.core.into_parts()
        return codec, writer, state.write

    @classmethod
    def from_parts(cls, codec: Any, writer: Any, state: WriteState) -> "FramedWrite":
        """Build a framer from a codec, a writer and a write state."""
        framed = cls.__new__(cls)
        framed.core = FramedCore.from_parts(
            codec, writer, ReadWriteState(ReadState.empty(), state)
        )
        return framed

    async def send(self, item: Any) -> None:
        """Encode ``item``, write it to the stream and flush."""
        await self.core.send(item)

    def sink(self) -> FrameSink:
        """A sink that sends every item it is given."""
        return self.core.sink()