"""The codec, stream and buffers that every framer is built on."""

from __future__ import annotations

from typing import Any, AsyncIterator, Callable, Optional, Tuple

from . import functions
from .functions import EOF, PENDING
from .state import ReadWriteState


def _identity(item: Any) -> Any:
    return item


class FramedCore:
    """A codec, a byte stream and the read and write states used with them.

    ``codec``, ``inner`` and ``state`` are public so that the functions in
    ``framez.functions`` can be called on them directly.
    """

    def __init__(self, codec: Any, inner: Any, state: ReadWriteState) -> None:
        self.codec = codec
        self.inner = inner
        self.state = state

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(codec={self.codec!r}, inner={self.inner!r}, "
            f"state={self.state!r})"
        )

    def into_parts(self) -> Tuple[Any, Any, ReadWriteState]:
        """Return the codec, the stream and the state."""
        return self.codec, self.inner, self.state

    @classmethod
    def from_parts(cls, codec: Any, inner: Any, state: ReadWriteState) -> "FramedCore":
        """Build a core from a codec, a stream and a state."""
        return cls(codec, inner, state)

    def framable(self) -> int:
        """Number of buffered bytes that have not been framed yet."""
        return self.state.read.framable()

    async def maybe_next(self) -> Any:
        """Make one step towards the next frame.

        Returns a frame, ``PENDING`` when the call should be repeated, or
        ``EOF`` when the stream has ended. Raises a ``ReadError`` on failure.
        """
        return await functions.maybe_next(self.state.read, self.codec, self.inner)

    async def next(self, map: Optional[Callable[[Any], Any]] = None) -> Any:
        """Read the next frame, mapped if ``map`` is given; ``None`` at the end."""
        return await functions.next_frame(self.state.read, self.codec, self.inner, map)

    async def stream(
        self, map: Optional[Callable[[Any], Any]] = None
    ) -> AsyncIterator[Any]:
        """Yield frames, mapped if ``map`` is given, until the stream ends.

        A read error is raised from the iteration and ends it.
        """
        mapper = map if map is not None else _identity
        while True:
            result = await functions.maybe_next_mapped(
                self.state.read, self.codec, self.inner, mapper
            )
            if result is EOF:
                return
            if result is PENDING:
                continue
            yield result

    async def send(self, item: Any) -> None:
        """Encode ``item``, write it to the stream and flush."""
        await functions.send(self.state.write, self.codec, self.inner, item)

    def sink(self) -> "FrameSink":
        """A sink that sends every item it is given through this core."""
        return FrameSink(self)


class FrameSink:
    """Sends items through a framer one after another."""

    def __init__(self, core: FramedCore) -> None:
        self._core = core

    async def send(self, item: Any) -> None:
        """Encode and write ``item``, then flush."""
        await self._core.send(item)