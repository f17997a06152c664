"""A codec that passes bytes through unchanged."""

from __future__ import annotations

from typing import Optional, Tuple

from ..decode import Decoder
from ..encode import Encoder


class BytesEncodeError(Exception):
    """The destination buffer is too small to hold the bytes."""

    def __init__(self, message: str = "buffer too small") -> None:
        super().__init__(message)


class Bytes(Decoder[bytes], Encoder[bytes]):
    """Decodes every buffered byte as one frame and encodes bytes as they are.

    Decoding always succeeds, even on an empty buffer, so a reader using this
    codec never waits for more input once it has something to frame.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def decode(self, src: memoryview) -> Optional[Tuple[bytes, int]]:
        """Return all of ``src`` as a frame."""
        return bytes(src), len(src)

    def encode(self, item: bytes, dst: memoryview) -> int:
        """Copy ``item`` to the start of ``dst``."""
        data = bytes(item)
        size = len(data)
        if len(dst) < size:
            raise BytesEncodeError()
        dst[:size] = data
        return size