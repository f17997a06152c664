"""A codec for frames that end with a delimiter."""

from __future__ import annotations

from typing import Optional, Tuple

from ..decode import Decoder
from ..encode import Encoder


class DelimiterEncodeError(Exception):
    """The destination buffer is too small for the item and its delimiter."""

    def __init__(self, message: str = "buffer too small") -> None:
        super().__init__(message)


class Delimiter(Decoder[bytes], Encoder[bytes]):
    """Splits bytes at a delimiter and appends the delimiter when encoding.

    The decoder remembers how far it has searched the current buffer, so one
    instance must not be shared between framing sessions.
    """

    def __init__(self, delimiter: bytes) -> None:
        self._delimiter = bytes(delimiter)
        self._seen = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(delimiter={self._delimiter!r}, seen={self._seen})"

    @property
    def delimiter(self) -> bytes:
        """The delimiter searched for."""
        return self._delimiter

    def decode(self, src: memoryview) -> Optional[Tuple[bytes, int]]:
        """Return the bytes before the first delimiter and the size consumed."""
        width = len(self._delimiter)
        if len(src) < width:
            return None

        if not width:
            end = self._seen + 1
            if len(src) < end:
                return None
            return bytes(src[:end]), end

        data = bytes(src)
        start = data.find(self._delimiter, max(0, self._seen + 1 - width))
        if start < 0:
            self._seen = max(self._seen, len(data))
            return None

        self._seen = 0
        return data[:start], start + width

    def encode(self, item: bytes, dst: memoryview) -> int:
        """Write ``item`` followed by the delimiter into ``dst``."""
        data = bytes(item)
        size = len(data) + len(self._delimiter)
        if len(dst) < size:
            raise DelimiterEncodeError()
        dst[:len(data)] = data
        dst[len(data):size] = self._delimiter
        return size