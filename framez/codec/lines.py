"""Codecs for newline-terminated lines of bytes or text."""

from __future__ import annotations

from typing import Optional, Tuple

from ..decode import Decoder
from ..encode import Encoder

_NEWLINE = b"\n"
_CR = 0x0D
_LINE_END = b"\r\n"


class LinesEncodeError(Exception):
    """The destination buffer is too small for the line and its ending."""

    def __init__(self, message: str = "buffer too small") -> None:
        super().__init__(message)


class StrLinesDecodeError(Exception):
    """A decoded line is not valid UTF-8."""

    def __init__(self, error: UnicodeDecodeError) -> None:
        super().__init__(f"utf8 error: {error}")
        self.error = error


class Lines(Decoder[bytes], Encoder[bytes]):
    """Splits bytes into lines ending in ``\\n`` or ``\\r\\n``; encodes with ``\\r\\n``.

    The decoder remembers how far it has searched the current buffer, so one
    instance must not be shared between framing sessions.
    """

    def __init__(self) -> None:
        self._seen = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seen={self._seen})"

    def decode(self, src: memoryview) -> Optional[Tuple[bytes, int]]:
        """Return the first line without its ending and the size consumed."""
        data = bytes(src)
        pos = data.find(_NEWLINE, self._seen)
        if pos < 0:
            self._seen = max(self._seen, len(data))
            return None

        self._seen = 0
        end = pos - 1 if pos > 0 and data[pos - 1] == _CR else pos
        return data[:end], pos + 1

    def encode(self, item: bytes, dst: memoryview) -> int:
        """Write ``item`` followed by ``\\r\\n`` into ``dst``."""
        data = bytes(item)
        size = len(data) + len(_LINE_END)
        if len(dst) < size:
            raise LinesEncodeError()
        dst[:len(data)] = data
        dst[len(data):size] = _LINE_END
        return size


class StrLines(Decoder[str], Encoder[str]):
    """Like ``Lines``, but frames are UTF-8 text."""

    def __init__(self, inner: Optional[Lines] = None) -> None:
        self._inner = inner if inner is not None else Lines()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(inner={self._inner!r})"

    @classmethod
    def from_lines(cls, inner: Lines) -> "StrLines":
        """Wrap an existing ``Lines`` codec."""
        return cls(inner)

    def decode(self, src: memoryview) -> Optional[Tuple[str, int]]:
        """Return the first line as text and the size consumed."""
        result = self._inner.decode(src)
        if result is None:
            return None
        line, size = result
        try:
            return line.decode("utf-8"), size
        except UnicodeDecodeError as err:
            raise StrLinesDecodeError(err) from err

    def encode(self, item: str, dst: memoryview) -> int:
        """Write ``item`` as UTF-8 followed by ``\\r\\n`` into ``dst``."""
        return self._inner.encode(item.encode("utf-8"), dst)