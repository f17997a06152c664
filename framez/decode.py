"""Decoder interface for turning buffered bytes into frames."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Tuple, TypeVar

ItemT = TypeVar("ItemT")


class Decoder(ABC, Generic[ItemT]):
    """Decodes one frame from the front of a buffer.

    ``decode`` receives a writable memoryview over the bytes that have been
    read but not framed yet. It returns ``(item, consumed)`` once a whole
    frame is available, or ``None`` when more bytes are needed. A decoder
    reports malformed input by raising.
    """

    @abstractmethod
    def decode(self, src: memoryview) -> Optional[Tuple[ItemT, int]]:
        """Decode a frame from ``src``."""

    def decode_eof(self, src: memoryview) -> Optional[Tuple[ItemT, int]]:
        """Decode a frame from ``src`` once the stream has ended."""
        return self.decode(src)