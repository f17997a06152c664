"""Encoder interface for writing frames into a buffer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

ItemT = TypeVar("ItemT")


class Encoder(ABC, Generic[ItemT]):
    """Encodes an item into a destination buffer.

    ``encode`` writes the encoded frame to the start of ``dst`` and returns
    the number of bytes written. It raises when the item cannot be encoded,
    for example because ``dst`` is too small.
    """

    @abstractmethod
    def encode(self, item: ItemT, dst: memoryview) -> int:
        """Encode ``item`` into ``dst`` and return the encoded size."""