"""A codec for demo packets."""

from __future__ import annotations

from typing import Optional, Tuple

from ..decode import Decoder
from ..encode import Encoder
from .packet import Packet


class PacketCodec(Decoder[Packet], Encoder[Packet]):
    """Decodes and encodes checksummed JSON packets."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def decode(self, src: memoryview) -> Optional[Tuple[Packet, int]]:
        """The packet at the start of ``src`` and its length, or ``None``."""
        return Packet.maybe_from_prefix(src)

    def encode(self, item: Packet, dst: memoryview) -> int:
        """Write ``item`` into ``dst`` and return its length."""
        return item.write_to(dst)