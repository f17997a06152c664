"""The fixed-size header in front of every packet."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import Optional, Union

from .payload import Payload
from .payload_type import PayloadType

_LAYOUT = struct.Struct(">HHI")
_U16_MAX = 0xFFFF


@dataclass
class Header:
    """Packet length, payload type and CRC-32 checksum, all big-endian."""

    packet_length: int = 0
    raw_payload_type: int = 0
    checksum: int = 0

    @classmethod
    def size(cls) -> int:
        """Size of the header on the wire."""
        return _LAYOUT.size

    @staticmethod
    def calculate_checksum(data: Union[bytes, bytearray, memoryview]) -> int:
        """CRC-32 of ``data``."""
        return zlib.crc32(data) & 0xFFFF_FFFF

    def payload_type(self) -> Optional[PayloadType]:
        """The payload type, or ``None`` if the raw value is unknown."""
        return PayloadType.from_u16(self.raw_payload_type)

    def payload_length(self) -> int:
        """Payload length implied by the packet length."""
        length = self.packet_length - self.size()
        if length < 0:
            raise ValueError("packet length is shorter than the header")
        return length

    def make_ready_for_checksum(self, payload: Payload, payload_length: int) -> None:
        """Set the length and payload type and clear the checksum."""
        packet_length = self.size() + payload_length
        if packet_length > _U16_MAX:
            raise ValueError("packet length does not fit in 16 bits")
        self.packet_length = packet_length
        self.raw_payload_type = int(payload.payload_type())
        self.checksum = 0

    @classmethod
    def from_prefix(cls, src: Union[bytes, bytearray, memoryview]) -> Optional["Header"]:
        """The header at the start of ``src``, or ``None`` if it is too short."""
        if len(src) < cls.size():
            return None
        packet_length, raw_payload_type, checksum = _LAYOUT.unpack_from(src)
        return cls(packet_length, raw_payload_type, checksum)

    def write_into(self, dst: Union[bytearray, memoryview]) -> int:
        """Write the header to the start of ``dst`` and return its size."""
        if len(dst) < self.size():
            raise ValueError("buffer too small for header")
        try:
            _LAYOUT.pack_into(dst, 0, self.packet_length, self.raw_payload_type, self.checksum)
        except struct.error as err:
            raise ValueError(str(err)) from err
        return self.size()