"""Packets: a payload framed by a checksummed header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .header import Header
from .payload import Payload, PayloadFromSliceError
from .payload_content import PayloadContent
from .raw_packet import RawPacket, RawPacketFromSliceError, RawPacketWriteError


class PacketWriteError(Exception):
    """The packet could not be written."""

    def __init__(self, message: str = "Failed to write raw packet") -> None:
        super().__init__(message)


class PacketFromSliceError(Exception):
    """The bytes do not start with a valid packet."""

    RAW_PACKET = "raw_packet"
    UNKNOWN_PAYLOAD_TYPE = "unknown_payload_type"
    PAYLOAD = "payload"

    _MESSAGES = {
        RAW_PACKET: "Invalid raw packet",
        UNKNOWN_PAYLOAD_TYPE: "Unknown payload type",
        PAYLOAD: "Invalid payload",
    }

    def __init__(self, kind: str) -> None:
        super().__init__(self._MESSAGES[kind])
        self.kind = kind


@dataclass(frozen=True)
class Packet:
    """A packet carrying one payload."""

    payload: Payload

    @classmethod
    def new(cls, content: PayloadContent) -> "Packet":
        """A packet carrying ``content``."""
        return cls(Payload(content))

    def write_to(self, dst: Union[bytearray, memoryview]) -> int:
        """Write the packet into ``dst`` and return its length."""
        try:
            return RawPacket.write_to(self.payload, dst)
        except RawPacketWriteError as err:
            raise PacketWriteError() from err

    @classmethod
    def maybe_from_prefix(
        cls, src: Union[bytes, bytearray, memoryview]
    ) -> Optional[Tuple["Packet", int]]:
        """The packet at the start of ``src`` and its length, or ``None``."""
        try:
            raw = RawPacket.maybe_from_prefix(src)
        except RawPacketFromSliceError as err:
            raise PacketFromSliceError(PacketFromSliceError.RAW_PACKET) from err
        if raw is None:
            return None

        payload_type = raw.header.payload_type()
        if payload_type is None:
            raise PacketFromSliceError(PacketFromSliceError.UNKNOWN_PAYLOAD_TYPE)

        try:
            payload, payload_size = Payload.from_json_slice(payload_type, raw.payload_bytes())
        except PayloadFromSliceError as err:
            raise PacketFromSliceError(PacketFromSliceError.PAYLOAD) from err

        return cls(payload), Header.size() + payload_size