"""A header followed by the raw bytes of its payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .header import Header
from .payload import Payload, PayloadWriteError

Buffer = Union[bytes, bytearray, memoryview]


class RawPacketWriteError(Exception):
    """A packet could not be written into the destination buffer."""

    HEADER_WRITE = "header_write"
    PAYLOAD_WRITE = "payload_write"

    _MESSAGES = {
        HEADER_WRITE: "Failed to write header",
        PAYLOAD_WRITE: "Failed to write payload",
    }

    def __init__(self, kind: str) -> None:
        super().__init__(self._MESSAGES[kind])
        self.kind = kind


class RawPacketFromSliceError(Exception):
    """The bytes start with a header that does not describe a valid packet."""

    CHECKSUM = "checksum"
    INVALID_LENGTH = "invalid_length"

    _MESSAGES = {
        CHECKSUM: "Invalid checksum",
        INVALID_LENGTH: "Packet length is shorter than the header",
    }

    def __init__(self, kind: str) -> None:
        super().__init__(self._MESSAGES[kind])
        self.kind = kind


@dataclass(frozen=True)
class RawPacket:
    """A parsed header and every byte that followed it.

    ``raw_payload`` may hold more bytes than the payload itself.
    """

    header: Header
    raw_payload: bytes

    def payload_bytes(self) -> bytes:
        """The payload bytes as delimited by the header."""
        return self.raw_payload[: self.header.payload_length()]

    def payload_length(self) -> int:
        """Payload length according to the header."""
        return self.header.packet_length - Header.size()

    @staticmethod
    def write_to(payload: Payload, dst: Union[bytearray, memoryview]) -> int:
        """Write a checksummed packet holding ``payload`` into ``dst``.

        Returns the packet length.
        """
        size = Header.size()
        if len(dst) < size:
            raise RawPacketWriteError(RawPacketWriteError.HEADER_WRITE)

        view = memoryview(dst)
        try:
            payload_length = payload.write_to(view[size:])
        except PayloadWriteError as err:
            raise RawPacketWriteError(RawPacketWriteError.PAYLOAD_WRITE) from err

        header = Header()
        try:
            header.make_ready_for_checksum(payload, payload_length)
        except ValueError as err:
            raise RawPacketWriteError(RawPacketWriteError.PAYLOAD_WRITE) from err

        header.write_into(view)
        header.checksum = Header.calculate_checksum(view[: header.packet_length])
        header.write_into(view)
        return header.packet_length

    @classmethod
    def maybe_from_prefix(cls, src: Buffer) -> Optional["RawPacket"]:
        """The packet at the start of ``src``, or ``None`` if more bytes are needed.

        Raises ``RawPacketFromSliceError`` when the checksum does not match
        or the header carries an impossible length.
        """
        header = Header.from_prefix(src)
        if header is None:
            return None

        size = Header.size()
        if header.packet_length < size:
            raise RawPacketFromSliceError(RawPacketFromSliceError.INVALID_LENGTH)

        if len(src) - size < header.payload_length():
            return None

        checked = bytearray(src[: header.packet_length])
        Header(header.packet_length, header.raw_payload_type, 0).write_into(checked)
        if Header.calculate_checksum(checked) != header.checksum:
            raise RawPacketFromSliceError(RawPacketFromSliceError.CHECKSUM)

        return cls(header, bytes(src[size:]))