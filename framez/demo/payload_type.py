"""Payload types carried in a packet header."""

from __future__ import annotations

import enum
from typing import Optional


class PayloadType(enum.IntEnum):
    """The kind of payload a packet carries, as sent on the wire."""

    Init = 1
    InitAck = 2
    Heartbeat = 3
    HeartbeatAck = 4
    DeviceConfig = 5
    DeviceConfigAck = 6

    @classmethod
    def from_u16(cls, value: int) -> Optional["PayloadType"]:
        """The payload type for a raw value, or ``None`` if it is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None