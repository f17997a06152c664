"""The messages a packet payload can hold."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from .payload_type import PayloadType

_U32_MAX = 0xFFFF_FFFF


@dataclass(frozen=True)
class Init:
    """Opens the connection."""

    sequence_number: int
    version: str


@dataclass(frozen=True)
class InitAck:
    """Acknowledges an ``Init``."""

    sequence_number: int
    version: str


@dataclass(frozen=True)
class Heartbeat:
    """Keeps the connection alive."""

    sequence_number: int


@dataclass(frozen=True)
class HeartbeatAck:
    """Acknowledges a ``Heartbeat``."""

    sequence_number: int


@dataclass(frozen=True)
class DeviceConfig:
    """Configuration sent to a device."""

    sequence_number: int
    config: str


@dataclass(frozen=True)
class DeviceConfigAck:
    """Acknowledges a ``DeviceConfig``."""

    sequence_number: int


PayloadContent = Union[Init, InitAck, Heartbeat, HeartbeatAck, DeviceConfig, DeviceConfigAck]

_CLASSES = {
    PayloadType.Init: Init,
    PayloadType.InitAck: InitAck,
    PayloadType.Heartbeat: Heartbeat,
    PayloadType.HeartbeatAck: HeartbeatAck,
    PayloadType.DeviceConfig: DeviceConfig,
    PayloadType.DeviceConfigAck: DeviceConfigAck,
}

_TYPES = {cls: payload_type for payload_type, cls in _CLASSES.items()}

_STRING_FIELDS = {"version", "config"}


def payload_type_of(content: PayloadContent) -> PayloadType:
    """The payload type that goes with ``content``."""
    try:
        return _TYPES[type(content)]
    except KeyError:
        raise TypeError(f"not a payload content: {content!r}") from None


def content_to_dict(content: PayloadContent) -> Dict[str, Any]:
    """The fields of ``content`` in declaration order."""
    payload_type_of(content)
    return dataclasses.asdict(content)


def _check_field(name: str, value: Any) -> Any:
    if name in _STRING_FIELDS:
        if not isinstance(value, str):
            raise ValueError(f"field {name!r} must be a string")
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {name!r} must be an integer")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"field {name!r} is out of range")
    return value


def content_from_dict(payload_type: PayloadType, data: Mapping[str, Any]) -> PayloadContent:
    """Build the content of the given type from its fields.

    Unknown fields are ignored; missing or mistyped fields raise ``ValueError``.
    """
    cls = _CLASSES[PayloadType(payload_type)]
    if not isinstance(data, Mapping):
        raise ValueError("payload content must be an object")
    values = {}
    for field in dataclasses.fields(cls):
        if field.name not in data:
            raise ValueError(f"missing field {field.name!r}")
        values[field.name] = _check_field(field.name, data[field.name])
    return cls(**values)