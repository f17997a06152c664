"""Payloads serialised as compact JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from .payload_content import (
    PayloadContent,
    content_from_dict,
    content_to_dict,
    payload_type_of,
)
from .payload_type import PayloadType


class PayloadWriteError(Exception):
    """The payload could not be serialised into the buffer."""


class PayloadFromSliceError(Exception):
    """The bytes do not hold a valid payload of the expected type."""


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> dict:
    result = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate field {key!r}")
        result[key] = value
    return result


_DECODER = json.JSONDecoder(object_pairs_hook=_reject_duplicates)


@dataclass(frozen=True)
class Payload:
    """The content carried by a packet."""

    content: PayloadContent

    def payload_type(self) -> PayloadType:
        """The payload type of the content."""
        return payload_type_of(self.content)

    def write_to(self, dst: Union[bytearray, memoryview]) -> int:
        """Serialise the content as JSON into ``dst`` and return its length."""
        text = json.dumps(
            content_to_dict(self.content), separators=(",", ":"), ensure_ascii=False
        )
        data = text.encode("utf-8")
        if len(dst) < len(data):
            raise PayloadWriteError("buffer too small")
        dst[:len(data)] = data
        return len(data)

    @classmethod
    def from_json_slice(
        cls, payload_type: PayloadType, src: Union[bytes, bytearray, memoryview]
    ) -> Tuple["Payload", int]:
        """Parse a payload of ``payload_type`` from JSON bytes.

        Returns the payload and the number of bytes consumed, which includes
        trailing whitespace. Anything else after the value is an error.
        """
        try:
            text = bytes(src).decode("utf-8")
            data = _DECODER.decode(text)
            content = content_from_dict(payload_type, data)
        except ValueError as err:
            raise PayloadFromSliceError(str(err)) from err
        return cls(content), len(src)