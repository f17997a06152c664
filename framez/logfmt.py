"""Logging names and rendering of byte buffers for log output."""

from __future__ import annotations

import enum
import logging

TRACE = 5
READ_LOGGER = "framez.read"
WRITE_LOGGER = "framez.write"

logging.addLevelName(TRACE, "TRACE")
logging.getLogger("framez").addHandler(logging.NullHandler())


class FormatStyle(enum.Enum):
    """How bytes are rendered in log messages."""

    CHAR = "char"
    PRETTY_HEX = "pretty-hex"
    PLAIN_HEX = "hex"


_CHAR_ESCAPES = {
    0x00: "\\0",
    0x09: "\\t",
    0x0A: "\\n",
    0x0D: "\\r",
    0x27: "\\'",
    0x5C: "\\\\",
}


def _char(byte: int) -> str:
    escaped = _CHAR_ESCAPES.get(byte)
    if escaped is None:
        ch = chr(byte)
        escaped = ch if ch.isprintable() else f"\\u{{{byte:x}}}"
    return f"'{escaped}'"


def format_bytes(data: bytes, style: FormatStyle = FormatStyle.CHAR) -> str:
    """Render ``data`` as a bracketed list in the given style."""
    if style is FormatStyle.CHAR:
        parts = (_char(b) for b in data)
    elif style is FormatStyle.PRETTY_HEX:
        parts = (f"0x{b:02X}" for b in data)
    else:
        parts = (f"{b:02X}" for b in data)
    return "[" + ", ".join(parts) + "]"