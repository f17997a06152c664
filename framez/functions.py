"""Reading and writing frames over explicit read and write states.

The read and write states are kept apart so that a caller can send frames
back through the same stream while still decoding, without splitting it.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .errors import (
    BufferTooSmallError,
    BytesRemainingOnStreamError,
    DecodeFailedError,
    EncodeFailedError,
    ReadIOError,
    WriteIOError,
)
from .logfmt import READ_LOGGER, TRACE, WRITE_LOGGER, format_bytes
from .state import ReadState, WriteState

_read_log = logging.getLogger(READ_LOGGER)
_write_log = logging.getLogger(WRITE_LOGGER)


class _Signal:
    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


PENDING = _Signal("PENDING")
"""Returned by ``maybe_next`` when no frame is ready yet; call it again."""

EOF = _Signal("EOF")
"""Returned by ``maybe_next`` when the stream has ended cleanly."""


class _LazyBytes:
    def __init__(self, buffer: Any, start: int, end: int) -> None:
        self._buffer = buffer
        self._start = start
        self._end = end

    def __str__(self) -> str:
        return format_bytes(bytes(self._buffer[self._start:self._end]))


def _run_decoder(decode: Callable[[memoryview], Any], window: memoryview) -> Any:
    try:
        return decode(window)
    except Exception as err:
        _read_log.error("Failed to decode frame")
        raise DecodeFailedError(err) from err


async def maybe_next(state: ReadState, codec: Any, reader: Any) -> Any:
    """Make one step towards the next frame.

    Returns a decoded item, ``PENDING`` when more work is needed, or ``EOF``
    at the end of the stream. Raises a ``ReadError`` on failure, after which
    the caller should stop reading.
    """
    _read_log.log(TRACE, "maybe_next called")
    _read_log.debug(
        "total_consumed: %d, index: %d, buffer: %s",
        state.total_consumed,
        state.index,
        _LazyBytes(state.buffer, state.total_consumed, state.index),
    )

    if state.shift:
        remaining = state.framable()
        state.buffer[:remaining] = state.buffer[state.total_consumed:state.index]
        state.index = remaining
        state.total_consumed = 0
        state.shift = False
        _read_log.log(TRACE, "Buffer shifted. copied: %d", remaining)
        return PENDING

    if state.is_framable:
        window = memoryview(state.buffer)[state.total_consumed:state.index]

        if state.eof:
            _read_log.log(TRACE, "Framing on EOF")
            result = _run_decoder(codec.decode_eof, window)
            if result is None:
                _read_log.debug("No frame decoded")
                state.is_framable = False
                if state.index != state.total_consumed:
                    _read_log.error("Bytes remaining on stream")
                    raise BytesRemainingOnStreamError()
                return EOF
        else:
            _read_log.log(TRACE, "Framing")
            result = _run_decoder(codec.decode, window)
            if result is None:
                _read_log.debug("No frame decoded")
                state.shift = state.index >= len(state.buffer)
                state.is_framable = False
                return PENDING

        item, size = result
        state.total_consumed += size
        _read_log.debug(
            "Frame decoded, consumed: %d, total_consumed: %d", size, state.total_consumed
        )
        return item

    room = len(state.buffer) - state.index
    if room <= 0:
        _read_log.error("Buffer too small")
        raise BufferTooSmallError()

    _read_log.log(TRACE, "Reading")
    try:
        data = await reader.read(room)
    except OSError as err:
        _read_log.error("Failed to read")
        raise ReadIOError(err) from err

    if len(data) > room:
        raise ReadIOError(ValueError(f"reader returned {len(data)} bytes, asked for {room}"))

    if not data:
        _read_log.warning("Got EOF")
        state.eof = True
    else:
        _read_log.debug("Bytes read. bytes: %d", len(data))
        state.buffer[state.index:state.index + len(data)] = data
        state.index += len(data)

    state.is_framable = True
    return PENDING


async def maybe_next_mapped(
    state: ReadState, codec: Any, reader: Any, map: Callable[[Any], Any]
) -> Any:
    """Like ``maybe_next``, applying ``map`` to a decoded item."""
    result = await maybe_next(state, codec, reader)
    if result is PENDING or result is EOF:
        return result
    return map(result)


async def next_frame(
    state: ReadState,
    codec: Any,
    reader: Any,
    map: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Read until a frame is decoded and return it, mapped if ``map`` is given.

    Returns ``None`` at the end of the stream and raises a ``ReadError`` on
    failure.
    """
    mapper = map if map is not None else (lambda item: item)
    while True:
        result = await maybe_next_mapped(state, codec, reader, mapper)
        if result is EOF:
            return None
        if result is not PENDING:
            return result


async def send(state: WriteState, codec: Any, writer: Any, item: Any) -> None:
    """Encode ``item`` into the write buffer, write it out and flush."""
    try:
        size = codec.encode(item, memoryview(state.buffer))
    except Exception as err:
        _write_log.error("Failed to encode frame")
        raise EncodeFailedError(err) from err

    frame = bytes(state.buffer[:size])

    try:
        await writer.write_all(frame)
    except OSError as err:
        _write_log.error("Failed to write frame")
        raise WriteIOError(err) from err

    _write_log.log(TRACE, "Wrote. buffer: %s", _LazyBytes(frame, 0, size))

    try:
        await writer.flush()
    except OSError as err:
        _write_log.error("Failed to flush")
        raise WriteIOError(err) from err

    _write_log.debug("Flushed. bytes: %d", size)