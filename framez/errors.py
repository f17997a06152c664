"""Exceptions raised while reading or writing frames."""

from __future__ import annotations


class ReadError(Exception):
    """A frame could not be read."""


class ReadIOError(ReadError):
    """The underlying reader failed."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"IO error: {error}")
        self.error = error


class DecodeFailedError(ReadError):
    """The decoder rejected the buffered bytes."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Decode error: {error}")
        self.error = error


class BufferTooSmallError(ReadError):
    """The read buffer is full and still holds no complete frame."""

    def __init__(self) -> None:
        super().__init__("Buffer too small")


class BytesRemainingOnStreamError(ReadError):
    """The stream ended with bytes that do not form a frame."""

    def __init__(self) -> None:
        super().__init__("Bytes remaining on stream")


class WriteError(Exception):
    """A frame could not be written."""


class WriteIOError(WriteError):
    """The underlying writer failed."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"IO error: {error}")
        self.error = error


class EncodeFailedError(WriteError):
    """The encoder could not encode the item."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Encode error: {error}")
        self.error = error