"""Buffer bookkeeping for reading and writing frames."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ReadState:
    """Progress of framing bytes read into ``buffer``.

    ``index`` is the number of bytes read into the buffer and
    ``total_consumed`` the number already handed out as frames.
    """

    buffer: bytearray = field(default_factory=bytearray)
    index: int = 0
    eof: bool = False
    is_framable: bool = False
    shift: bool = False
    total_consumed: int = 0

    @classmethod
    def empty(cls) -> "ReadState":
        """A read state without a buffer."""
        return cls(bytearray())

    def reset(self) -> "ReadState":
        """A fresh read state over the same buffer."""
        return type(self)(self.buffer)

    def framable(self) -> int:
        """Number of buffered bytes not yet consumed by frames."""
        return self.index - self.total_consumed


@dataclass
class WriteState:
    """The buffer frames are encoded into before being written."""

    buffer: bytearray = field(default_factory=bytearray)

    @classmethod
    def empty(cls) -> "WriteState":
        """A write state without a buffer."""
        return cls(bytearray())

    def reset(self) -> "WriteState":
        """A fresh write state over the same buffer."""
        return type(self)(self.buffer)


@dataclass
class ReadWriteState:
    """Read and write states of a bidirectional framer."""

    read: ReadState = field(default_factory=ReadState.empty)
    write: WriteState = field(default_factory=WriteState.empty)

    def reset(self) -> "ReadWriteState":
        """Fresh states over the same buffers."""
        return type(self)(self.read.reset(), self.write.reset())