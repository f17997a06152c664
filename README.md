# framez

Async framing for byte streams. A *framer* reads bytes from an async reader
into a fixed-size buffer and asks a *decoder* to cut frames out of it; on the
other side it asks an *encoder* to turn an item into bytes in a fixed-size
buffer and writes them out. The buffers are reused, so a frame can never be
larger than the buffer you hand in.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Pieces

- `framez.framed`: `Framed` (read and write), `FramedRead` and `FramedWrite`.
  Buffers are given as a `bytearray` or as a size in bytes.
  - `next(map=None)` returns the next frame (passed through `map` if given),
    or `None` at the end of the stream.
  - `stream(map=None)` is an async iterator over frames.
  - `maybe_next()` takes a single step and returns a frame,
    `framez.functions.PENDING` (call again) or `framez.functions.EOF`.
  - `send(item)` encodes, writes and flushes one frame; `sink()` returns a
    `FrameSink` whose `send(item)` does the same.
  - `framable()`, `into_parts()` and `from_parts(...)`; the `codec` and
    `inner` attributes give the codec and the stream.
- `framez.codec.lines`: `Lines` (bytes ending in `\n`, a trailing `\r` is
  dropped; encodes with `\r\n`) and `StrLines` (the same, as UTF-8 text;
  invalid UTF-8 raises `StrLinesDecodeError`). `StrLines.from_lines` wraps an
  existing `Lines`.
- `framez.codec.delimiter`: `Delimiter(b"##")`, frames ending in any byte
  sequence; the delimiter is appended when encoding.
- `framez.codec.bytes`: `Bytes`, whatever is in the buffer is one frame.
- `framez.decode` / `framez.encode`: the `Decoder` and `Encoder` bases for
  writing your own codecs. `decode(src)` gets a memoryview of the unframed
  bytes and returns `(item, consumed)` or `None`; `encode(item, dst)` writes
  into `dst` and returns the size.
- `framez.io`: `duplex(max_size)` for an in-memory pair of connected streams
  (with `close()`), `StreamAdapter` to wrap an `asyncio.StreamReader` and/or
  `asyncio.StreamWriter`, and `Noop`, which accepts every write and fills
  every read with zero bytes.
- `framez.functions`: `maybe_next`, `maybe_next_mapped`, `next_frame` and
  `send`, which work on a `ReadState` or `WriteState` directly. They let one
  `Framed` echo frames back while it is still reading.
- `framez.state`: `ReadState`, `WriteState` and `ReadWriteState`.
- `framez.errors`: `ReadError` with its cases `ReadIOError`,
  `DecodeFailedError`, `BufferTooSmallError` and
  `BytesRemainingOnStreamError`; `WriteError` with `WriteIOError` and
  `EncodeFailedError`. Errors from a codec are kept on the `error` attribute.
- `framez.logfmt`: `format_bytes(data, style)` with `FormatStyle`. Framers log
  to the `framez.read` and `framez.write` loggers, including a `TRACE` level
  (5) below `DEBUG`.

## Reading and writing lines

```python
import asyncio

from framez.codec.lines import StrLines
from framez.framed import FramedRead, FramedWrite
from framez.io import duplex


async def main():
    read_side, write_side = duplex(1024)

    framed_read = FramedRead(StrLines(), read_side, bytearray(1024))
    framed_write = FramedWrite(StrLines(), write_side, bytearray(1024))

    async def writer():
        for line in ["Hello, world!", "How are you?", "Goodbye!"]:
            await framed_write.send(line)
        write_side.close()

    async def reader():
        async for line in framed_read.stream(str):
            print("received", line)

    await asyncio.gather(writer(), reader())


asyncio.run(main())
```

Reading ends cleanly when the stream reaches its end with no bytes left over.
If bytes remain that do not make up a whole frame, `BytesRemainingOnStreamError`
is raised; if a single frame does not fit in the read buffer,
`BufferTooSmallError` is raised. An encoder that cannot fit a frame in the
write buffer leads to `EncodeFailedError`.

## The packet demo

`framez.demo` holds a small packet protocol built on top of the framer: an
8-byte big-endian header (packet length, payload type, CRC-32 checksum)
followed by a compact JSON payload. `PacketCodec` decodes and encodes `Packet`
values carrying `Init`, `InitAck`, `Heartbeat`, `HeartbeatAck`,
`DeviceConfig` and `DeviceConfigAck` contents. A bad checksum, an unknown
payload type or an invalid payload raises `PacketFromSliceError`.

## Commands

Run one of the line-framing examples over an in-memory stream, logging each
frame sent and received:

```
framez-examples echo
framez-examples stream
framez-examples zerocopy
```

Send the demo packets through an in-memory stream and log what arrives:

```
framez-demo
```

## What it does not do

The commands only exchange data over in-memory streams; there is no network
server or client, and no serial port support. To frame a real connection,
wrap asyncio streams in `StreamAdapter` or pass any object with async
`read(n)`, `write_all(data)` and `flush()` methods.