import asyncio

import pytest

from framez.decode import Decoder
from framez.encode import Encoder
from framez.errors import (
    BufferTooSmallError,
    BytesRemainingOnStreamError,
    EncodeFailedError,
)
from framez.framed_core import FramedCore
from framez.functions import EOF, PENDING
from framez.io import duplex
from framez.state import ReadState, ReadWriteState, WriteState


class NewlineCodec(Decoder, Encoder):
    def decode(self, src):
        index = bytes(src).find(b"\n")
        if index < 0:
            return None
        return bytes(src[:index]), index + 1

    def encode(self, item, dst):
        size = len(item) + 1
        if len(dst) < size:
            raise ValueError("buffer too small")
        dst[: len(item)] = item
        dst[len(item) : size] = b"\n"
        return size


def make_core(inner, read_size=64, write_size=64):
    state = ReadWriteState(ReadState(bytearray(read_size)), WriteState(bytearray(write_size)))
    return FramedCore(NewlineCodec(), inner, state)


async def feed(stream, chunks):
    for chunk in chunks:
        await stream.write_all(chunk)
    stream.close()


def test_parts_round_trip():
    codec = NewlineCodec()
    state = ReadWriteState(ReadState(bytearray(8)), WriteState(bytearray(8)))
    core = FramedCore.from_parts(codec, "stream", state)
    got_codec, got_inner, got_state = core.into_parts()
    assert got_codec is codec
    assert got_inner == "stream"
    assert got_state is state


@pytest.mark.asyncio
async def test_maybe_next_steps_and_framable():
    a, b = duplex(64)
    core = make_core(a)
    assert core.framable() == 0
    await b.write_all(b"ab")
    assert await core.maybe_next() is PENDING
    assert core.framable() == 2
    assert await core.maybe_next() is PENDING
    await b.write_all(b"c\n")
    b.close()
    results = []
    while True:
        result = await core.maybe_next()
        if result is EOF:
            break
        if result is not PENDING:
            results.append(result)
    assert results == [b"abc"]


@pytest.mark.asyncio
async def test_next_returns_frames_then_none():
    a, b = duplex(4)
    core = make_core(a)
    task = asyncio.create_task(feed(b, [b"Hel", b"lo\nwor", b"ld\n"]))
    assert await core.next() == b"Hello"
    assert await core.next(lambda item: item.decode()) == "world"
    assert await core.next() is None
    await task


@pytest.mark.asyncio
async def test_stream_collects_mapped_frames():
    a, b = duplex(8)
    core = make_core(a)
    task = asyncio.create_task(feed(b, [b"one\ntwo\n", b"three\n"]))
    collected = [item async for item in core.stream(bytes.upper)]
    assert collected == [b"ONE", b"TWO", b"THREE"]
    await task


@pytest.mark.asyncio
async def test_stream_ends_with_error_on_leftover_bytes():
    a, b = duplex(64)
    core = make_core(a)
    await feed(b, [b"full\npartial"])
    collected = []
    with pytest.raises(BytesRemainingOnStreamError):
        async for item in core.stream():
            collected.append(item)
    assert collected == [b"full"]


@pytest.mark.asyncio
async def test_buffer_too_small():
    a, b = duplex(64)
    core = make_core(a, read_size=4)
    await feed(b, [b"longer line\n"])
    with pytest.raises(BufferTooSmallError):
        await core.next()


@pytest.mark.asyncio
async def test_send_and_sink_write_encoded_frames():
    a, b = duplex(64)
    core = make_core(a)
    await core.send(b"Hello")
    sink = core.sink()
    await sink.send(b"Hey")
    assert await b.read(64) == b"Hello\nHey\n"


@pytest.mark.asyncio
async def test_send_encode_error():
    a, b = duplex(64)
    core = make_core(a, write_size=3)
    with pytest.raises(EncodeFailedError):
        await core.send(b"Hello")