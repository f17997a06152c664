import asyncio

import pytest

from framez.codec.lines import (
    Lines,
    LinesEncodeError,
    StrLines,
    StrLinesDecodeError,
)
from framez.errors import (
    BufferTooSmallError,
    BytesRemainingOnStreamError,
    DecodeFailedError,
    ReadError,
)
from framez.framed import FramedRead, FramedWrite
from framez.io import duplex

BYTE_ITEMS = [
    b"Hel",
    b"lo\n",
    b"Hell",
    b"o, world!\n",
    b"H",
    b"ei\r\n",
    b"sup",
    b"\n",
    b"Hey\r",
    b"\n",
    b"How ",
    b"are y",
]

STR_ITEMS = [item.decode() for item in BYTE_ITEMS]

FULL = [b"Hello", b"Hello, world!", b"Hei", b"sup", b"Hey"]

CASES = [
    (1, 1024, [], BufferTooSmallError),
    (1, 1, [], BufferTooSmallError),
    (1, 2, [], BufferTooSmallError),
    (1, 4, [], BufferTooSmallError),
    (2, 1024, [], BufferTooSmallError),
    (2, 1, [], BufferTooSmallError),
    (2, 2, [], BufferTooSmallError),
    (2, 4, [], BufferTooSmallError),
    (4, 1024, [], BufferTooSmallError),
    (4, 1, [], BufferTooSmallError),
    (4, 2, [], BufferTooSmallError),
    (4, 4, [], BufferTooSmallError),
    (8, 1024, [b"Hello"], BufferTooSmallError),
    (16, 1024, FULL, BytesRemainingOnStreamError),
    (16, 1, FULL, BytesRemainingOnStreamError),
    (16, 2, FULL, BytesRemainingOnStreamError),
    (16, 4, FULL, BytesRemainingOnStreamError),
    (1024, 1024, FULL, BytesRemainingOnStreamError),
]


async def _framed_read(items, codec, buffer_size=1024, duplex_size=1024):
    read, write = duplex(duplex_size)

    async def writer():
        try:
            for item in items:
                await write.write_all(item.encode() if isinstance(item, str) else item)
        except BrokenPipeError:
            return
        write.close()

    task = asyncio.create_task(writer())
    framer = FramedRead(codec, read, buffer_size)
    collected = []
    error = None
    try:
        while (item := await framer.next()) is not None:
            collected.append(item.encode() if isinstance(item, str) else bytes(item))
    except ReadError as err:
        error = err
    read.close()
    await task
    return collected, error


async def _sink_stream(encoder, decoder, items, map):
    read, write = duplex(1024)

    async def writer():
        sink = FramedWrite(encoder, write, 1024).sink()
        for item in items:
            await sink.send(item)
        write.close()

    task = asyncio.create_task(writer())
    framer = FramedRead(decoder, read, 1024)
    collected = [item async for item in framer.stream(map)]
    await task
    return collected


@pytest.mark.asyncio
@pytest.mark.parametrize("buffer_size, duplex_size, expected, error", CASES)
async def test_framed_read(buffer_size, duplex_size, expected, error):
    collected, err = await asyncio.wait_for(
        _framed_read(BYTE_ITEMS, Lines(), buffer_size, duplex_size), 10
    )
    assert collected == expected
    assert isinstance(err, error)


@pytest.mark.asyncio
@pytest.mark.parametrize("buffer_size, duplex_size, expected, error", CASES)
async def test_framed_read_str(buffer_size, duplex_size, expected, error):
    collected, err = await asyncio.wait_for(
        _framed_read(STR_ITEMS, StrLines(), buffer_size, duplex_size), 10
    )
    assert collected == expected
    assert isinstance(err, error)


@pytest.mark.asyncio
async def test_sink_stream():
    items = [b"Hello", b"Hello, world!", b"Hei", b"sup", b"Hey"]
    collected = await asyncio.wait_for(
        _sink_stream(Lines(), Lines(), items, bytes), 10
    )
    assert collected == items


@pytest.mark.asyncio
async def test_sink_stream_str():
    items = ["Hello", "Hello, world!", "Hei", "sup", "Hey"]
    collected = await asyncio.wait_for(
        _sink_stream(StrLines(), StrLines(), items, str), 10
    )
    assert collected == items


@pytest.mark.asyncio
async def test_framed_read_invalid_utf8():
    collected, err = await asyncio.wait_for(
        _framed_read([b"Hello\n", b"\xff\xfe\n"], StrLines()), 10
    )
    assert collected == [b"Hello"]
    assert isinstance(err, DecodeFailedError)
    assert isinstance(err.error, StrLinesDecodeError)


def test_decode_strips_crlf():
    assert Lines().decode(memoryview(bytearray(b"Hei\r\nsup"))) == (b"Hei", 5)


def test_decode_strips_lf():
    assert Lines().decode(memoryview(bytearray(b"sup\nHey"))) == (b"sup", 4)


def test_decode_keeps_inner_carriage_return():
    assert Lines().decode(memoryview(bytearray(b"a\rb\n"))) == (b"a\rb", 4)


def test_decode_resumes_across_calls():
    codec = Lines()
    assert codec.decode(memoryview(bytearray(b"Hel"))) is None
    assert codec.decode(memoryview(bytearray(b"Hello\n"))) == (b"Hello", 6)
    assert codec.decode(memoryview(bytearray(b"\n"))) == (b"", 1)


def test_encode_appends_crlf():
    dst = bytearray(16)
    size = Lines().encode(b"Hello", memoryview(dst))
    assert size == 7
    assert bytes(dst[:size]) == b"Hello\r\n"


def test_encode_buffer_too_small():
    with pytest.raises(LinesEncodeError) as info:
        Lines().encode(b"Hello", memoryview(bytearray(6)))
    assert str(info.value) == "buffer too small"


def test_str_lines_decode():
    assert StrLines().decode(memoryview(bytearray(b"Hello, world!\r\n"))) == (
        "Hello, world!",
        15,
    )


def test_str_lines_decode_invalid_utf8():
    with pytest.raises(StrLinesDecodeError) as info:
        StrLines().decode(memoryview(bytearray(b"\xff\n")))
    assert str(info.value).startswith("utf8 error: ")
    assert isinstance(info.value.error, UnicodeDecodeError)


def test_str_lines_encode_round_trip():
    dst = bytearray(32)
    codec = StrLines()
    size = codec.encode("How are you?", memoryview(dst))
    assert bytes(dst[:size]) == b"How are you?\r\n"
    assert StrLines().decode(memoryview(dst)[:size]) == ("How are you?", size)


def test_str_lines_encode_too_small():
    with pytest.raises(LinesEncodeError):
        StrLines().encode("Hello", memoryview(bytearray(3)))


def test_str_lines_from_lines_keeps_progress():
    inner = Lines()
    assert inner.decode(memoryview(bytearray(b"Hel"))) is None
    codec = StrLines.from_lines(inner)
    assert codec.decode(memoryview(bytearray(b"Hello\n"))) == ("Hello", 6)