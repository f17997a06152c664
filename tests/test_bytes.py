import pytest

from framez.codec.bytes import Bytes, BytesEncodeError
from framez.errors import EncodeFailedError
from framez.framed import FramedRead, FramedWrite
from framez.io import duplex


def test_decode_returns_whole_buffer():
    data = bytearray(b"some frame bytes")
    item, size = Bytes().decode(memoryview(data))
    assert item == bytes(data)
    assert size == len(data)


def test_decode_empty_buffer_yields_empty_frame():
    assert Bytes().decode(memoryview(bytearray())) == (b"", 0)


def test_encode_copies_item_to_start_of_buffer():
    dst = bytearray(10)
    size = Bytes().encode(b"abc", memoryview(dst))
    assert size == 3
    assert bytes(dst[:size]) == b"abc"
    assert bytes(dst[size:]) == bytes(len(dst) - size)


def test_encode_exact_fit():
    dst = bytearray(4)
    assert Bytes().encode(b"wxyz", memoryview(dst)) == 4
    assert bytes(dst) == b"wxyz"


def test_encode_buffer_too_small():
    with pytest.raises(BytesEncodeError) as info:
        Bytes().encode(b"abcdef", memoryview(bytearray(5)))
    assert str(info.value) == "buffer too small"


def test_encode_decode_round_trip():
    codec = Bytes()
    dst = bytearray(32)
    size = codec.encode(b"payload", memoryview(dst))
    item, consumed = codec.decode(memoryview(dst)[:size])
    assert item == b"payload"
    assert consumed == size


@pytest.mark.asyncio
async def test_framed_read_returns_available_chunk():
    read, write = duplex(64)
    await write.write_all(b"hello")
    framer = FramedRead(Bytes(), read, 64)
    assert await framer.next() == b"hello"
    # Everything has been consumed; the codec still frames the empty rest.
    assert await framer.next() == b""
    assert framer.framable() == 0


@pytest.mark.asyncio
async def test_framed_write_sends_bytes():
    read, write = duplex(64)
    framer = FramedWrite(Bytes(), write, 16)
    await framer.send(b"abc")
    assert await read.read(16) == b"abc"


@pytest.mark.asyncio
async def test_framed_write_encode_error():
    _, write = duplex(64)
    framer = FramedWrite(Bytes(), write, 2)
    with pytest.raises(EncodeFailedError) as info:
        await framer.send(b"abc")
    assert isinstance(info.value.error, BytesEncodeError)