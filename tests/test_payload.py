import pytest

from framez.demo.payload import Payload, PayloadFromSliceError, PayloadWriteError
from framez.demo.payload_content import DeviceConfig, Heartbeat, Init
from framez.demo.payload_type import PayloadType


def test_encode_decode():
    buf = bytearray(100)
    payload = Payload(DeviceConfig(sequence_number=12, config="config"))

    written = payload.write_to(buf)
    reconstructed, read = Payload.from_json_slice(PayloadType.DeviceConfig, buf[:written])

    assert written == read
    assert reconstructed == payload


def test_wire_format_is_compact_json():
    buf = bytearray(100)
    written = Payload(DeviceConfig(sequence_number=12, config="config")).write_to(buf)
    assert bytes(buf[:written]) == b'{"sequence_number":12,"config":"config"}'


def test_payload_type():
    assert Payload(Init(sequence_number=0, version="1.0.0")).payload_type() is PayloadType.Init


def test_write_to_memoryview():
    buf = bytearray(50)
    written = Payload(Heartbeat(sequence_number=1)).write_to(memoryview(buf)[10:])
    decoded, _ = Payload.from_json_slice(PayloadType.Heartbeat, buf[10:10 + written])
    assert decoded == Payload(Heartbeat(sequence_number=1))


def test_write_buffer_too_small():
    with pytest.raises(PayloadWriteError):
        Payload(DeviceConfig(sequence_number=12, config="config")).write_to(bytearray(10))


def test_trailing_whitespace_consumed():
    src = b'{"sequence_number":3}  '
    payload, size = Payload.from_json_slice(PayloadType.Heartbeat, src)
    assert payload == Payload(Heartbeat(sequence_number=3))
    assert size == len(src)


@pytest.mark.parametrize(
    "src",
    [
        b'{"sequence_number":3}x',
        b"not json",
        b"[1, 2]",
        b'{"sequence_number":3,"sequence_number":4}',
        b"\xff\xfe",
        b"",
    ],
)
def test_invalid_slices(src):
    with pytest.raises(PayloadFromSliceError):
        Payload.from_json_slice(PayloadType.Heartbeat, src)


def test_wrong_type_for_payload_type():
    with pytest.raises(PayloadFromSliceError):
        Payload.from_json_slice(PayloadType.DeviceConfig, b'{"sequence_number":3}')