from framez.state import ReadState, ReadWriteState, WriteState


def test_read_state_defaults():
    state = ReadState(bytearray(8))
    assert state.index == 0
    assert state.total_consumed == 0
    assert not state.eof and not state.is_framable and not state.shift
    assert state.framable() == 0


def test_framable_is_unconsumed_bytes():
    state = ReadState(bytearray(16), index=10, total_consumed=4)
    assert state.framable() == 10 - 4


def test_read_state_reset_keeps_buffer():
    buf = bytearray(8)
    state = ReadState(buf, index=5, eof=True, is_framable=True, shift=True, total_consumed=3)
    fresh = state.reset()
    assert fresh.buffer is buf
    assert fresh == ReadState(buf)


def test_empty_states_have_no_buffer():
    assert len(ReadState.empty().buffer) == 0
    assert len(WriteState.empty().buffer) == 0


def test_write_state_reset_keeps_buffer():
    buf = bytearray(4)
    assert WriteState(buf).reset().buffer is buf


def test_read_write_state_reset():
    rbuf, wbuf = bytearray(4), bytearray(4)
    state = ReadWriteState(ReadState(rbuf, index=3, eof=True), WriteState(wbuf))
    fresh = state.reset()
    assert fresh.read == ReadState(rbuf)
    assert fresh.write.buffer is wbuf