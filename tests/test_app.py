import asyncio

import pytest

from framez.demo.app import demo_packets, main, run_packet_demo
from framez.demo.payload_type import PayloadType


def test_demo_packets_cover_every_type_in_order():
    types = [packet.payload.payload_type() for packet in demo_packets()]
    assert types == list(PayloadType)


def test_demo_packets_sequence_numbers():
    numbers = [packet.payload.content.sequence_number for packet in demo_packets()]
    assert numbers == sorted(numbers)
    assert numbers[0] == 0


@pytest.mark.asyncio
async def test_run_packet_demo_reads_what_was_sent():
    received = await asyncio.wait_for(run_packet_demo(), 10)
    assert received == demo_packets()


def test_main_succeeds():
    assert main([]) == 0


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit):
        main(["--bogus"])