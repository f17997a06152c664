"""Sends demo packets through an in-memory stream and reads them back."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from ..framed import FramedRead, FramedWrite
from ..io import duplex
from .codec import PacketCodec
from .packet import Packet
from .payload_content import (
    DeviceConfig,
    DeviceConfigAck,
    Heartbeat,
    HeartbeatAck,
    Init,
    InitAck,
)

_reader_log = logging.getLogger("framez.demo.reader")
_writer_log = logging.getLogger("framez.demo.writer")


def demo_packets() -> List[Packet]:
    """The packets exchanged by the demo, in sending order."""
    return [
        Packet.new(Init(sequence_number=0, version="1.0.0")),
        Packet.new(InitAck(sequence_number=0, version="1.0.0")),
        Packet.new(Heartbeat(sequence_number=1)),
        Packet.new(HeartbeatAck(sequence_number=1)),
        Packet.new(DeviceConfig(sequence_number=2, config="very-important-config")),
        Packet.new(DeviceConfigAck(sequence_number=2)),
    ]


async def run_packet_demo() -> List[Packet]:
    """Send the demo packets through a duplex stream and return what was read."""
    read, write = duplex(1024)
    framed_read = FramedRead(PacketCodec(), read, 1024)
    framed_write = FramedWrite(PacketCodec(), write, 1024)
    received: List[Packet] = []

    async def reader() -> None:
        try:
            while (packet := await framed_read.next()) is not None:
                _reader_log.info("received packet: %r", packet)
                received.append(packet)
        finally:
            read.close()

    async def writer() -> None:
        try:
            for packet in demo_packets():
                _writer_log.info("sending packet: %r", packet)
                await framed_write.send(packet)
        finally:
            write.close()

    await asyncio.gather(reader(), writer())
    return received


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the packet demo."""
    parser = argparse.ArgumentParser(
        prog="framez-demo",
        description="Exchange checksummed JSON packets over an in-memory stream.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    asyncio.run(run_packet_demo())
    return 0