"""Small programs showing framers over in-memory streams."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

from .codec.lines import StrLines
from .framed import Framed, FramedRead, FramedWrite
from .io import duplex

_log = logging.getLogger("framez.examples")

_ECHO_ITEMS = ("Hello, world!", "How are you?", "Goodbye!", "Close")
_ITEMS = ("Hello, world!", "How are you?", "Goodbye!")


async def run_echo() -> Tuple[List[str], List[str]]:
    """A server echoes lines back until it gets ``Close``.

    Returns the lines the server received and the lines the client got back.
    """
    server_stream, client_stream = duplex(16)
    server = Framed(StrLines(), server_stream, 1024, 1024)
    client = Framed(StrLines(), client_stream, 1024, 1024)
    server_received: List[str] = []
    client_received: List[str] = []

    async def serve() -> None:
        try:
            while (item := await server.next()) is not None:
                _log.info("server received frame: %s", item)
                server_received.append(item)
                await server.send(item)
                if item == "Close":
                    _log.info("server closing connection")
                    break
        finally:
            server_stream.close()

    async def talk() -> None:
        try:
            for item in _ECHO_ITEMS:
                _log.info("client sending frame: %s", item)
                await client.send(item)
            while (item := await client.next()) is not None:
                _log.info("client received frame: %s", item)
                client_received.append(item)
        finally:
            client_stream.close()

    await asyncio.gather(serve(), talk())
    return server_received, client_received


async def run_stream() -> List[str]:
    """Send lines through a sink and read them back as an async stream."""
    read, write = duplex(1024)
    framed_read = FramedRead(StrLines(), read, 1024)
    framed_write = FramedWrite(StrLines(), write, 1024)
    received: List[str] = []

    async def reader() -> None:
        try:
            async for item in framed_read.stream(str):
                _log.info("reader received frame: %s", item)
                received.append(item)
        finally:
            read.close()

    async def writer() -> None:
        sink = framed_write.sink()
        try:
            for item in _ITEMS:
                _log.info("writer sending frame: %s", item)
                await sink.send(item)
        finally:
            write.close()

    await asyncio.gather(reader(), writer())
    return received


async def run_zerocopy() -> List[str]:
    """Send lines through a tiny duplex and read them back frame by frame."""
    read, write = duplex(8)
    framed_read = FramedRead(StrLines(), read, 1024)
    framed_write = FramedWrite(StrLines(), write, 1024)
    received: List[str] = []

    async def reader() -> None:
        try:
            while (item := await framed_read.next()) is not None:
                _log.info("reader received frame: %s", item)
                received.append(item)
        finally:
            read.close()

    async def writer() -> None:
        try:
            for item in _ITEMS:
                _log.info("writer sending frame: %s", item)
                await framed_write.send(item)
        finally:
            write.close()

    await asyncio.gather(reader(), writer())
    return received


_EXAMPLES = {"echo": run_echo, "stream": run_stream, "zerocopy": run_zerocopy}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the examples by name."""
    parser = argparse.ArgumentParser(
        prog="framez-examples", description="Run a framing example."
    )
    parser.add_argument("example", choices=sorted(_EXAMPLES))
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    asyncio.run(_EXAMPLES[args.example]())
    return 0