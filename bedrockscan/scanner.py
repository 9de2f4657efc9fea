"""Sending pings across address ranges and reading the pongs that come back."""

from __future__ import annotations

import ipaddress
import random
import socket
import threading
import time
from collections.abc import Iterable
from typing import Any, Union

from .limit import Limiter
from .output import Output
from .pong import pong_from_bytes
from .raknet import (
    UNCONNECTED_PONG_ID,
    PacketDecodeError,
    UnconnectedPing,
    decode_pong,
)

PORT = 19132
"""Default port of Bedrock servers; every ping is sent here."""

GRACE_SECONDS = 5.0
"""How long a read worker keeps reading after it has been told to stop."""

POLL_INTERVAL = 0.25
"""Socket timeout a read worker uses so that it notices being told to stop."""

_REFRESH_SECONDS = 1.0
_BUFFER_SIZE = 1500

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def ping_message() -> bytes:
    """Return an encoded ping stamped with the current time and a random GUID."""
    return UnconnectedPing(
        ping_time=time.time_ns() // 1_000_000,
        client_guid=random.getrandbits(64) - 2**63,
    ).encode()


class Scanner:
    """Pings every address of a range once."""

    def __init__(self, addresses: Iterable[IPAddress]) -> None:
        self.addresses = addresses

    def scan(self, sock: Any, limiter: Limiter) -> int:
        """Ping each address through ``sock``, paced by ``limiter``.

        Send errors are ignored. Returns the number of addresses pinged.
        """
        message = ping_message()
        last_update = time.monotonic()
        count = 0
        for address in self.addresses:
            limiter.increment()
            if time.monotonic() - last_update > _REFRESH_SECONDS:
                last_update = time.monotonic()
                message = ping_message()
            try:
                sock.sendto(message, (str(address), PORT))
            except OSError:
                pass
            count += 1
        return count


def _handle_packet(packet: bytes, addr: Any, output: Output) -> None:
    if not packet or packet[0] != UNCONNECTED_PONG_ID:
        return
    try:
        pong_packet = decode_pong(packet[1:])
    except PacketDecodeError as exc:
        print(f"Error decoding packet: {exc}")
        return
    pong = pong_from_bytes(pong_packet.data)
    if pong is None:
        return
    output.write(addr, pong)


def read_worker(sock: Any, output: Output, done: threading.Event) -> None:
    """Read pongs from ``sock`` and pass them to ``output``.

    Once ``done`` is set, reading goes on for ``GRACE_SECONDS`` more seconds.
    """
    grace = GRACE_SECONDS
    sock.settimeout(POLL_INTERVAL)
    deadline: float | None = None
    while True:
        if deadline is None and done.is_set():
            deadline = time.monotonic() + grace
        if deadline is not None and time.monotonic() >= deadline:
            print("Read deadline exceeded!")
            return
        try:
            packet, addr = sock.recvfrom(_BUFFER_SIZE)
        except socket.timeout:
            continue
        except OSError as exc:
            print(f"Error reading from socket: {exc}")
            continue
        _handle_packet(packet, addr, output)