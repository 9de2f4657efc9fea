"""RakNet unconnected ping and pong packets."""

from __future__ import annotations

import struct
from dataclasses import dataclass

MAGIC = bytes(
    (
        0x00, 0xFF, 0xFF, 0x00, 0xFE, 0xFE, 0xFE, 0xFE,
        0xFD, 0xFD, 0xFD, 0xFD, 0x12, 0x34, 0x56, 0x78,
    )
)

UNCONNECTED_PING_ID = 0x01
UNCONNECTED_PONG_ID = 0x1C

_PING = struct.Struct(">Bq16sq")
_PONG_HEADER = struct.Struct(">qq16sH")


class PacketDecodeError(ValueError):
    """Raised when a packet is shorter than its layout requires."""


def _to_int64(value: int) -> int:
    return ((value + 2**63) % 2**64) - 2**63


@dataclass(frozen=True)
class UnconnectedPing:
    """An unconnected ping sent to discover a server."""

    ping_time: int
    client_guid: int

    def encode(self) -> bytes:
        """Return the 33-byte wire form, packet ID included."""
        return _PING.pack(
            UNCONNECTED_PING_ID,
            _to_int64(self.ping_time),
            MAGIC,
            _to_int64(self.client_guid),
        )


@dataclass(frozen=True)
class UnconnectedPong:
    """An unconnected pong answered by a server."""

    ping_time: int
    server_guid: int
    data: bytes


def decode_pong(data: bytes) -> UnconnectedPong:
    """Decode a pong body (the bytes after the packet ID)."""
    if len(data) < _PONG_HEADER.size:
        raise PacketDecodeError("unexpected EOF")
    ping_time, server_guid, _magic, length = _PONG_HEADER.unpack_from(data)
    end = _PONG_HEADER.size + length
    if len(data) < end:
        raise PacketDecodeError("unexpected EOF")
    return UnconnectedPong(
        ping_time=ping_time,
        server_guid=server_guid,
        data=bytes(data[_PONG_HEADER.size:end]),
    )