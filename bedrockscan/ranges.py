"""Address ranges to scan."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterator

_UINT32_MAX = 0xFFFFFFFF


class NetIPRange:
    """Addresses from a prefix's own address to the end of its network."""

    def __init__(self, prefix: str) -> None:
        _, sep, bits = prefix.partition("/")
        if not sep or not bits.isdigit():
            raise ValueError(f"invalid prefix: {prefix!r}")
        self._interface = ipaddress.ip_interface(prefix)

    def __iter__(self) -> Iterator[ipaddress.IPv4Address | ipaddress.IPv6Address]:
        address_type = type(self._interface.ip)
        last = int(self._interface.network.broadcast_address)
        for value in range(int(self._interface.ip), last + 1):
            yield address_type(value)


class UInt32Range:
    """IPv4 addresses from ``start`` up to, not including, ``constraint``.

    The start address is always produced.
    """

    def __init__(self, start: int, constraint: int) -> None:
        if not (0 <= start <= _UINT32_MAX and 0 <= constraint <= _UINT32_MAX):
            raise ValueError(f"out of uint32 range: {start}, {constraint}")
        self.start = start
        self.constraint = constraint

    def __iter__(self) -> Iterator[ipaddress.IPv4Address]:
        yield ipaddress.IPv4Address(self.start)
        for value in range(self.start + 1, min(self.constraint, _UINT32_MAX)):
            yield ipaddress.IPv4Address(value)