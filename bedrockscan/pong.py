"""Parsing of the status string carried by a Bedrock pong."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

_log = logging.getLogger(__name__)

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Pong:
    """Server status as advertised in a pong."""

    motd: str
    protocol: int
    version_string: str
    online_player_count: int
    max_player_count: int
    guid: int
    sub_motd: str = ""
    game_mode_string: str = ""
    game_mode_number: int = -1
    ipv4_port: int = 0
    ipv6_port: int = 0


def _parse_int(text: str, bits: int = 64) -> int:
    """Parse a decimal integer; 0 if malformed, clamped if out of range."""
    if not _SIGNED.fullmatch(text):
        return 0
    value = int(text)
    low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    return max(low, min(high, value))


def _parse_uint(text: str, bits: int) -> int:
    """Parse an unsigned decimal; 0 if malformed, clamped if too large."""
    if not _UNSIGNED.fullmatch(text):
        return 0
    return min(int(text), 2**bits - 1)


def pong_from_bytes(data: bytes) -> Pong | None:
    """Parse a semicolon-separated status string, or return None if too short."""
    fields = data.decode("utf-8", errors="replace").split(";")[1:]
    if len(fields) < 6:
        _log.debug("pong status string has too few fields: %r", data)
        return None

    extra = fields[6:]
    sub_motd = extra[0] if len(extra) > 0 else ""
    game_mode_string = extra[1] if len(extra) > 1 else ""
    game_mode_number = _parse_int(extra[2]) if len(extra) > 2 else -1
    ipv4_port = ipv6_port = 0
    if len(extra) > 4:
        ipv4_port = _parse_uint(extra[3], 16)
        ipv6_port = _parse_uint(extra[4], 16)

    return Pong(
        motd=fields[0],
        protocol=_parse_int(fields[1]),
        version_string=fields[2],
        online_player_count=_parse_int(fields[3]),
        max_player_count=_parse_int(fields[4]),
        guid=_parse_int(fields[5]),
        sub_motd=sub_motd,
        game_mode_string=game_mode_string,
        game_mode_number=game_mode_number,
        ipv4_port=ipv4_port,
        ipv6_port=ipv6_port,
    )