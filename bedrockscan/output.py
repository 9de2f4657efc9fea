"""Destinations for discovered servers."""

from __future__ import annotations

import re
import sqlite3
import sys
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, TextIO

from .pong import Pong

_FORMAT_CODE = re.compile("§.", re.DOTALL)

_COLUMNS = {
    "address": "TEXT PRIMARY KEY",
    "motd": "TEXT",
    "clean_motd": "TEXT",
    "protocol": "INTEGER",
    "version_string": "TEXT",
    "online_player_count": "INTEGER",
    "max_player_count": "INTEGER",
    "guid": "INTEGER",
    "sub_motd": "TEXT",
    "clean_sub_motd": "TEXT",
    "game_mode_string": "TEXT",
    "game_mode_number": "INTEGER",
    "ipv4_port": "INTEGER",
    "ipv6_port": "INTEGER",
}
_CREATE_TABLE = "CREATE TABLE IF NOT EXISTS model_servers ({})".format(
    ", ".join(f"{name} {kind}" for name, kind in _COLUMNS.items())
)
_UPSERT = "INSERT OR REPLACE INTO model_servers ({}) VALUES ({})".format(
    ", ".join(_COLUMNS), ", ".join("?" * len(_COLUMNS))
)


def clean_text(text: str) -> str:
    """Strip Minecraft formatting codes (section sign plus one character)."""
    return _FORMAT_CODE.sub("", text)


def _format_addr(addr: Any) -> str:
    if isinstance(addr, tuple):
        host, port = addr[0], addr[1]
        return f"[{host}]:{port}" if ":" in str(host) else f"{host}:{port}"
    return str(addr)


class Output(ABC):
    """Receives each server that answered."""

    @abstractmethod
    def write(self, addr: Any, pong: Pong) -> None:
        """Record one server's answer."""


class Database(Output):
    """Stores servers in an SQLite file, one row per address."""

    def __init__(self, path: str) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._conn:
            self._conn.execute(_CREATE_TABLE)

    def write(self, addr: Any, pong: Pong) -> None:
        row = (
            _format_addr(addr),
            pong.motd,
            clean_text(pong.motd),
            pong.protocol,
            pong.version_string,
            pong.online_player_count,
            pong.max_player_count,
            pong.guid,
            pong.sub_motd,
            clean_text(pong.sub_motd),
            pong.game_mode_string,
            pong.game_mode_number,
            pong.ipv4_port,
            pong.ipv6_port,
        )
        with self._lock, self._conn:
            self._conn.execute(_UPSERT, row)

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class Multi(Output):
    """Passes every server on to each of several outputs in turn."""

    def __init__(self, *outputs: Output) -> None:
        self.outputs = outputs

    def write(self, addr: Any, pong: Pong) -> None:
        for output in self.outputs:
            output.write(addr, pong)


class Print(Output):
    """Logs a readable summary of each server."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def write(self, addr: Any, pong: Pong) -> None:
        stream = self.stream or sys.stderr
        stream.write(
            f"{time.strftime('%Y/%m/%d %H:%M:%S')} Server found!\n"
            f" | Address: {_format_addr(addr)}\n"
            f" | MOTD: {pong.motd} | {pong.sub_motd}\n"
            f" | Online: {pong.online_player_count}/{pong.max_player_count}\n"
            f" | Version: {pong.version_string} ({pong.protocol})\n"
            f" | Game Mode: {pong.game_mode_string} ({pong.game_mode_number})\n"
        )
        stream.flush()