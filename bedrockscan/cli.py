"""Command line entry point that scans address ranges for Bedrock servers."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Union

from .limit import BasicLimiter
from .output import Database, Multi, Output, Print
from .ranges import NetIPRange, UInt32Range
from .scanner import Scanner, read_worker

_log = logging.getLogger("bedrockscan")

_PART_COUNT = 64
_UINT32_MAX = 0xFFFFFFFF

AddressRange = Union[NetIPRange, UInt32Range]


def _whole_ipv4_space() -> list[AddressRange]:
    part = _UINT32_MAX // _PART_COUNT
    ranges: list[AddressRange] = [
        UInt32Range(part * i, part * (i + 1)) for i in range(_PART_COUNT - 1)
    ]
    ranges.append(UInt32Range(part * (_PART_COUNT - 1), _UINT32_MAX))
    return ranges


def build_ranges(what: str) -> list[AddressRange]:
    """Turn a prefix, "ALL", or the path of a file of prefixes into ranges.

    Unparsable lines of a file are logged and skipped; an unreadable file
    raises OSError.
    """
    try:
        return [NetIPRange(what)]
    except ValueError:
        pass
    if what.lower() == "all":
        return _whole_ipv4_space()

    ranges: list[AddressRange] = []
    for line in Path(what).read_bytes().split(b"\n"):
        text = line.decode("utf-8", errors="replace")
        try:
            ranges.append(NetIPRange(text))
        except ValueError as exc:
            _log.info("Error parsing prefix from file %s: %s", what, exc)
    return ranges


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bedrockscan", description="Scan address ranges for Bedrock servers."
    )
    parser.add_argument(
        "-what", "--what", default="ALL", help="What to scan (subnet, file path or ALL)"
    )
    parser.add_argument(
        "-packets-per-second",
        "--packets-per-second",
        dest="packets_per_second",
        type=int,
        default=5_000,
        help="Number of max packets per second",
    )
    parser.add_argument(
        "-write-to-file",
        "--write-to-file",
        dest="write_to_file",
        default="",
        help="Path to the file to write results to",
    )
    parser.add_argument(
        "-num-sockets",
        "--num-sockets",
        dest="num_sockets",
        type=int,
        default=1,
        help="Number of sockets",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a scan and report every server that answers."""
    parser = _parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )
    if args.num_sockets <= 0:
        parser.error("got negative number of sockets")
    if args.packets_per_second <= 0:
        parser.error("packets per second must be positive")

    _log.info(
        "Settings:\n- Subnet/file: %s\n- PPS (Packets/s): %d\n- Write to file: %s",
        args.what,
        args.packets_per_second,
        args.write_to_file or "(none)",
    )

    try:
        ranges = build_ranges(args.what)
    except OSError as exc:
        _log.error("%s", exc)
        return 1

    sockets = []
    for _ in range(args.num_sockets):
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.bind(("", 0))
        sockets.append(sock)

    database = Database(args.write_to_file) if args.write_to_file else None
    outputs: list[Output] = [database] if database is not None else []
    outputs.append(Print())
    output = Multi(*outputs)

    done = threading.Event()
    readers = [
        threading.Thread(target=read_worker, args=(sock, output, done), daemon=True)
        for sock in sockets
    ]
    for reader in readers:
        reader.start()

    limiter = BasicLimiter(args.packets_per_second)
    scanners = [
        threading.Thread(
            target=Scanner(address_range).scan,
            args=(sockets[i % len(sockets)], limiter),
            daemon=True,
        )
        for i, address_range in enumerate(ranges)
    ]
    try:
        for scanner in scanners:
            scanner.start()
        for scanner in scanners:
            scanner.join()
        done.set()
        for reader in readers:
            reader.join()
    finally:
        done.set()
        for sock in sockets:
            sock.close()
        if database is not None:
            database.close()
    print("Ended work")
    return 0