import socket
import struct
import threading
import time

import pytest

from bedrockscan import scanner as scanner_module
from bedrockscan.limit import Limiter
from bedrockscan.output import Output
from bedrockscan.raknet import MAGIC, decode_pong
from bedrockscan.ranges import NetIPRange, UInt32Range
from bedrockscan.scanner import PORT, Scanner, ping_message, read_worker

_PING = struct.Struct(">Bq16sq")


class CountingLimiter(Limiter):
    def __init__(self):
        self.count = 0

    def increment(self):
        self.count += 1


class RecordingSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def sendto(self, data, addr):
        self.sent.append((data, addr))
        if self.fail:
            raise OSError("unreachable")


class Recorder(Output):
    def __init__(self):
        self.items = []

    def write(self, addr, pong):
        self.items.append((addr, pong))


class QueueSocket:
    def __init__(self, packets, done):
        self.packets = list(packets)
        self.done = done
        self.timeout = None

    def settimeout(self, value):
        self.timeout = value

    def recvfrom(self, size):
        if self.packets:
            return self.packets.pop(0)
        self.done.set()
        raise socket.timeout("timed out")


def _pong_packet(status: bytes, ping_time=1, guid=2) -> bytes:
    body = struct.pack(">qq16sH", ping_time, guid, MAGIC, len(status)) + status
    return bytes([0x1C]) + body


STATUS = b"MCPE;Dedicated Server;390;1.14.60;0;10;13253860892328930865;Bedrock level;Survival;1;19132;19133;"


@pytest.fixture
def quick_worker(monkeypatch):
    monkeypatch.setattr(scanner_module, "GRACE_SECONDS", 0.0)
    monkeypatch.setattr(scanner_module, "POLL_INTERVAL", 0.01)


def test_ping_message_layout():
    message = ping_message()
    packet_id, ping_time, magic, _guid = _PING.unpack(message)
    assert len(message) == 33
    assert packet_id == 1
    assert magic == MAGIC
    assert abs(ping_time - time.time() * 1000) < 60_000


def test_ping_message_guid_is_random():
    guids = {_PING.unpack(ping_message())[3] for _ in range(5)}
    assert len(guids) > 1


def test_scan_pings_every_address_of_prefix():
    sock = RecordingSocket()
    limiter = CountingLimiter()
    count = Scanner(NetIPRange("192.0.2.0/30")).scan(sock, limiter)
    destinations = [addr for _, addr in sock.sent]
    assert count == 4
    assert limiter.count == 4
    assert destinations == [
        ("192.0.2.0", PORT),
        ("192.0.2.1", PORT),
        ("192.0.2.2", PORT),
        ("192.0.2.3", PORT),
    ]
    assert all(data[0] == 1 and data[9:25] == MAGIC for data, _ in sock.sent)


def test_scan_uint32_range_stops_before_constraint():
    sock = RecordingSocket()
    Scanner(UInt32Range(10, 13)).scan(sock, CountingLimiter())
    assert [addr[0] for _, addr in sock.sent] == ["0.0.0.10", "0.0.0.11", "0.0.0.12"]


def test_scan_ignores_send_errors():
    sock = RecordingSocket(fail=True)
    count = Scanner(NetIPRange("198.51.100.7/32")).scan(sock, CountingLimiter())
    assert count == 1
    assert len(sock.sent) == 1


def test_read_worker_writes_decoded_pongs(quick_worker):
    done = threading.Event()
    source = ("203.0.113.5", PORT)
    sock = QueueSocket([(_pong_packet(STATUS), source)], done)
    recorder = Recorder()
    read_worker(sock, recorder, done)
    assert len(recorder.items) == 1
    addr, pong = recorder.items[0]
    assert addr == source
    assert pong.motd == "Dedicated Server"
    assert pong.version_string == "1.14.60"
    assert pong.sub_motd == "Bedrock level"
    assert sock.timeout == 0.01


def test_read_worker_skips_other_packets(quick_worker, capsys):
    done = threading.Event()
    source = ("203.0.113.6", PORT)
    packets = [
        (b"", source),
        (b"\x01abc", source),
        (b"\x1c\x00\x01", source),
        (_pong_packet(b"MCPE;short"), source),
    ]
    recorder = Recorder()
    read_worker(QueueSocket(packets, done), recorder, done)
    out = capsys.readouterr().out
    assert recorder.items == []
    assert "Error decoding packet" in out
    assert "Read deadline exceeded!" in out


def test_read_worker_over_loopback(monkeypatch):
    monkeypatch.setattr(scanner_module, "GRACE_SECONDS", 0.5)
    monkeypatch.setattr(scanner_module, "POLL_INTERVAL", 0.05)
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sender = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    recorder = Recorder()
    done = threading.Event()
    try:
        receiver.bind(("127.0.0.1", 0))
        sender.sendto(_pong_packet(STATUS), receiver.getsockname())
        done.set()
        started = time.monotonic()
        read_worker(receiver, recorder, done)
        elapsed = time.monotonic() - started
    finally:
        receiver.close()
        sender.close()
    assert len(recorder.items) == 1
    assert recorder.items[0][1].motd == "Dedicated Server"
    assert elapsed < 5


def test_pong_packet_helper_round_trips():
    decoded = decode_pong(_pong_packet(STATUS)[1:])
    assert decoded.data == STATUS