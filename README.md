# bedrockscan

Find Minecraft Bedrock Edition servers by sending RakNet unconnected pings
to UDP port 19132 across IPv4 ranges and collecting the pongs that come back.

Every server that answers is logged to standard error with its address,
MOTD, player counts, version and game mode, and can also be stored in an
SQLite database.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Scanning

Scan a single subnet:

```
bedrockscan --what 192.0.2.0/24
```

Scanning starts at the address written in the prefix and runs to the last
address of its network, so `192.0.2.10/24` scans `192.0.2.10` to
`192.0.2.255`. Pings are sent from IPv4 UDP sockets.

Scan every prefix listed in a file, one CIDR prefix per line (lines that do
not parse are logged and skipped; a file that cannot be read ends the
command with exit status 1):

```
bedrockscan --what ranges.txt
```

Scan the whole IPv4 space (the default, `ALL`), split into 64 parts that are
scanned concurrently:

```
bedrockscan --what ALL
```

Options (each may also be written with a single dash, e.g. `-what`):

| Option | Default | Meaning |
| --- | --- | --- |
| `--what` | `ALL` | A subnet, a path to a file of subnets, or `ALL` |
| `--packets-per-second` | `5000` | Upper bound on pings sent per second, shared by all ranges; must be positive |
| `--write-to-file` | none | SQLite database file to store found servers in |
| `--num-sockets` | `1` | Number of UDP sockets to send and receive on; must be positive |

A fresh ping, with the current time and a random client GUID, is built at
most once a second. Once all pings are sent, the scanner keeps listening for
late replies for five more seconds, prints `Ended work` and exits.

Results written with `--write-to-file` go to a `model_servers` table keyed
by server address; a server seen again replaces its earlier row. Each row
also carries the MOTD and sub-MOTD with Minecraft formatting codes (`§`
followed by one character) removed.

## Building range files from an ASN

`bedrockscan-asn` fetches the public page of an autonomous system, collects
the IPv4 prefixes linked from it, and writes them, one per line, to a file
that `bedrockscan --what` accepts. An existing file at that path is
replaced.

```
bedrockscan-asn --as AS64500 --save as.txt
bedrockscan --what as.txt
```

| Option | Default | Meaning |
| --- | --- | --- |
| `--as` | `AS00000` | The autonomous system to look up |
| `--save` | `as.txt` | File to write the prefixes to |

The command fails with `ranges list is empty` if no prefixes are found,
including when the page cannot be fetched.

## Using it as a library

```python
from bedrockscan.raknet import UnconnectedPing, decode_pong
from bedrockscan.pong import pong_from_bytes
from bedrockscan.ranges import NetIPRange

packet = UnconnectedPing(ping_time=0, client_guid=1).encode()  # 33 bytes

pong = pong_from_bytes(b"MCPE;My Server;712;1.21.20;3;20;1234;World;Survival;1;19132;19133;")
print(pong.motd, pong.online_player_count, pong.max_player_count)

for address in NetIPRange("192.0.2.0/30"):
    print(address)
```

- `bedrockscan.raknet`: `UnconnectedPing.encode()` builds a ping;
  `decode_pong(data)` decodes a pong body (the bytes after the packet ID)
  and raises `PacketDecodeError` when it is too short.
- `bedrockscan.pong`: `pong_from_bytes(data)` parses a status string into a
  `Pong`, or returns `None` when it has too few fields. Older, shorter
  status strings are accepted; missing fields keep their defaults.
- `bedrockscan.ranges`: `NetIPRange` and `UInt32Range` are iterables of
  addresses.
- `bedrockscan.limit`: `BasicLimiter(per_second)` spaces calls to
  `increment()` evenly across threads.
- `bedrockscan.output`: `Print`, `Database` and `Multi` share one
  `write(addr, pong)` interface (the `Output` base class), so custom outputs
  can be combined with them; `clean_text(text)` strips formatting codes.
- `bedrockscan.scanner`: `Scanner(addresses).scan(sock, limiter)` pings each
  address and returns how many were pinged; `read_worker(sock, output, done)`
  reads pongs until five seconds after the `done` event is set.

## What it does not do

The scanner only sends unconnected pings and records the answers. It does
not connect to servers, log in, or query anything beyond what the pong
carries, and it only pings port 19132.