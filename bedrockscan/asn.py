"""Command that collects the IPv4 prefixes announced by an autonomous system."""

from __future__ import annotations

import argparse
import ipaddress
import logging
import os
from collections.abc import Sequence
from contextlib import suppress

import requests
from bs4 import BeautifulSoup

IPINFO_URL = "https://ipinfo.io/{}"


def parse_ranges(html: str) -> list[ipaddress.IPv4Interface]:
    """Return the IPv4 prefixes linked from an AS page, in page order."""
    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    prefixes = []
    for link in soup.select("a[class]"):
        if link.get("class") != "charcoal-link ":
            continue
        text = link.get_text()
        _, sep, bits = text.partition("/")
        if not sep or not bits.isdigit() or text != text.strip():
            continue
        try:
            prefix = ipaddress.ip_interface(text)
        except ValueError:
            continue
        if isinstance(prefix, ipaddress.IPv4Interface):
            prefixes.append(prefix)
    return prefixes


def scrap_ranges(asn: str) -> list[ipaddress.IPv4Interface]:
    """Fetch the page of ``asn`` and return its IPv4 prefixes; empty on failure."""
    try:
        response = requests.get(IPINFO_URL.format(asn), timeout=30)
    except requests.RequestException:
        return []
    return parse_ranges(response.text) if response.ok else []


def main(argv: Sequence[str] | None = None) -> int:
    """Save the prefixes of an AS to a file, one per line."""
    parser = argparse.ArgumentParser(prog="bedrockscan-asn")
    parser.add_argument("-as", "--as", dest="asn", default="AS00000", help="ASN to scrap")
    parser.add_argument("-save", "--save", dest="path", default="as.txt", help="File to save the output to")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")

    ranges = scrap_ranges(args.asn)
    if not ranges:
        raise SystemExit("ranges list is empty")
    with suppress(OSError):
        os.remove(args.path)
    with open(args.path, "w", encoding="utf-8") as file:
        file.write("\n".join(map(str, ranges)))
    logging.getLogger(__name__).info("Saved %d ranges to file %s", len(ranges), args.path)
    return 0