"""DN42 lookups against local geofeed and PTR CSV files."""

from __future__ import annotations

import csv
import ipaddress
import re
from dataclasses import dataclass
from pathlib import Path

_Network = ipaddress.IPv4Network | ipaddress.IPv6Network


@dataclass(frozen=True)
class GeoFeedRow:
    """One geofeed entry."""

    network: _Network
    cidr: str
    ltd_code: str
    iso3166: str
    city: str
    asn: str = ""
    ipwhois: str = ""


@dataclass(frozen=True)
class PtrRow:
    """Location information matched from a PTR name."""

    iata_code: str = ""
    ltd_code: str = ""
    region: str = ""
    city: str = ""


def _read_csv(path) -> list[list[str]]:
    """Read a CSV file whose records must all have the first record's width."""
    with Path(path).open(newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if row]
    if rows:
        width = len(rows[0])
        for number, row in enumerate(rows, start=1):
            if len(row) != width:
                raise ValueError(f"{path}: record {number} has {len(row)} fields, expected {width}")
    return rows


def _parse_ip(text: str):
    if "%" in text:
        return None
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _parse_cidr(text: str) -> _Network | None:
    if "/" not in text:
        return None
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        return None


def _mask_hex(network: _Network) -> str:
    width = 8 if network.version == 4 else 32
    return format(int(network.netmask), f"0{width}x")


def read_geofeed(path) -> list[GeoFeedRow]:
    """Load a geofeed CSV, most specific networks first."""
    result = []
    for row in _read_csv(path):
        cidr = row[0]
        network = _parse_cidr(cidr)
        if network is None:
            continue
        if len(row) == 4:
            result.append(GeoFeedRow(network, cidr, row[1], row[2], row[3]))
        elif len(row) >= 6:
            result.append(GeoFeedRow(network, cidr, row[1], row[2], row[3], row[4], row[5]))
        else:
            raise ValueError(f"{path}: geofeed record for {cidr} has {len(row)} fields")
    result.sort(key=_mask_hex_of_row, reverse=True)
    return result


def _mask_hex_of_row(row: GeoFeedRow) -> str:
    return _mask_hex(row.network)


def find_geofeed_row(ip: str, rows) -> GeoFeedRow | None:
    """Return the first row whose network contains ``ip``."""
    addr = _parse_ip(ip)
    if addr is None:
        return None
    for row in rows:
        if row.network.version == addr.version and addr in row.network:
            return row
    return None


def get_geofeed(ip: str, path) -> GeoFeedRow | None:
    """Look ``ip`` up in the geofeed file at ``path``."""
    return find_geofeed_row(ip, read_geofeed(path))


def matches_pattern(prefix: str, s: str) -> bool:
    """True if ``prefix`` appears in ``s`` as a delimited PTR label part."""
    try:
        pattern = re.compile(rf"^(.*[-.\d]|^){prefix}[-.\d].*\Z")
    except re.error as exc:
        print("Invalid regular expression:", exc)
        return False
    return pattern.match(s) is not None


def find_ptr_record(ptr: str, path) -> PtrRow:
    """Match a PTR name against city names, then IATA codes, in the CSV at ``path``."""
    rows = _read_csv(path)
    ptr = ptr.lower()
    for row in rows:
        city = row[3]
        if not city:
            continue
        if matches_pattern(city.replace(" ", "").lower(), ptr):
            return PtrRow(ltd_code=row[1], region=row[2], city=row[3])
    for row in rows:
        iata = row[0]
        if not iata:
            continue
        iata = iata.lower()
        if matches_pattern(iata, ptr):
            return PtrRow(iata_code=iata, ltd_code=row[1], region=row[2], city=row[3])
    raise LookupError("ptr not found")