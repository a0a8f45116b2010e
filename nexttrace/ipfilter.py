"""Recognise reserved, private and otherwise special address ranges."""

from __future__ import annotations

import ipaddress

from .geodata import IPGeoData

_Address = ipaddress.IPv4Address | ipaddress.IPv6Address

_RESERVED = (
    ("0.0.0.0/8", "RFC1122"),
    ("100.64.0.0/10", "RFC6598"),
    ("127.0.0.0/8", "RFC1122"),
    ("169.254.0.0/16", "RFC3927"),
    ("192.0.0.0/24", "RFC6890"),
    ("192.0.2.0/24", "RFC5737"),
    ("192.88.99.0/24", "RFC3068"),
    ("198.18.0.0/15", "RFC2544"),
    ("198.51.100.0/24", "RFC5737"),
    ("203.0.113.0/24", "RFC5737"),
    ("224.0.0.0/4", "RFC5771"),
    ("255.255.255.255/32", "RFC0919"),
    ("240.0.0.0/4", "RFC1112"),
    ("fe80::/10", "RFC4291"),
    ("ff00::/8", "RFC4291"),
    ("fec0::/10", "RFC3879"),
    ("fe00::/9", "RFC4291"),
    ("64:ff9b::/96", "RFC6052"),
    ("0::/96", "RFC4291"),
    ("64:ff9b:1::/48", "RFC6052"),
    ("2001:db8::/32", "RFC3849"),
    ("2002::/16", "RFC3056"),
)

# Defense Information System Network
_DOD = (
    "6.0.0.0/8", "7.0.0.0/8", "11.0.0.0/8", "21.0.0.0/8", "22.0.0.0/8",
    "26.0.0.0/8", "28.0.0.0/8", "29.0.0.0/8", "30.0.0.0/8", "33.0.0.0/8",
    "55.0.0.0/8", "214.0.0.0/8", "215.0.0.0/8",
)

_PRIVATE = tuple(
    ipaddress.ip_network(cidr)
    for cidr in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7")
)


def _parse_ip(text: str) -> _Address | None:
    """Parse an address; IPv4-mapped IPv6 addresses come back as IPv4."""
    if not isinstance(text, str) or "%" in text:
        return None
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _is_private(addr: _Address) -> bool:
    return any(addr.version == net.version and addr in net for net in _PRIVATE)


def cidr_range_contains(cidr_range: str, check_ip: str) -> bool:
    """True if ``check_ip`` lies inside ``cidr_range``; False for bad input."""
    if "/" not in cidr_range:
        return False
    try:
        network = ipaddress.ip_network(cidr_range, strict=False)
    except ValueError:
        return False
    addr = _parse_ip(check_ip)
    return addr is not None and addr.version == network.version and addr in network


def _classify(ip: str) -> str | None:
    for cidr, whois in _RESERVED:
        if cidr_range_contains(cidr, ip):
            return whois
    addr = _parse_ip(ip)
    if addr is not None and _is_private(addr):
        return "RFC4193" if cidr_range_contains("fc00::/7", ip) else "RFC1918"
    if any(cidr_range_contains(cidr, ip) for cidr in _DOD):
        return "DOD"
    return None


def filter_ip(ip: str) -> IPGeoData | None:
    """Return a record naming the special range ``ip`` falls in, or None."""
    whois = _classify(ip)
    if whois is None:
        addr = _parse_ip(ip)
        if (addr is None or addr.version == 6) and not cidr_range_contains("2000::/3", ip):
            whois = "INVALID"
    if whois is None:
        return None
    return IPGeoData(asnumber="", whois=whois)