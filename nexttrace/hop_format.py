"""One-line rendering of a hop for the classic printer."""

from __future__ import annotations

from enum import IntEnum

from .geodata import IPGeoData
from .hops import Hop, apply_lang_setting

RED_PREFIX = "\033[1;31m"
GREEN_PREFIX = "\033[1;32m"
YELLOW_PREFIX = "\033[1;33m"
BLUE_PREFIX = "\033[1;34m"
CYAN_PREFIX = "\033[1;36m"
RESET_PREFIX = "\033[0m"


class HopInfo(IntEnum):
    """What kind of boundary a hop sits on."""

    GENERAL = 0
    IXP = 1
    PEER = 2
    POP = 3
    ABOARD = 4


_PREFIXES = {
    HopInfo.IXP: CYAN_PREFIX,
    HopInfo.POP: CYAN_PREFIX,
    HopInfo.PEER: YELLOW_PREFIX,
    HopInfo.ABOARD: GREEN_PREFIX,
}


def format_ip_geo_data(data: IPGeoData) -> str:
    """Summarise ``data`` as "ASn, country, prov, city, owner".

    An empty owner is filled from the ISP on ``data`` itself.
    """
    parts = ["AS" + data.asnumber if data.asnumber else "*"]
    if not data.owner:
        data.owner = data.isp
    if not data.prov and not data.city:
        data.owner = data.owner + ", " + data.owner
    else:
        parts.append(data.country)
    if data.prov:
        parts.append(data.prov)
    if data.city:
        parts.append(data.city)
    if data.owner:
        parts.append(data.owner)
    return ", ".join(parts)


def format_hop(hop: Hop, info: HopInfo = HopInfo.GENERAL) -> str:
    """The text the classic printer writes for one probe, newline included."""
    if hop.address is None:
        return "\t*\n"
    apply_lang_setting(hop)
    rtt = f"{hop.rtt * 1000:.2f}ms"
    if hop.hostname:
        text = f"\t{hop.hostname} ({hop.address}) {rtt}"
    else:
        text = f"\t{hop.address} {rtt}"
    if hop.geo is not None:
        text += " " + format_ip_geo_data(hop.geo)
    for label in hop.mpls:
        text += " " + label
    info = HopInfo(info)
    out = _PREFIXES.get(info, "") + text + "\n"
    if info != HopInfo.GENERAL:
        out += RESET_PREFIX
    return out