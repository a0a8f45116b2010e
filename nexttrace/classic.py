"""Classic (BestTrace-like) output with boundary highlighting."""

from __future__ import annotations

from .hop_format import HopInfo, format_hop
from .hops import Hop, TraceResult

_PEER_KEYWORDS = ("china", "ct", "cu", "cm", "cnc", "4134", "4837", "4809", "9929")


def find_latest_available_hop(result: TraceResult, ttl: int, probe_index: int) -> int:
    """The nearest earlier TTL whose probe has a located answer, or -1."""
    while ttl > 0:
        ttl -= 1
        probes = result.hops[ttl]
        if probe_index >= len(probes):
            continue
        hop = probes[probe_index]
        if hop.success and hop.geo is not None:
            if not hop.geo.country:
                continue
            return ttl
    return -1


def unify_name(name: str) -> str:
    """Normalise spellings of China, Hong Kong and Taiwan."""
    if name in ("China", "CN"):
        return "中国"
    if name in ("Hong kong", "香港", "Central and Western"):
        return "中国香港"
    if name in ("Taiwan", "台湾"):
        return "中国台湾"
    return name


def china_isp_peer(hostname: str) -> bool:
    """True if the hostname hints at a Chinese carrier."""
    lowered = hostname.lower()
    return any(keyword in lowered for keyword in _PEER_KEYWORDS)


def china_mainland(hop: Hop) -> bool:
    """True if the hop is located in mainland China."""
    return (
        unify_name(hop.geo.country) == "中国"
        and unify_name(hop.geo.prov) not in ("中国香港", "中国台湾")
    )


def make_hops_type(result: TraceResult, ttl: int) -> dict[int, HopInfo]:
    """Classify each probe at ``ttl``; probes left out are general."""
    types: dict[int, HopInfo] = {}
    for index, hop in enumerate(result.hops[ttl]):
        if not hop.success or hop.geo is None:
            continue
        previous_ttl = find_latest_available_hop(result, ttl, index)
        if previous_ttl == -1:
            types[index] = HopInfo.GENERAL
            continue
        previous = result.hops[previous_ttl][index]
        if "IXP" in hop.geo.district or "ix" in hop.hostname.lower():
            types[index] = HopInfo.IXP
        elif "Peer" in hop.geo.district or china_isp_peer(hop.hostname):
            types[index] = HopInfo.PEER
        elif "PoP" in hop.geo.district:
            types[index] = HopInfo.POP
        elif (
            previous.geo.country != "LAN Address"
            and hop.geo.country != "LAN Address"
            and hop.geo.country != ""
            and china_mainland(previous) != china_mainland(hop)
        ):
            types[index] = HopInfo.ABOARD
    return types


def classic_printer(result: TraceResult, ttl: int) -> None:
    """Print every probe at ``ttl`` in the classic layout."""
    print(ttl + 1, end="")
    types = make_hops_type(result, ttl)
    for index, hop in enumerate(result.hops[ttl]):
        print(format_hop(hop, types.get(index, HopInfo.GENERAL)), end="")