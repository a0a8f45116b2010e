"""Real-time output: one block per distinct address answering at a TTL."""

from __future__ import annotations

import ipaddress

from termcolor import colored

from .geodata import IPGeoData
from .hops import Hop, TraceResult, apply_lang_setting

_PREMIUM_ASNS = frozenset({"58807", "10099", "4809", "9929", "23764"})
_PREMIUM_WHOIS = frozenset({"CTG-CN", "[CNC-BACKBONE]", "[CUG-BACKBONE]", "CMIN2-NET"})
_PREMIUM_TAGS = frozenset({"[CTG-CN]", "[CNC-BACKBONE]", "[CUG-BACKBONE]", "[CMIN2-NET]"})
_PREMIUM_PREFIX = "59.43."
_MISSING = "* ms"


def _bold(text: str, color: str) -> str:
    return colored(text, color, attrs=["bold"])


def _is_v4(ip: str) -> bool:
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    if isinstance(addr, ipaddress.IPv6Address):
        return addr.ipv4_mapped is not None
    return True


def group_probes(hops: list[Hop]) -> dict[str, tuple[int, list[str]]]:
    """Group probe timings by answering address, in order of first answer.

    Each address maps to the index of its first probe and its timings; a
    lost probe counts as ``* ms`` for the address answering before it, and
    probes lost before the first answer count for that first address.
    """
    groups: dict[str, tuple[int, list[str]]] = {}
    latest = ""
    for index, hop in enumerate(hops):
        if hop.address is None:
            if latest:
                groups[latest][1].append(_MISSING)
            continue
        if hop.address not in groups:
            timings: list[str] = []
            if not latest:
                timings.extend([_MISSING] * index)
            groups[hop.address] = (index, timings)
            latest = hop.address
        groups[hop.address][1].append(f"{hop.rtt * 1000:.2f} ms")
    return groups


def _whois_tag(whois: str, hide_reserved: bool) -> str:
    tag = "-".join(whois.split("-")[:2])
    if not tag:
        return ""
    if hide_reserved and tag.startswith(("RFC", "DOD")):
        return ""
    return f"[{tag}]"


def router_lines(router: dict[str, list[str]], node: str) -> list[str]:
    """Lines listing the neighbours of ``node`` in a routing table."""
    lines = []
    for neighbour in router.get(node, []):
        upstream = router.get(neighbour)
        if upstream:
            lines.append(
                "    "
                + _bold(upstream[0], "white")
                + " "
                + _bold(neighbour, "white")
                + " "
                + _bold(node, "light_blue")
            )
        else:
            lines.append("    " + _bold(neighbour, "white") + " " + _bold(node, "light_blue"))
    return lines


def _render(result: TraceResult, ttl: int, with_router: bool) -> str:
    hops = result.hops[ttl]
    out = [_bold(f"{ttl + 1:<2d}", "light_yellow") + "  "]
    groups = group_probes(hops)
    if not groups:
        out.append(_bold("*", "white") + "\n")
        return "".join(out)

    block = False
    for ip, (index, timings) in groups.items():
        if block:
            out.append("    ")
        v4 = _is_v4(ip)
        out.append(_bold(f"{ip:<{15 if v4 else 25}}", "white"))

        hop = hops[index]
        if hop.geo is None:
            hop.geo = IPGeoData()
        geo = hop.geo
        on_premium_prefix = hop.address.startswith(_PREMIUM_PREFIX)

        if geo.asnumber:
            premium = not with_router and (
                geo.asnumber in _PREMIUM_ASNS
                or geo.whois in _PREMIUM_WHOIS
                or on_premium_prefix
            )
            color = "light_yellow" if premium else "light_green"
            out.append(" " + _bold(f"AS{geo.asnumber:<6}", color))
        else:
            out.append(f" {'*':<8}")

        if v4:
            tag = _whois_tag(geo.whois, hide_reserved=not with_router)
            premium = not with_router and (
                geo.asnumber in _PREMIUM_ASNS or tag in _PREMIUM_TAGS or on_premium_prefix
            )
            color = "light_yellow" if premium else "light_green"
            out.append(" " + _bold(f"{tag:<16}", color))

        if with_router:
            if not geo.country:
                geo.country = "LAN Address"
        else:
            apply_lang_setting(hop)

        out.append(
            " "
            + " ".join(
                _bold(text, "white") for text in (geo.country, geo.prov, geo.city, geo.district)
            )
            + f" {geo.owner:<6}\n    "
            + _bold(f"{hop.hostname:<{39 if v4 else 32}}", "dark_grey")
            + "   "
        )

        out.append(" / ".join(_bold(timing, "light_cyan") for timing in timings))

        if with_router:
            out.append("\n")
            first = hops[0]
            if first.geo is not None and not block:
                out.append(
                    _bold("-", "white")
                    + "   "
                    + _bold(first.geo.prefix, "light_yellow")
                    + " "
                    + _bold("路由表", "white")
                    + " "
                    + _bold("Beta", "light_cyan")
                    + "   "
                    + _bold("-", "white")
                    + "\n"
                )
                for line in router_lines(first.geo.router, "AS" + first.geo.asnumber):
                    out.append(line + "\n")
        else:
            for label in hop.mpls:
                out.append(_bold(f"\n    {label}", "dark_grey"))
            out.append("\n")
        block = True
    return "".join(out)


def realtime_printer(result: TraceResult, ttl: int) -> None:
    """Print the probes at ``ttl`` grouped by answering address."""
    print(_render(result, ttl, with_router=False), end="")


def realtime_printer_with_router(result: TraceResult, ttl: int) -> None:
    """Like :func:`realtime_printer`, followed by the routing table of the first probe."""
    print(_render(result, ttl, with_router=True), end="")