"""Trace results and the header text printed around them."""

from __future__ import annotations

from dataclasses import dataclass, field

from termcolor import colored

from .config import BUILD_DATE, COMMIT_ID, VERSION
from .geodata import IPGeoData


@dataclass
class Hop:
    """One probe's answer at one TTL; ``rtt`` is in seconds."""

    success: bool = False
    address: str | None = None
    hostname: str = ""
    ttl: int = 0
    rtt: float = 0.0
    error: Exception | None = None
    geo: IPGeoData | None = None
    lang: str = ""
    mpls: list[str] = field(default_factory=list)


@dataclass
class TraceResult:
    """All probes of a trace, grouped by TTL."""

    hops: list[list[Hop]] = field(default_factory=list)
    trace_map_url: str = ""


def version_banner() -> str:
    """The one-line program banner."""
    return " ".join(
        (
            colored("NextTrace", "white", attrs=["bold"]),
            colored(VERSION, "dark_grey", attrs=["bold"]),
            colored(BUILD_DATE, "dark_grey", attrs=["bold"]),
            colored(COMMIT_ID, "dark_grey", attrs=["bold"]),
        )
    )


def copyright_text() -> str:
    """The text shown for the version flag."""
    return "\n".join(
        (
            "",
            colored("NextTrace CopyRight", "cyan", attrs=["bold"]),
            colored("Version:", "white", attrs=["bold"])
            + " "
            + colored(VERSION, "light_blue", attrs=["bold"]),
            colored("Build Date:", "white", attrs=["bold"])
            + " "
            + colored(BUILD_DATE, "light_blue", attrs=["bold"]),
            colored("Commit:", "white", attrs=["bold"])
            + " "
            + colored(COMMIT_ID, "light_blue", attrs=["bold"]),
        )
    )


def traceroute_nav(ip, domain, data_origin, max_hops, packet_size, src_addr, mode) -> str:
    """The two header lines naming the provider and the trace target."""
    ip = str(ip)
    lead = "traceroute to" if not src_addr else f"{src_addr} ->"
    target = ip if ip == domain else f"{ip} ({domain})"
    return (
        f"IP Geo Data Provider: {data_origin}\n"
        f"{lead} {target}, {max_hops} hops max, {packet_size} bytes payload, {mode.upper()} mode"
    )


def apply_lang_setting(hop: Hop) -> None:
    """Fill in a missing country and switch the location to English if asked."""
    geo = hop.geo
    if geo is None:
        return
    if len(geo.country.encode("utf-8")) <= 1:
        if geo.whois:
            geo.country = geo.whois
        elif geo.source != "LeoMoeAPI":
            geo.country = "网络故障"
            geo.country_en = "Network Error"
        else:
            geo.country = "未知"
            geo.country_en = "Unknown"

    if hop.lang != "en":
        return
    if geo.country == "Anycast":
        return
    if geo.prov == "骨干网":
        geo.prov = "BackBone"
    elif not geo.prov_en:
        geo.country = geo.country_en
    elif not geo.city_en:
        geo.country = geo.prov_en
        geo.prov = geo.country_en
        geo.city = ""
    else:
        geo.country = geo.city_en
        geo.prov = geo.prov_en
        geo.city = geo.country_en