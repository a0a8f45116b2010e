"""Pipe-separated output that is easy for other programs to parse."""

from __future__ import annotations

from .geodata import IPGeoData
from .hops import Hop, TraceResult, apply_lang_setting


def _rtt_ms(rtt: float) -> float:
    """Round-trip time in milliseconds, cut to whole microseconds."""
    nanoseconds = round(rtt * 1_000_000_000)
    return (nanoseconds // 1000) / 1000


def _line(ttl: int, hop: Hop) -> str:
    if hop.address is None:
        return f"{ttl + 1}|*||||||"
    apply_lang_setting(hop)
    geo = hop.geo if hop.geo is not None else IPGeoData()
    return (
        f"{ttl + 1}|{hop.address}|{hop.hostname}|{_rtt_ms(hop.rtt):.2f}"
        f"|{geo.asnumber}|{geo.country}|{geo.prov}|{geo.city}"
        f"|{geo.district}|{geo.owner}|{geo.lat:.4f}|{geo.lng:.4f}"
    )


def easy_lines(result: TraceResult, ttl: int) -> list[str]:
    """One line per probe at ``ttl``, fields separated by ``|``."""
    return [_line(ttl, hop) for hop in result.hops[ttl]]


def easy_printer(result: TraceResult, ttl: int) -> None:
    """Print every probe at ``ttl`` in the parseable layout."""
    for line in easy_lines(result, ttl):
        print(line)