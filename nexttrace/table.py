"""Whole-trace output as an aligned table."""

from __future__ import annotations

from dataclasses import dataclass

from termcolor import colored

from .geodata import IPGeoData
from .hops import Hop, TraceResult

HEADERS = ("Hop", "IP", "Lantency", "ASN", "Location", "Owner")
CLEAR_SCREEN = "\033[H\033[2J"
_LAN_PREFIXES = ("9.", "11.")
_PADDING = "  "


@dataclass
class RowData:
    """The table cells derived from one probe."""

    hop: str = ""
    ip: str = ""
    latency: str = ""
    asnumber: str = ""
    country: str = ""
    prov: str = ""
    city: str = ""
    district: str = ""
    owner: str = ""

    @property
    def location(self) -> str:
        if not self.country and not self.prov and not self.city:
            return ""
        if self.city:
            return f"{self.city}, {self.prov}, {self.country}"
        if self.prov:
            return f"{self.prov}, {self.country}"
        return self.country


def table_row(hop: Hop) -> RowData:
    """Turn one probe into table cells, using the English location names."""
    if hop.address is None:
        return RowData(hop=str(hop.ttl), ip="*")
    latency = f"{hop.rtt * 1000:.2f}ms"
    ip = hop.address
    if ip.startswith(_LAN_PREFIXES):
        return RowData(hop=str(hop.ttl), ip=ip, latency=latency, country="LAN Address")
    if hop.hostname:
        ip = f"{hop.hostname} ({ip}) "
    geo = hop.geo if hop.geo is not None else IPGeoData()
    if not geo.owner:
        geo.owner = geo.isp
    return RowData(
        hop=str(hop.ttl),
        ip=ip,
        latency=latency,
        asnumber=geo.asnumber,
        country=geo.country_en,
        prov=geo.prov_en,
        city=geo.city_en,
        district=geo.district,
        owner=geo.owner,
    )


def _cells(result: TraceResult) -> list[tuple[str, ...]]:
    rows = []
    for probes in result.hops:
        for position, hop in enumerate(probes):
            data = table_row(hop)
            hop_cell = data.hop if position == 0 else ""
            rows.append(
                (hop_cell, data.ip, data.latency, data.asnumber, data.location, data.owner)
            )
    return rows


def render_table(result: TraceResult) -> str:
    """The trace as a table with one row per probe."""
    rows = _cells(result)
    widths = [max(len(row[column]) for row in [HEADERS, *rows]) for column in range(len(HEADERS))]

    def pad(row):
        last = len(row) - 1
        return [cell if column == last else cell.ljust(widths[column]) for column, cell in enumerate(row)]

    lines = [_PADDING.join(colored(cell, "green", attrs=["underline"]) for cell in pad(HEADERS))]
    for row in rows:
        cells = pad(row)
        cells[0] = colored(cells[0], "yellow")
        lines.append(_PADDING.join(cells))
    return "\n".join(lines) + "\n"


def traceroute_table_printer(result: TraceResult) -> None:
    """Clear the terminal and print the trace table."""
    print(CLEAR_SCREEN + render_table(result), end="")