import re

from nexttrace.geodata import IPGeoData
from nexttrace.hops import Hop, TraceResult
from nexttrace.table import RowData, render_table, table_row, traceroute_table_printer

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return _ANSI.sub("", text)


def _hop(address, ttl=1, hostname="", **geo_fields):
    return Hop(
        success=True,
        address=address,
        hostname=hostname,
        ttl=ttl,
        rtt=0.002,
        geo=IPGeoData(**geo_fields),
    )


def test_lost_probe_row():
    assert table_row(Hop(ttl=5)) == RowData(hop="5", ip="*")


def test_lan_prefix_row():
    row = table_row(_hop("11.2.3.4", ttl=3, asnumber="123"))
    assert row.country == "LAN Address"
    assert row.asnumber == ""
    assert row.ip == "11.2.3.4"
    assert row.hop == "3"
    assert row.latency.endswith("ms")


def test_hostname_wraps_address():
    row = table_row(_hop("1.1.1.1", hostname="one.one.one.one"))
    assert row.ip == "one.one.one.one (1.1.1.1) "


def test_english_fields_and_owner_fallback():
    row = table_row(
        _hop(
            "1.1.1.1",
            asnumber="13335",
            country="美国",
            country_en="United States",
            prov_en="California",
            city_en="Los Angeles",
            district="dist",
            isp="Cloudflare",
        )
    )
    assert row.country == "United States"
    assert row.prov == "California"
    assert row.city == "Los Angeles"
    assert row.district == "dist"
    assert row.owner == "Cloudflare"
    assert row.asnumber == "13335"


def test_missing_geo_gives_empty_cells():
    hop = Hop(success=True, address="1.1.1.1", ttl=2, rtt=0.001)
    row = table_row(hop)
    assert row.country == "" and row.owner == "" and row.asnumber == ""
    assert row.ip == "1.1.1.1"


def test_location_combinations():
    assert RowData(city="Los Angeles", prov="California", country="US").location == (
        "Los Angeles, California, US"
    )
    assert RowData(prov="California", country="US").location == "California, US"
    assert RowData(country="US").location == "US"
    assert RowData().location == ""


def test_render_table_layout():
    result = TraceResult(
        hops=[
            [_hop("1.1.1.1", ttl=1, country_en="US"), _hop("8.8.8.8", ttl=1)],
            [Hop(ttl=2)],
        ]
    )
    lines = _plain(render_table(result)).rstrip("\n").split("\n")
    assert lines[0].split() == ["Hop", "IP", "Lantency", "ASN", "Location", "Owner"]
    assert len(lines) == 4
    assert lines[1].startswith("1")
    assert lines[2].startswith(" ")
    assert lines[3].startswith("2")
    ip_column = lines[0].index("IP")
    assert lines[1].index("1.1.1.1") == ip_column
    assert lines[2].index("8.8.8.8") == ip_column
    assert lines[3].index("*") == ip_column
    assert "US" in lines[1]


def test_printer_clears_screen_first(capsys):
    result = TraceResult(hops=[[_hop("1.1.1.1")]])
    traceroute_table_printer(result)
    out = capsys.readouterr().out
    assert out.startswith("\033[H\033[2J")
    assert _plain(out[len("\033[H\033[2J"):]) == _plain(render_table(result))