import pytest

from nexttrace.dn42 import (
    PtrRow,
    find_geofeed_row,
    find_ptr_record,
    get_geofeed,
    matches_pattern,
    read_geofeed,
)


@pytest.mark.parametrize(
    "prefix, name",
    [
        ("slou", "1ge.slou.as1299.net"),
        ("slou", "1ge.slou2.as1299.net"),
        ("slou", "1ge-slou.as1299.net"),
        ("slou", "slou-1.as1299.net"),
        ("slou", "slou.as1299.com"),
        ("sin", "c-1.sin.sg.atlas.moeqing.com"),
        ("hkg", "core.hkg1.hk.atlas.moeqing.com"),
        ("losangles", "core.losangles.us.atlas.moeqing.com"),
    ],
)
def test_pattern_matches(prefix, name):
    assert matches_pattern(prefix, name) is True


@pytest.mark.parametrize(
    "prefix, name",
    [
        ("slou", "sloutravel.com"),
        ("slou", "memeslou.org"),
        ("slou", "followsloucity.net"),
        ("slou", "slouslou.slou"),
        ("slou", "slouslou8.slou"),
        ("sin", "1ge-snge-6.as1299.net"),
    ],
)
def test_pattern_rejects_misleading_names(prefix, name):
    assert matches_pattern(prefix, name) is False


def test_invalid_pattern_returns_false(capsys):
    assert matches_pattern("(", "a(.b") is False
    assert "Invalid regular expression" in capsys.readouterr().out


@pytest.fixture
def ptr_csv(tmp_path):
    path = tmp_path / "ptr.csv"
    path.write_text(
        "SLOU,GB,England,Slough\nHKG,HK,Hong Kong,Hong Kong\nLAX,US,California,Los Angeles\n",
        encoding="utf-8",
    )
    return path


def test_ptr_city_match(ptr_csv):
    assert find_ptr_record("core.LosAngeles-1.example.net", ptr_csv) == PtrRow(
        ltd_code="US", region="California", city="Los Angeles"
    )


def test_ptr_iata_match(ptr_csv):
    assert find_ptr_record("1ge.slou2.as1299.net", ptr_csv) == PtrRow(
        iata_code="slou", ltd_code="GB", region="England", city="Slough"
    )


def test_ptr_not_found(ptr_csv):
    with pytest.raises(LookupError):
        find_ptr_record("sloutravel.com", ptr_csv)


@pytest.fixture
def geofeed_csv(tmp_path):
    path = tmp_path / "geofeed.csv"
    path.write_text(
        "172.20.0.0/14,CN,CN-SH,Shanghai\n"
        "not-a-cidr,XX,XX,Nowhere\n"
        "172.20.1.0/24,JP,JP-13,Tokyo\n"
        "2001:418:1403::/48,US,US-CA,San Jose\n",
        encoding="utf-8",
    )
    return path


def test_read_geofeed_skips_bad_rows_and_sorts(geofeed_csv):
    rows = read_geofeed(geofeed_csv)
    assert [row.cidr for row in rows] == [
        "2001:418:1403::/48",
        "172.20.1.0/24",
        "172.20.0.0/14",
    ]


def test_most_specific_row_wins(geofeed_csv):
    rows = read_geofeed(geofeed_csv)
    assert find_geofeed_row("172.20.1.9", rows).city == "Tokyo"
    assert find_geofeed_row("172.21.0.1", rows).city == "Shanghai"


def test_ipv6_lookup(geofeed_csv):
    row = get_geofeed("2001:0418:1403:8080::6fff", geofeed_csv)
    assert row.city == "San Jose"
    assert row.iso3166 == "US-CA"


def test_lookup_misses(geofeed_csv):
    rows = read_geofeed(geofeed_csv)
    assert find_geofeed_row("8.8.8.8", rows) is None
    assert find_geofeed_row("bogus", rows) is None


def test_six_column_rows(tmp_path):
    path = tmp_path / "geofeed.csv"
    path.write_text("172.22.0.0/16,DE,DE-BE,Berlin,4242420000,DN42-NET\n", encoding="utf-8")
    row = get_geofeed("172.22.3.3", path)
    assert row.asn == "4242420000"
    assert row.ipwhois == "DN42-NET"


def test_inconsistent_widths_raise(tmp_path):
    path = tmp_path / "geofeed.csv"
    path.write_text(
        "172.22.0.0/16,DE,DE-BE,Berlin\n172.23.0.0/16,DE,DE-BE,Berlin,1,X\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError):
        read_geofeed(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_geofeed("1.1.1.1", tmp_path / "absent.csv")