import pytest

from nexttrace.ipfilter import cidr_range_contains, filter_ip


def test_unique_local_ipv6_is_rfc4193():
    res = filter_ip("fd11::1")
    assert res.whois == "RFC4193"
    assert res.asnumber == ""


@pytest.mark.parametrize(
    "ip, whois",
    [
        ("0.1.2.3", "RFC1122"),
        ("100.64.0.1", "RFC6598"),
        ("127.0.0.1", "RFC1122"),
        ("169.254.1.1", "RFC3927"),
        ("192.0.0.8", "RFC6890"),
        ("192.0.2.1", "RFC5737"),
        ("192.88.99.1", "RFC3068"),
        ("198.19.0.1", "RFC2544"),
        ("198.51.100.7", "RFC5737"),
        ("203.0.113.7", "RFC5737"),
        ("224.0.0.1", "RFC5771"),
        ("255.255.255.255", "RFC0919"),
        ("240.0.0.1", "RFC1112"),
        ("fe80::1", "RFC4291"),
        ("ff02::1", "RFC4291"),
        ("fec0::1", "RFC3879"),
        ("64:ff9b::808:808", "RFC6052"),
        ("::1", "RFC4291"),
        ("64:ff9b:1::1", "RFC6052"),
        ("2001:db8::1", "RFC3849"),
        ("2002::1", "RFC3056"),
        ("10.1.2.3", "RFC1918"),
        ("172.16.5.4", "RFC1918"),
        ("192.168.1.1", "RFC1918"),
        ("11.1.1.1", "DOD"),
        ("215.0.0.1", "DOD"),
        ("4000::1", "INVALID"),
        ("not-an-ip", "INVALID"),
        ("::ffff:10.0.0.1", "RFC1918"),
    ],
)
def test_special_ranges(ip, whois):
    assert filter_ip(ip).whois == whois


@pytest.mark.parametrize("ip", ["8.8.8.8", "1.1.1.1", "2001:4860:4860::8888", "::ffff:8.8.8.8"])
def test_public_addresses_pass(ip):
    assert filter_ip(ip) is None


def test_cidr_range_contains():
    assert cidr_range_contains("10.0.0.0/8", "10.255.0.1") is True
    assert cidr_range_contains("10.0.0.0/8", "11.0.0.1") is False
    assert cidr_range_contains("bad", "10.0.0.1") is False
    assert cidr_range_contains("10.0.0.0/8", "garbage") is False
    assert cidr_range_contains("0::/96", "1.2.3.4") is False
    assert cidr_range_contains("10.0.0.1/8", "10.9.9.9") is True