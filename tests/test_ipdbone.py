import json
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from nexttrace.config import VERSION
from nexttrace.geodata import IPGeoData
from nexttrace.ipdbone import (
    IPDBOneClient,
    IPDBOneConfig,
    TokenCache,
    default_config,
    parse_ipdbone_response,
)

BASE = "https://ipdb.example.com"
AUTH_URL = BASE + "/auth/requestToken/query"


def _client():
    return IPDBOneClient(IPDBOneConfig(base_url=BASE, api_id="id", api_key="placeholder"))


def _answer():
    return {
        "code": 200,
        "data": {
            "geo": {"coordinate": [1.5, 2.5], "country": "Japan", "region": "Tokyo", "city": None},
            "routing": {"asn": {"number": 2497, "name": "IIJ", "domain": "iij.ad.jp", "asname": "IIJ-NET"}},
        },
    }


def test_token_cache_valid_and_expired():
    cache = TokenCache()
    assert cache.get() == ""
    cache.set("token", 30)
    assert cache.get() == "token"
    cache.set("token", -1)
    assert cache.get() == ""


def test_default_config_reads_environment(monkeypatch):
    monkeypatch.setenv("IPDBONE_BASE_URL", BASE)
    monkeypatch.setenv("IPDBONE_API_ID", "id")
    monkeypatch.setenv("IPDBONE_API_KEY", "placeholder")
    assert default_config() == IPDBOneConfig(BASE, "id", "placeholder")


def test_default_config_fallback(monkeypatch):
    for name in ("IPDBONE_BASE_URL", "IPDBONE_API_ID", "IPDBONE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    assert default_config() == IPDBOneConfig("https://api.ipdb.one", "", "")


def test_parse_full_response():
    result = parse_ipdbone_response("1.1.1.1", json.dumps(_answer()))
    assert result.ip == "1.1.1.1"
    assert (result.lat, result.lng) == (1.5, 2.5)
    assert result.country == "Japan"
    assert result.prov == "Tokyo"
    assert result.city == ""
    assert result.asnumber == "2497"
    assert result.owner == "iij.ad.jp"
    assert result.whois == "IIJ-NET"


def test_parse_name_used_without_domain():
    body = {"data": {"routing": {"asn": {"name": "IIJ"}}}}
    result = parse_ipdbone_response("1.1.1.1", body)
    assert result.owner == "IIJ"
    assert result.asnumber == ""


def test_parse_empty_body():
    assert parse_ipdbone_response("1.1.1.1", b"{}") == IPGeoData(ip="1.1.1.1")


def test_lookup_without_credentials_returns_empty():
    client = IPDBOneClient(IPDBOneConfig(base_url=BASE))
    assert client.lookup_ip("1.1.1.1", "en") == IPGeoData()


def test_lookup_with_failed_auth_returns_empty():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, AUTH_URL, json={"code": 401, "message": "denied"})
        assert _client().lookup_ip("1.1.1.1", "en") == IPGeoData()


def test_lookup_success_caches_token():
    client = _client()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, AUTH_URL, json={"code": 200, "data": {"token": "token"}})
        rsps.add(responses.GET, BASE + "/query/1.1.1.1", json=_answer())
        first = client.lookup_ip("1.1.1.1", "cn")
        second = client.lookup_ip("1.1.1.1", "fr")
        auth_calls = [c for c in rsps.calls if "requestToken" in c.request.url]
        query_calls = [c for c in rsps.calls if "/query/" in c.request.url]

    assert first == second
    assert first.country == "Japan"
    assert len(auth_calls) == 1
    assert auth_calls[0].request.headers["x-api-key"] == "placeholder"
    assert auth_calls[0].request.headers["x-api-id"] == "id"
    assert query_calls[0].request.headers["Authorization"] == "Bearer token"
    assert query_calls[0].request.headers["User-Agent"] == "NextTrace/" + VERSION
    assert parse_qs(urlsplit(query_calls[0].request.url).query) == {"lang": ["zh"]}
    assert parse_qs(urlsplit(query_calls[1].request.url).query) == {"lang": ["en"]}


def test_lookup_query_error_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, AUTH_URL, json={"code": 200, "data": {"token": "token"}})
        rsps.add(responses.GET, BASE + "/query/1.1.1.1", json={"code": 429, "message": "slow down"})
        with pytest.raises(RuntimeError, match="failed to get IP info: slow down"):
            _client().lookup_ip("1.1.1.1", "en")