"""Geolocation from api.ip.sb."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from .geodata import IPGeoData

BASE_URL = "https://api.ip.sb/geoip/"
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:100.0) Gecko/20100101 Firefox/100.0"

_log = logging.getLogger(__name__)


def _load(body) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        loaded = json.loads(body)
    except (TypeError, ValueError):
        return {}
    return loaded if isinstance(loaded, dict) else {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_ipsb(body) -> IPGeoData:
    """Turn an api.ip.sb JSON answer into a record.

    An answer without a country means the request was blocked upstream.
    """
    res = _load(body)
    country = _text(res.get("country"))
    if not country:
        raise RuntimeError("api.ip.sb returned no data; the request was blocked")
    return IPGeoData(
        asnumber=_text(res.get("asn")),
        country=country,
        city=_text(res.get("city")),
        prov=_text(res.get("region")),
        owner=_text(res.get("isp")),
    )


def ipsb(ip: str, timeout, lang: str = "", maptrace: bool = False) -> IPGeoData:
    """Look ``ip`` up on api.ip.sb."""
    try:
        response = requests.get(
            BASE_URL + ip, headers={"User-Agent": USER_AGENT}, timeout=timeout or None
        )
    except requests.RequestException:
        _log.warning("api.ip.sb 请求超时(2s)，请切换其他API使用")
        raise
    return parse_ipsb(response.content)