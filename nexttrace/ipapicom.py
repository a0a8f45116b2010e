"""Geolocation from ip-api.com."""

from __future__ import annotations

import json
import logging
import math
import re
import struct
from typing import Any

import requests

from .geodata import IPGeoData

BASE_URL = "http://ip-api.com/json/"
FIELDS = "status,message,country,regionName,city,isp,district,as,lat,lon"
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:100.0) Gecko/20100101 Firefox/100.0"
_CHINESE_REGIONS = ("Hong Kong", "Taiwan", "Macao")
_DIGITS = re.compile(r"[0-9]+")

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


def _float32(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        return 0.0
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_ip_api_com(body) -> IPGeoData:
    """Turn an ip-api.com JSON answer into a record."""
    res = _load(body)
    if _text(res.get("status")) != "success":
        raise RuntimeError("超过API阈值")

    country = _text(res.get("country"))
    prov = _text(res.get("region"))
    city = _text(res.get("city"))
    district = _text(res.get("district"))
    if country in _CHINESE_REGIONS:
        district = prov + " " + city + " " + district
        city = country
        prov = ""
        country = "China"

    asn = _DIGITS.search(_text(res.get("as")))
    return IPGeoData(
        asnumber=asn.group(0) if asn else "",
        country=country,
        city=city,
        prov=prov,
        district=district,
        owner=_text(res.get("isp")),
        lat=_float32(_text(res.get("lat"))),
        lng=_float32(_text(res.get("lon"))),
    )


def ip_api_com(ip: str, timeout, lang: str = "", maptrace: bool = False) -> IPGeoData:
    """Look ``ip`` up on ip-api.com."""
    url = BASE_URL + ip + "?fields=" + FIELDS
    try:
        response = requests.get(
            url, headers={"User-Agent": USER_AGENT}, timeout=timeout or None
        )
    except requests.RequestException:
        _log.warning("ip-api.com 请求超时(2s)，请切换其他API使用")
        raise
    return parse_ip_api_com(response.content)