"""Geolocation from a local Chunzhen lookup service."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import requests

from .geodata import IPGeoData

URL_ENV = "NEXTTRACE_CHUNZHENURL"
DEFAULT_URL = "http://127.0.0.1:2060"

PROVINCES = (
    "北京", "天津", "河北", "山西", "内蒙古", "辽宁", "吉林", "黑龙江",
    "上海", "江苏", "浙江", "安徽", "福建", "江西", "山东", "河南",
    "湖北", "湖南", "广东", "广西", "海南", "重庆", "四川", "贵州",
    "云南", "西藏", "陕西", "甘肃", "青海", "宁夏", "新疆", "台湾",
    "香港", "澳门",
)

_log = logging.getLogger(__name__)


def parse_chunzhen(ip: str, data: dict[str, Any]) -> IPGeoData:
    """Turn the service's JSON answer for ``ip`` into a record."""
    try:
        entry = data[ip]
        city = entry["area"]
        region = entry["country"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"no chunzhen record for {ip}") from exc
    if not isinstance(city, str) or not isinstance(region, str):
        raise ValueError(f"malformed chunzhen record for {ip}")

    asn = entry.get("asn")
    if asn is None:
        asn = ""
    elif not isinstance(asn, str):
        raise ValueError(f"malformed chunzhen asn for {ip}")

    if any(province in region for province in PROVINCES):
        country = "中国"
        city = region + city
    else:
        country = region
    return IPGeoData(asnumber=asn, country=country, city=city)


def chunzhen(ip: str, timeout, lang: str = "", maptrace: bool = False) -> IPGeoData:
    """Query the Chunzhen service named by ``NEXTTRACE_CHUNZHENURL``."""
    base = os.environ.get(URL_ENV) or DEFAULT_URL
    try:
        response = requests.get(base + "?ip=" + ip, timeout=timeout or None)
    except requests.RequestException:
        _log.warning("纯真 请求超时(2s)，请切换其他API使用")
        raise
    data = json.loads(response.content)
    return parse_chunzhen(ip, data)