"""Geolocation from ipinsight.io."""

from __future__ import annotations

import json
import os
from typing import Any

import requests

from .geodata import IPGeoData

BASE_URL = "https://api.ipinsight.io/ip/"
TOKEN_ENV = "NEXTTRACE_IPINSIGHT_TOKEN"


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


def parse_ipinsight(body) -> IPGeoData:
    """Turn an ipinsight.io JSON answer into a record."""
    res = _load(body)
    return IPGeoData(
        country=_text(res.get("country_name")),
        city=_text(res.get("city_name")),
        prov=_text(res.get("region_name")),
    )


def ipinsight(ip: str, timeout, lang: str = "", maptrace: bool = False) -> IPGeoData:
    """Look ``ip`` up on ipinsight.io, using the token from ``NEXTTRACE_IPINSIGHT_TOKEN``."""
    api_token = os.environ.get(TOKEN_ENV, "")
    response = requests.get(BASE_URL + ip + "?token=" + api_token, timeout=timeout or None)
    return parse_ipinsight(response.content)