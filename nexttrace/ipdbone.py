"""Geolocation from the IPDB.One API, with a cached auth token."""

from __future__ import annotations

import json
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from .config import VERSION
from .geodata import IPGeoData

LANG_MAP = {"en": "en", "cn": "zh"}
TOKEN_LIFETIME = 30.0


@dataclass
class IPDBOneConfig:
    """Where the API lives and the credentials for it."""

    base_url: str = "https://api.ipdb.one"
    api_id: str = ""
    api_key: str = ""


def default_config() -> IPDBOneConfig:
    """Configuration from the IPDBONE_* environment variables."""
    return IPDBOneConfig(
        base_url=os.environ.get("IPDBONE_BASE_URL") or "https://api.ipdb.one",
        api_id=os.environ.get("IPDBONE_API_ID") or "",
        api_key=os.environ.get("IPDBONE_API_KEY") or "",
    )


@dataclass
class TokenCache:
    """An auth token together with the moment it stops being valid."""

    _token: str = ""
    _expires_at: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self) -> str:
        """The cached token, or an empty string if none is valid."""
        with self._lock:
            if not self._token or time.monotonic() > self._expires_at:
                return ""
            return self._token

    def set(self, token: str, expires_in: float) -> None:
        """Cache ``token`` for ``expires_in`` seconds."""
        with self._lock:
            self._token = token
            self._expires_at = time.monotonic() + expires_in


def _load(body) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        loaded = json.loads(body)
    except (TypeError, ValueError):
        return {}
    return loaded if isinstance(loaded, dict) else {}


def _get(node: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _number(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _integer(value: Any) -> int:
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    number = _number(value)
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return int(number)


def parse_ipdbone_response(ip: str, body) -> IPGeoData:
    """Turn an IPDB.One query answer into a record."""
    data = _get(_load(body), "data")
    geo = _get(data, "geo")
    routing = _get(data, "routing")
    result = IPGeoData(ip=ip)

    if geo is not None:
        coordinate = _get(geo, "coordinate")
        if isinstance(coordinate, list) and len(coordinate) >= 2:
            result.lat = _number(coordinate[0])
            result.lng = _number(coordinate[1])
        if _get(geo, "country") is not None:
            result.country = _text(_get(geo, "country"))
        if _get(geo, "region") is not None:
            result.prov = _text(_get(geo, "region"))
        if _get(geo, "city") is not None:
            result.city = _text(_get(geo, "city"))

    if routing is not None:
        asn = _get(routing, "asn")
        if _get(asn, "number") is not None:
            result.asnumber = str(_integer(_get(asn, "number")))
        if _get(asn, "name") is not None:
            result.owner = _text(_get(asn, "name"))
        if _get(asn, "domain") is not None:
            result.owner = _text(_get(asn, "domain"))
        if _get(asn, "asname") is not None:
            result.whois = _text(_get(asn, "asname"))

    return result


class IPDBOneClient:
    """Client for the IPDB.One query API."""

    def __init__(self, config: IPDBOneConfig | None = None, timeout: float = 3.0):
        self.config = config if config is not None else default_config()
        self.timeout = timeout
        self._tokens = TokenCache()
        self._session = requests.Session()

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "User-Agent": "NextTrace/" + VERSION}

    def _fetch_token(self) -> None:
        headers = self._headers()
        headers["x-api-id"] = self.config.api_id
        headers["x-api-key"] = self.config.api_key
        response = self._session.get(
            self.config.base_url + "/auth/requestToken/query",
            headers=headers,
            timeout=self.timeout,
        )
        body = _load(response.content)
        if _integer(_get(body, "code")) != 200:
            raise RuntimeError("failed to authenticate: " + _text(_get(body, "message")))
        token = _text(_get(body, "data", "token"))
        if not token:
            raise RuntimeError("authentication failed: empty token received")
        self._tokens.set(token, TOKEN_LIFETIME)

    def _ensure_token(self) -> None:
        if not self.config.api_id or not self.config.api_key:
            raise RuntimeError("api id or api key is not set")
        if not self._tokens.get():
            self._fetch_token()

    def lookup_ip(self, ip: str, lang: str) -> IPGeoData:
        """Look ``ip`` up; without a usable token an empty record comes back."""
        try:
            self._ensure_token()
        except (RuntimeError, requests.RequestException):
            return IPGeoData()

        lang_code = LANG_MAP.get(lang, "en")
        headers = self._headers()
        headers["Authorization"] = "Bearer " + self._tokens.get()
        response = self._session.get(
            self.config.base_url + "/query/" + ip + "?lang=" + lang_code,
            headers=headers,
            timeout=self.timeout,
        )
        body = _load(response.content)
        if _integer(_get(body, "code")) != 200:
            raise RuntimeError("failed to get IP info: " + _text(_get(body, "message")))
        return parse_ipdbone_response(ip, response.content)


_DEFAULT_CLIENT = IPDBOneClient()


def ipdbone(ip: str, timeout, lang: str = "en", maptrace: bool = False) -> IPGeoData:
    """Look ``ip`` up with the shared client configured from the environment."""
    if timeout and timeout > 0:
        _DEFAULT_CLIENT.timeout = timeout
    return _DEFAULT_CLIENT.lookup_ip(ip, lang)