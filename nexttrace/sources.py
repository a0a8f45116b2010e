"""Choose an IP geolocation provider by name."""

from __future__ import annotations

from typing import Callable

from .chunzhen import chunzhen
from .geodata import IPGeoData
from .ipapicom import ip_api_com
from .ipdbone import ipdbone
from .ipinfo import ipinfo
from .ipinsight import ipinsight
from .ipsb import ipsb

Source = Callable[..., IPGeoData]


def disable_geoip(ip: str, timeout=None, lang: str = "", maptrace: bool = False) -> IPGeoData:
    """A provider that knows nothing."""
    return IPGeoData()


_SOURCES: dict[str, Source] = {
    "IP.SB": ipsb,
    "IPINSIGHT": ipinsight,
    "IPAPI.COM": ip_api_com,
    "IP-API.COM": ip_api_com,
    "IPINFO": ipinfo,
    "CHUNZHEN": chunzhen,
    "DISABLE-GEOIP": disable_geoip,
    "IPDB.ONE": ipdbone,
}


def get_source(name: str) -> Source:
    """Return the provider called ``name`` (case-insensitive)."""
    try:
        return _SOURCES[name.upper()]
    except KeyError:
        raise ValueError(f"IP geolocation provider {name!r} is not available") from None