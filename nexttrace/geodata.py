"""Geolocation record shared by all IP data providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IPGeoData:
    """What a provider knows about one IP address."""

    ip: str = ""
    asnumber: str = ""
    country: str = ""
    country_en: str = ""
    prov: str = ""
    prov_en: str = ""
    city: str = ""
    city_en: str = ""
    district: str = ""
    owner: str = ""
    isp: str = ""
    domain: str = ""
    whois: str = ""
    lat: float = 0.0
    lng: float = 0.0
    prefix: str = ""
    router: dict[str, list[str]] = field(default_factory=dict)
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the record under its JSON field names."""
        return {
            "ip": self.ip,
            "asnumber": self.asnumber,
            "country": self.country,
            "country_en": self.country_en,
            "prov": self.prov,
            "prov_en": self.prov_en,
            "city": self.city,
            "city_en": self.city_en,
            "district": self.district,
            "owner": self.owner,
            "isp": self.isp,
            "domain": self.domain,
            "whois": self.whois,
            "lat": self.lat,
            "lng": self.lng,
            "prefix": self.prefix,
            "router": {key: list(value) for key, value in self.router.items()},
            "source": self.source,
        }