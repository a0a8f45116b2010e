"""Traceroute hop enrichment: geolocation providers, reserved-range filtering, DN42 lookups and printers."""

__version__ = "0.1.0"