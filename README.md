# nexttrace

A library for turning raw traceroute hops into something readable. It looks
up who owns each hop and where it is, recognises reserved address ranges, and
renders a trace in several layouts.

## What is inside

- **Address filtering**: `nexttrace.ipfilter.filter_ip(ip)` recognises
  reserved, private, documentation and DoD ranges. For such an address it
  returns an `IPGeoData` whose `whois` names the range (for example
  `"RFC1918"`); for an ordinary public address it returns `None`. IPv6
  addresses outside `2000::/3`, and text that is not an address, are reported
  as `"INVALID"`. `cidr_range_contains(cidr_range, check_ip)` is the
  membership test it uses.
- **Geolocation record**: `nexttrace.geodata.IPGeoData` is a dataclass
  holding the ASN, country, province, city, district, owner, ISP, whois,
  coordinates, prefix and routing table of an address. `to_dict()` returns it
  under its JSON field names.
- **Geolocation providers**: each provider is a callable taking
  `(ip, timeout, lang, maptrace)` and returning an `IPGeoData`:
  - `nexttrace.chunzhen.chunzhen`
  - `nexttrace.ipapicom.ip_api_com`
  - `nexttrace.ipdbone.ipdbone` (built on `IPDBOneClient`, which caches its
    auth token in a `TokenCache` for 30 seconds)
  - `nexttrace.ipinfo.ipinfo`
  - `nexttrace.ipinsight.ipinsight`
  - `nexttrace.ipsb.ipsb`

  Each also has a pure parser for a response you already hold:
  `parse_chunzhen(ip, data)`, `parse_ip_api_com(body)`,
  `parse_ipdbone_response(ip, body)`, `parse_ipinfo(body)`,
  `parse_ipinsight(body)` and `parse_ipsb(body)`. Providers raise where the
  service reports a failure: `ip_api_com` raises `RuntimeError` when the
  status is not `success`, `ipsb` raises `RuntimeError` when the answer has no
  country, and network errors from `requests` propagate. `ipdbone` returns an
  empty record when no credentials are configured.

  `nexttrace.sources.get_source(name)` picks a provider by its
  case-insensitive name: `ip.sb`, `ipinsight`, `ipapi.com`, `ip-api.com`,
  `ipinfo`, `chunzhen`, `ipdb.one` or `disable-geoip` (which returns empty
  data). Any other name raises `ValueError`.
- **DN42 helpers** in `nexttrace.dn42`:
  - `read_geofeed(path)` loads a geofeed CSV, most specific prefixes first.
  - `find_geofeed_row(ip, rows)` and `get_geofeed(ip, path)` return the
    matching `GeoFeedRow`, or `None`.
  - `find_ptr_record(ptr, path)` matches a PTR name against the city names,
    then the IATA codes, in a CSV file. It returns a `PtrRow` or raises
    `LookupError`.
- **Configuration**: `nexttrace.config.init_config(search_dirs=None, write_dir=None)`
  looks for `nt_config.yaml` (or `.yml`). It searches `/etc/bin/nexttrace/`,
  `/usr/local/bin/nexttrace/` and `.` by default. If no file is found, it
  writes one with the defaults. It returns a `Settings` holding `ptr_path` and
  `geo_feed_path`.
- **Fast-trace targets**: `nexttrace.targets.all_locations()` maps city keys
  to `LocationTargets`, whose `targets()` lists the `ISPTarget` endpoints for
  the major Chinese backbones there.
- **Trace results and printers**: a `nexttrace.hops.TraceResult` holds, for
  each TTL, a list of `Hop` objects. A hop's `address` is a string and its
  `rtt` is in seconds.
  - `nexttrace.classic.classic_printer(result, ttl)`: a BestTrace-like layout
    that colours IXP, peering and cross-border hops. `make_hops_type` does the
    classification and `nexttrace.hop_format.format_hop` renders one probe.
  - `nexttrace.easy.easy_printer(result, ttl)`: pipe-separated lines.
    `easy_lines` returns them without printing.
  - `nexttrace.realtime.realtime_printer(result, ttl)` and
    `realtime_printer_with_router(result, ttl)`: colourised output grouped by
    answering address (`group_probes`). The second is followed by the routing
    table of the first probe (`router_lines`).
  - `nexttrace.table.traceroute_table_printer(result)`: clears the screen and
    prints the whole trace as a table. `render_table` returns the text
    without printing.
  - `nexttrace.hops.version_banner()`, `copyright_text()` and
    `traceroute_nav(...)` return the header texts. `apply_lang_setting(hop)`
    fills in a missing country and switches a hop to English names when
    `hop.lang == "en"`.

## Example

```python
from nexttrace.ipfilter import filter_ip
from nexttrace.sources import get_source

reserved = filter_ip("192.168.1.1")
if reserved is not None:
    print(reserved.whois)     # RFC1918

lookup = get_source("ip-api.com")
data = lookup("1.1.1.1", 2.0, "en", False)
print(data.asnumber, data.country, data.city)
```

Formatting a single hop's geodata:

```python
from nexttrace.geodata import IPGeoData
from nexttrace.hop_format import format_ip_geo_data

print(format_ip_geo_data(IPGeoData(asnumber="13335", country="US", prov="CA", owner="Example")))
# AS13335, US, CA, Example
```

## Environment variables

- `NEXTTRACE_CHUNZHENURL`: the base URL of the Chunzhen lookup service. The
  default is `http://127.0.0.1:2060`.
- `NEXTTRACE_IPINFO_TOKEN`: the token sent to ipinfo.io.
- `NEXTTRACE_IPINSIGHT_TOKEN`: the token sent to ipinsight.io.
- `IPDBONE_BASE_URL`, `IPDBONE_API_ID` and `IPDBONE_API_KEY`: the IPDB.One
  endpoint and its credentials.

## What this package does not do

The package does not send probes. It has no ICMP, TCP or UDP tracing, so you
have to build the `TraceResult` objects the printers take yourself. It does
not resolve domain names, and it provides no command-line program. Among
geolocation sources it has only the HTTP and local-service providers listed
above. It has no websocket-based provider and no local database readers.