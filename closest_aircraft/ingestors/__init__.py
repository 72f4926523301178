"""Data ingestors for the aircraft feed and the registry lookup."""

from .enrichment import AircraftLookupClient, parse_aircraft_lookup
from .feed import Dump1090Client, build_feed_url, parse_aircraft_entry, parse_aircraft_feed

__all__ = [
    "AircraftLookupClient",
    "Dump1090Client",
    "build_feed_url",
    "parse_aircraft_entry",
    "parse_aircraft_feed",
    "parse_aircraft_lookup",
]
