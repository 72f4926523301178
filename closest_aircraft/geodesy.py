"""Great-circle helpers for locating aircraft relative to the observer."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

_SQUAWK_DESCRIPTIONS = {
    "7700": "General Emergency",
    "7600": "Radio Failure",
    "7500": "Hijacking",
    "7000": "VFR Conspicuity",
}
EMERGENCY_SQUAWKS = frozenset({"7500", "7600", "7700"})


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometers between two points given in degrees."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2.0) ** 2
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def initial_bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, in [0, 360)."""
    lat1_r = math.radians(lat1)
    lat2_r = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    y = math.sin(dlon) * math.cos(lat2_r)
    x = math.cos(lat1_r) * math.sin(lat2_r) - math.sin(lat1_r) * math.cos(lat2_r) * math.cos(dlon)
    bearing = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
    # (-tiny + 360) % 360 rounds to exactly 360.0 in floating point
    return 0.0 if bearing >= 360.0 else bearing


def compass_label(track_deg: float) -> str:
    """Map a heading to one of the 16 compass points.

    The index is rounded half-up, so 348.75 lands on 16 and wraps back to N.
    """
    index = int(math.floor(track_deg / 22.5 + 0.5)) % 16
    return COMPASS_POINTS[index]


def squawk_description(squawk: str | None) -> str:
    if not squawk:
        return "Discrete Code"
    return _SQUAWK_DESCRIPTIONS.get(squawk.strip(), "Discrete Code")


def is_emergency_squawk(squawk: str | None) -> bool:
    return bool(squawk) and squawk.strip() in EMERGENCY_SQUAWKS


__all__ = [
    "COMPASS_POINTS",
    "EARTH_RADIUS_KM",
    "EMERGENCY_SQUAWKS",
    "compass_label",
    "distance_km",
    "initial_bearing_deg",
    "is_emergency_squawk",
    "squawk_description",
]
