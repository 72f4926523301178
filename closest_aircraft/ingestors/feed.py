"""dump1090 aircraft feed ingestor."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

import httpx

from closest_aircraft.models.aircraft import NOT_AVAILABLE, AircraftPosition

logger = logging.getLogger("closest_aircraft.ingestors.feed")

FEED_PATH = "/dump1090-fa/data/aircraft.json"
DEFAULT_FEED_PORT = 8080
DEFAULT_FEED_TIMEOUT = 10.0
DEFAULT_MAX_PAYLOAD_BYTES = 8 * 1024 * 1024


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_finite(value: Any) -> float | None:
    if not _is_number(value):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _as_float(value: Any) -> float:
    number = _as_finite(value)
    return 0.0 if number is None else number


def _as_int(value: Any) -> int:
    number = _as_finite(value)
    return 0 if number is None else int(number)


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        return NOT_AVAILABLE
    value = value.strip()
    return value or NOT_AVAILABLE


def parse_aircraft_entry(entry: Any) -> AircraftPosition | None:
    """Normalize one element of the ``aircraft`` array.

    Every field is extracted independently; a missing or mistyped field takes
    its default instead of rejecting the entry. Only non-object entries are
    dropped.
    """

    if not isinstance(entry, dict):
        return None

    return AircraftPosition(
        hex=_as_text(entry.get("hex")),
        flight=_as_text(entry.get("flight")),
        squawk=_as_text(entry.get("squawk")),
        lat=_as_finite(entry.get("lat")),
        lon=_as_finite(entry.get("lon")),
        altitude_ft=_as_int(entry.get("alt_baro")),
        ground_speed_kts=_as_float(entry.get("gs")),
        track_deg=_as_float(entry.get("track")),
        vert_rate_fpm=_as_int(entry.get("baro_rate")),
    )


def parse_aircraft_feed(raw: str | bytes) -> list[AircraftPosition]:
    """Decode an ``aircraft.json`` payload into position records.

    An undecodable payload, or one without an ``aircraft`` array, yields an
    empty list; an empty sky is a normal condition and not an error.
    """

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to parse aircraft feed JSON: %s", exc)
        return []

    if not isinstance(payload, dict):
        logger.debug("Aircraft feed payload is not an object")
        return []

    raw_entries = payload.get("aircraft")
    if not isinstance(raw_entries, list):
        logger.debug("Aircraft feed has no aircraft array")
        return []

    positions: list[AircraftPosition] = []
    for entry in raw_entries:
        position = parse_aircraft_entry(entry)
        if position is not None:
            positions.append(position)

    logger.debug("Parsed %s aircraft feed entries", len(positions))
    return positions


def build_feed_url(host: str, port: int = DEFAULT_FEED_PORT) -> str:
    return f"http://{host}:{port}{FEED_PATH}"


class Dump1090Client:
    """Fetch the raw aircraft list from a dump1090-fa receiver."""

    def __init__(
        self,
        host: str,
        *,
        port: int = DEFAULT_FEED_PORT,
        timeout: float = DEFAULT_FEED_TIMEOUT,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = build_feed_url(host, port)
        self.timeout = timeout
        self.max_payload_bytes = max_payload_bytes
        self.transport = transport

    async def fetch(self) -> str | None:
        """Return the feed body, or ``None`` when nothing usable came back."""

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Aircraft feed request timed out: %s", exc)
            return None
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Aircraft feed returned HTTP %s: %s", exc.response.status_code, exc
            )
            return None
        except httpx.RequestError as exc:
            logger.warning("Aircraft feed request failed: %s", exc)
            return None

        if len(response.content) > self.max_payload_bytes:
            logger.warning(
                "Aircraft feed payload too large: %s bytes (limit %s)",
                len(response.content),
                self.max_payload_bytes,
            )
            return None

        return response.text


__all__ = [
    "Dump1090Client",
    "build_feed_url",
    "parse_aircraft_entry",
    "parse_aircraft_feed",
]
