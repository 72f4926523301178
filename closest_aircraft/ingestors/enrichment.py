"""Aircraft registry lookup against an adsb.lol-compatible v2 API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from closest_aircraft.models.aircraft import NOT_AVAILABLE, AircraftMetadata

logger = logging.getLogger("closest_aircraft.ingestors.enrichment")

DEFAULT_LOOKUP_BASE_URL = "https://api.adsb.lol"
DEFAULT_LOOKUP_TIMEOUT = 10.0
DEFAULT_MAX_PAYLOAD_BYTES = 1024 * 1024


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        return NOT_AVAILABLE
    value = value.strip()
    return value or NOT_AVAILABLE


def parse_aircraft_lookup(raw: str | bytes) -> Optional[AircraftMetadata]:
    """Return metadata for the first ``ac`` match, or ``None`` for no match.

    A payload that fails to decode, or whose ``ac`` array is missing or empty,
    is reported as no match rather than as a match full of defaults.
    """

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to parse aircraft lookup JSON: %s", exc)
        return None

    if not isinstance(payload, dict):
        return None

    matches = payload.get("ac")
    if not isinstance(matches, list) or not matches:
        return None

    first = matches[0]
    if not isinstance(first, dict):
        return None

    return AircraftMetadata(
        registration=_as_text(first.get("r")),
        aircraft_type=_as_text(first.get("t")),
        operator=_as_text(first.get("ownOp")),
    )


class AircraftLookupClient:
    """Fetch registry details for a single ICAO hex address."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_LOOKUP_BASE_URL,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_payload_bytes = max_payload_bytes
        self.transport = transport

    def url_for(self, hex_code: str) -> str:
        return f"{self.base_url}/v2/hex/{quote(hex_code.strip().lower(), safe='')}"

    async def fetch(self, hex_code: str) -> str | None:
        url = self.url_for(hex_code)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Aircraft lookup for %s timed out: %s", hex_code, exc)
            return None
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Aircraft lookup for %s returned HTTP %s",
                hex_code,
                exc.response.status_code,
            )
            return None
        except httpx.RequestError as exc:
            logger.warning("Aircraft lookup for %s failed: %s", hex_code, exc)
            return None

        if len(response.content) > self.max_payload_bytes:
            logger.warning(
                "Aircraft lookup payload for %s too large: %s bytes",
                hex_code,
                len(response.content),
            )
            return None

        return response.text


__all__ = ["AircraftLookupClient", "parse_aircraft_lookup"]
