"""Resolve the closest aircraft to the observer once per refresh cycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Iterable, Optional, Protocol

from closest_aircraft.geodesy import distance_km, initial_bearing_deg
from closest_aircraft.ingestors.enrichment import parse_aircraft_lookup
from closest_aircraft.ingestors.feed import parse_aircraft_feed
from closest_aircraft.models.aircraft import (
    NO_AIRCRAFT_DISTANCE_KM,
    NOT_AVAILABLE,
    AircraftMetadata,
    AircraftPosition,
    ClosestAircraftState,
)
from closest_aircraft.services.state import ClosestAircraftStore

logger = logging.getLogger("closest_aircraft.services.resolver")


class FeedSource(Protocol):
    """Anything that can fetch the raw aircraft feed."""

    async def fetch(self) -> str | None:
        """Return the feed body, or ``None`` on failure."""


class LookupSource(Protocol):
    """Anything that can fetch raw registry details for a hex address."""

    async def fetch(self, hex_code: str) -> str | None:
        """Return the lookup body, or ``None`` on failure."""


@dataclass(frozen=True)
class ClosestCandidate:
    """The running minimum of a scan: a position plus its geometry."""

    position: AircraftPosition
    distance_km: float
    bearing_deg: float


def find_closest(
    positions: Iterable[AircraftPosition], observer_lat: float, observer_lon: float
) -> Optional[ClosestCandidate]:
    """Single pass over ``positions`` keeping the nearest one.

    Entries without coordinates are skipped. Comparison is strictly-less-than,
    so the first entry seen at a given minimum distance is kept. Bearing is
    taken when an entry becomes the new minimum.
    """

    best: ClosestCandidate | None = None
    best_distance = NO_AIRCRAFT_DISTANCE_KM
    for position in positions:
        if not position.has_position:
            continue
        dist = distance_km(observer_lat, observer_lon, position.lat, position.lon)
        if dist < best_distance:
            best_distance = dist
            best = ClosestCandidate(
                position=position,
                distance_km=dist,
                bearing_deg=initial_bearing_deg(
                    observer_lat, observer_lon, position.lat, position.lon
                ),
            )
    return best


class ClosestAircraftResolver:
    """Orchestrates one fetch, scan, lookup and publish cycle."""

    def __init__(
        self,
        *,
        feed_client: FeedSource,
        lookup_client: LookupSource,
        store: ClosestAircraftStore,
        observer_lat: float,
        observer_lon: float,
    ) -> None:
        self.feed_client = feed_client
        self.lookup_client = lookup_client
        self.store = store
        self.observer_lat = observer_lat
        self.observer_lon = observer_lon

    async def refresh(self) -> bool:
        """Run one cycle; return True if a new state was published.

        A failed feed fetch leaves the published state untouched. A failed
        lookup only leaves the metadata fields at "N/A".
        """

        try:
            raw = await self.feed_client.fetch()
        except Exception as exc:
            logger.warning("Aircraft feed unavailable: %s", exc)
            raw = None

        if raw is None:
            logger.info("Skipping publish; aircraft feed fetch failed")
            return False

        positions = parse_aircraft_feed(raw)
        candidate = find_closest(positions, self.observer_lat, self.observer_lon)
        if candidate is None:
            logger.debug("No positioned aircraft among %s feed entries", len(positions))
            self.store.publish(ClosestAircraftState.no_aircraft())
            return True

        metadata = await self._lookup(candidate.position.hex)
        state = ClosestAircraftState.from_position(
            candidate.position,
            distance_km=candidate.distance_km,
            bearing_deg=candidate.bearing_deg,
            metadata=metadata,
            updated_at=datetime.now(tz=timezone.utc),
        )
        self.store.publish(state)
        logger.debug(
            "Closest aircraft %s (%s) at %.2f km bearing %.0f",
            state.flight,
            state.hex,
            state.distance_km,
            state.bearing_deg,
        )
        return True

    async def _lookup(self, hex_code: str) -> AircraftMetadata | None:
        if not hex_code or hex_code == NOT_AVAILABLE:
            logger.debug("Closest aircraft has no hex address; skipping lookup")
            return None

        try:
            raw = await self.lookup_client.fetch(hex_code)
        except Exception as exc:
            logger.warning("Aircraft lookup unavailable: %s", exc)
            return None

        if raw is None:
            return None
        metadata = parse_aircraft_lookup(raw)
        if metadata is None:
            logger.debug("No registry match for %s", hex_code)
        return metadata


__all__ = [
    "ClosestAircraftResolver",
    "ClosestCandidate",
    "FeedSource",
    "LookupSource",
    "find_closest",
]
