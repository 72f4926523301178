"""Thread-safe holder for the most recently published closest-aircraft state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from threading import Lock

from closest_aircraft.models.aircraft import ClosestAircraftState

logger = logging.getLogger("closest_aircraft.services.state")

DEFAULT_ALERT_RADIUS_KM = 5.0


@dataclass(frozen=True)
class StoreSnapshot:
    """Consistent view of the store taken under a single lock acquisition."""

    state: ClosestAircraftState
    proximity_alert: bool
    alert_since: datetime | None
    alert_count: int
    cycles_published: int


class ClosestAircraftStore:
    """Publish/read cell shared by the refresh pipeline and presentation.

    Published states are immutable and replaced wholesale, so a reader sees
    either the previous record or the next one, never a mix.
    """

    def __init__(
        self,
        *,
        alert_radius_km: float = DEFAULT_ALERT_RADIUS_KM,
    ) -> None:
        self.alert_radius_km = alert_radius_km
        self._lock = Lock()
        self._state = ClosestAircraftState.waiting()
        self._alert = False
        self._alert_since: datetime | None = None
        self._alert_count = 0
        self._cycles_published = 0

    def publish(self, state: ClosestAircraftState) -> None:
        alert = state.within(self.alert_radius_km)
        with self._lock:
            started = alert and not self._alert
            if started:
                self._alert_since = state.updated_at or datetime.now(tz=timezone.utc)
                self._alert_count += 1
            elif not alert:
                self._alert_since = None
            self._state = state
            self._alert = alert
            self._cycles_published += 1

        if started:
            logger.info(
                "Proximity alert: %s (%s) at %.2f km",
                state.flight,
                state.hex,
                state.distance_km,
            )

    @property
    def state(self) -> ClosestAircraftState:
        with self._lock:
            return self._state

    @property
    def proximity_alert(self) -> bool:
        with self._lock:
            return self._alert

    def read(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                state=self._state,
                proximity_alert=self._alert,
                alert_since=self._alert_since,
                alert_count=self._alert_count,
                cycles_published=self._cycles_published,
            )


__all__ = ["ClosestAircraftStore", "StoreSnapshot", "DEFAULT_ALERT_RADIUS_KM"]
