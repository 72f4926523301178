"""Models for the aircraft feed, the registry lookup and the published state."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from closest_aircraft.geodesy import compass_label, squawk_description

NOT_AVAILABLE = "N/A"
NO_AIRCRAFT_DISTANCE_KM = 999999.9
WAITING_TEXT = "Waiting for data..."
NO_AIRCRAFT_TEXT = "No aircraft in range"


class AircraftPosition(BaseModel):
    """One entry of the dump1090 aircraft feed for a single refresh cycle."""

    hex: str = Field(default=NOT_AVAILABLE, description="ICAO 24-bit address as hex")
    flight: str = Field(default=NOT_AVAILABLE, description="Flight callsign")
    squawk: str = Field(default=NOT_AVAILABLE, description="Transponder squawk code")
    lat: Optional[float] = Field(default=None, description="Latitude in decimal degrees")
    lon: Optional[float] = Field(default=None, description="Longitude in decimal degrees")
    altitude_ft: int = Field(default=0, description="Barometric altitude in feet")
    ground_speed_kts: float = Field(default=0.0, description="Ground speed in knots")
    track_deg: float = Field(default=0.0, description="Track over ground in degrees")
    vert_rate_fpm: int = Field(
        default=0, description="Barometric vertical rate in feet per minute"
    )

    model_config = ConfigDict(extra="ignore")

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


class AircraftMetadata(BaseModel):
    """Static identity of an aircraft returned by the registry lookup."""

    registration: str = Field(default=NOT_AVAILABLE, description="Registration mark")
    aircraft_type: str = Field(default=NOT_AVAILABLE, description="ICAO type designator")
    operator: str = Field(default=NOT_AVAILABLE, description="Owner or operator name")

    model_config = ConfigDict(frozen=True)


class ClosestAircraftState(BaseModel):
    """The closest aircraft to the observer as of the last successful cycle."""

    status: Literal["waiting", "no_aircraft", "tracking"] = Field(
        ..., description="Whether a closest aircraft is currently known",
    )
    flight: str = Field(default="", description="Flight callsign or status text")
    hex: str = Field(default="", description="ICAO 24-bit address as hex")
    squawk: str = Field(default="", description="Transponder squawk code")
    registration: str = Field(default="", description="Registration mark")
    aircraft_type: str = Field(default="", description="ICAO type designator")
    operator: str = Field(default="", description="Owner or operator name")
    lat: float = Field(default=0.0, description="Latitude in decimal degrees")
    lon: float = Field(default=0.0, description="Longitude in decimal degrees")
    distance_km: float = Field(
        default=NO_AIRCRAFT_DISTANCE_KM,
        description="Great-circle distance from the observer; sentinel when no aircraft",
    )
    bearing_deg: float = Field(
        default=0.0, description="Initial bearing from the observer to the aircraft",
    )
    altitude_ft: int = Field(default=0, description="Barometric altitude in feet")
    ground_speed_kts: float = Field(default=0.0, description="Ground speed in knots")
    track_deg: float = Field(default=0.0, description="Track over ground in degrees")
    vert_rate_fpm: int = Field(default=0, description="Vertical rate in feet per minute")
    updated_at: Optional[datetime] = Field(
        default=None, description="When the publishing cycle completed (UTC)",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def waiting(cls) -> "ClosestAircraftState":
        return cls(status="waiting", flight=WAITING_TEXT)

    @classmethod
    def no_aircraft(cls, updated_at: datetime | None = None) -> "ClosestAircraftState":
        return cls(
            status="no_aircraft",
            flight=NO_AIRCRAFT_TEXT,
            updated_at=updated_at or datetime.now(tz=timezone.utc),
        )

    @classmethod
    def from_position(
        cls,
        position: AircraftPosition,
        *,
        distance_km: float,
        bearing_deg: float,
        metadata: AircraftMetadata | None = None,
        updated_at: datetime | None = None,
    ) -> "ClosestAircraftState":
        """Merge the selected position with its lookup result.

        Metadata fields fall back to "N/A" when no lookup result is given.
        """

        metadata = metadata or AircraftMetadata()
        return cls(
            status="tracking",
            flight=position.flight,
            hex=position.hex,
            squawk=position.squawk,
            registration=metadata.registration,
            aircraft_type=metadata.aircraft_type,
            operator=metadata.operator,
            lat=position.lat if position.lat is not None else 0.0,
            lon=position.lon if position.lon is not None else 0.0,
            distance_km=distance_km,
            bearing_deg=bearing_deg,
            altitude_ft=position.altitude_ft,
            ground_speed_kts=position.ground_speed_kts,
            track_deg=position.track_deg,
            vert_rate_fpm=position.vert_rate_fpm,
            updated_at=updated_at or datetime.now(tz=timezone.utc),
        )

    @property
    def has_aircraft(self) -> bool:
        return self.status == "tracking"

    def within(self, radius_km: float) -> bool:
        """True only for a tracked aircraft strictly inside ``radius_km``."""
        return self.has_aircraft and self.distance_km < radius_km


class ClosestAircraftResponse(ClosestAircraftState):
    """API view of the published state with derived presentation fields."""

    proximity_alert: bool = Field(..., description="Aircraft inside the alert radius")
    alert_since: Optional[datetime] = Field(
        default=None, description="Start of the current proximity alert episode",
    )
    alert_count: int = Field(
        default=0, description="Number of alert episodes since startup",
    )
    cycles_published: int = Field(
        default=0, description="Number of refresh cycles that published a state",
    )
    squawk_description: Optional[str] = Field(
        default=None, description="Meaning of the squawk code",
    )
    track_direction: Optional[str] = Field(
        default=None, description="Compass point of the aircraft's track",
    )
    bearing_direction: Optional[str] = Field(
        default=None, description="Compass point from the observer to the aircraft",
    )

    @classmethod
    def from_state(
        cls,
        state: ClosestAircraftState,
        *,
        proximity_alert: bool,
        alert_since: datetime | None = None,
        alert_count: int = 0,
        cycles_published: int = 0,
    ) -> "ClosestAircraftResponse":
        derived: dict[str, str | None] = {
            "squawk_description": None,
            "track_direction": None,
            "bearing_direction": None,
        }
        if state.has_aircraft:
            derived = {
                "squawk_description": squawk_description(state.squawk),
                "track_direction": compass_label(state.track_deg),
                "bearing_direction": compass_label(state.bearing_deg),
            }
        return cls(
            **state.model_dump(),
            proximity_alert=proximity_alert,
            alert_since=alert_since,
            alert_count=alert_count,
            cycles_published=cycles_published,
            **derived,
        )


__all__ = [
    "AircraftMetadata",
    "AircraftPosition",
    "ClosestAircraftResponse",
    "ClosestAircraftState",
    "NO_AIRCRAFT_DISTANCE_KM",
    "NO_AIRCRAFT_TEXT",
    "NOT_AVAILABLE",
    "WAITING_TEXT",
]
