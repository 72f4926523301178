"""Pydantic models for the closest-aircraft service."""

from .aircraft import (
    NO_AIRCRAFT_DISTANCE_KM,
    NOT_AVAILABLE,
    AircraftMetadata,
    AircraftPosition,
    ClosestAircraftResponse,
    ClosestAircraftState,
)

__all__ = [
    "AircraftMetadata",
    "AircraftPosition",
    "ClosestAircraftResponse",
    "ClosestAircraftState",
    "NO_AIRCRAFT_DISTANCE_KM",
    "NOT_AVAILABLE",
]
