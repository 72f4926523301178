"""Refresh pipeline services: resolver, scheduler and shared state."""

from .resolver import ClosestAircraftResolver, ClosestCandidate, find_closest
from .scheduler import RefreshScheduler
from .state import ClosestAircraftStore, StoreSnapshot

__all__ = [
    "ClosestAircraftResolver",
    "ClosestAircraftStore",
    "ClosestCandidate",
    "RefreshScheduler",
    "StoreSnapshot",
    "find_closest",
]
