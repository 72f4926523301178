"""Closest-aircraft read and refresh endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from closest_aircraft.models import ClosestAircraftResponse
from closest_aircraft.services import ClosestAircraftResolver, ClosestAircraftStore

router = APIRouter(prefix="/api/v1/aircraft", tags=["aircraft"])

logger = logging.getLogger("closest_aircraft.api.aircraft")


class RefreshResponse(BaseModel):
    """Outcome of an on-demand refresh cycle."""

    published: bool = Field(..., description="Whether the cycle published a new state")
    closest: ClosestAircraftResponse = Field(
        ..., description="The state visible after the cycle",
    )


def get_store(request: Request) -> ClosestAircraftStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Aircraft state not initialized",
        )
    return store


def get_resolver(request: Request) -> ClosestAircraftResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Resolver not initialized",
        )
    return resolver


def _build_response(store: ClosestAircraftStore) -> ClosestAircraftResponse:
    snapshot = store.read()
    return ClosestAircraftResponse.from_state(
        snapshot.state,
        proximity_alert=snapshot.proximity_alert,
        alert_since=snapshot.alert_since,
        alert_count=snapshot.alert_count,
        cycles_published=snapshot.cycles_published,
    )


@router.get(
    "/closest",
    response_model=ClosestAircraftResponse,
    summary="Closest aircraft to the observer",
)
def read_closest(
    store: ClosestAircraftStore = Depends(get_store),
) -> ClosestAircraftResponse:
    """Return the last published closest-aircraft state and alert flag."""

    return _build_response(store)


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    summary="Run one refresh cycle now",
)
async def refresh_closest(
    resolver: ClosestAircraftResolver = Depends(get_resolver),
) -> RefreshResponse:
    """Fetch the feed immediately instead of waiting for the next tick."""

    published = await resolver.refresh()
    logger.info("On-demand refresh finished (published=%s)", published)
    return RefreshResponse(published=published, closest=_build_response(resolver.store))
