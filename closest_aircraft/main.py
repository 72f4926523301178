from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request

from closest_aircraft.api import api_router
from closest_aircraft.config import Settings, settings
from closest_aircraft.ingestors import AircraftLookupClient, Dump1090Client
from closest_aircraft.services import (
    ClosestAircraftResolver,
    ClosestAircraftStore,
    RefreshScheduler,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("closest_aircraft")


def build_resolver(config: Settings, store: ClosestAircraftStore) -> ClosestAircraftResolver:
    """Wire the clients and the store from configuration values."""

    feed_client = Dump1090Client(
        config.feed_host,
        port=config.feed_port,
        timeout=config.feed_timeout,
        max_payload_bytes=config.max_payload_bytes,
    )
    lookup_client = AircraftLookupClient(
        base_url=config.enrichment_base_url,
        timeout=config.enrichment_timeout,
        max_payload_bytes=config.max_payload_bytes,
    )
    return ClosestAircraftResolver(
        feed_client=feed_client,
        lookup_client=lookup_client,
        store=store,
        observer_lat=config.observer_lat,
        observer_lon=config.observer_lon,
    )


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    # ----- Startup logic -----
    store = ClosestAircraftStore(alert_radius_km=settings.proximity_alert_km)
    app.state.store = store
    app.state.resolver = build_resolver(settings, store)
    logger.info(
        "Observer at %.4f, %.4f; feed %s",
        settings.observer_lat,
        settings.observer_lon,
        app.state.resolver.feed_client.url,
    )

    refresh_task: asyncio.Task | None = None
    if settings.enable_refresh_loop:
        scheduler = RefreshScheduler(
            app.state.resolver, interval_seconds=settings.refresh_interval_seconds
        )
        refresh_task = asyncio.create_task(scheduler.run())
        logger.info("Refresh loop scheduled")

    try:
        yield
    finally:
        # ----- Shutdown logic -----
        if refresh_task:
            refresh_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await refresh_task


app = FastAPI(title="Closest Aircraft Monitor", lifespan=lifespan)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "Closest aircraft monitor is running"}
