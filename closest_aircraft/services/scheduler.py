"""Fixed-interval driver for the closest-aircraft resolver."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Protocol

logger = logging.getLogger("closest_aircraft.services.scheduler")

DEFAULT_REFRESH_INTERVAL_SECONDS = 5.0


class Refreshable(Protocol):
    async def refresh(self) -> bool:
        """Run one refresh cycle."""


class RefreshScheduler:
    """Trigger a resolver cycle every ``interval_seconds``.

    The period is measured from the start of each cycle. A cycle that
    overruns the period is followed immediately by the next one; missed
    ticks are not queued up.
    """

    def __init__(
        self,
        resolver: Refreshable,
        *,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        max_cycles: int | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.resolver = resolver
        self.interval_seconds = interval_seconds
        self.max_cycles = max_cycles
        self.sleep = sleep
        self.cycles_run = 0

    async def run(self) -> None:
        """Run refresh cycles until cancelled or ``max_cycles`` is reached."""

        loop = asyncio.get_running_loop()
        logger.info("Refresh loop started (interval %.1fs)", self.interval_seconds)
        while self.max_cycles is None or self.cycles_run < self.max_cycles:
            started = loop.time()
            try:
                await self.resolver.refresh()
            except asyncio.CancelledError:
                logger.info("Refresh loop cancelled")
                raise
            except Exception as exc:
                logger.warning("Refresh cycle failed: %s", exc)
            self.cycles_run += 1

            if self.max_cycles is not None and self.cycles_run >= self.max_cycles:
                break

            elapsed = loop.time() - started
            if elapsed >= self.interval_seconds:
                logger.debug(
                    "Refresh cycle overran interval (%.2fs); starting next now", elapsed
                )
                await self.sleep(0)
                continue
            await self.sleep(self.interval_seconds - elapsed)

        logger.info("Refresh loop stopped after %s cycles", self.cycles_run)


__all__ = ["RefreshScheduler", "Refreshable", "DEFAULT_REFRESH_INTERVAL_SECONDS"]
