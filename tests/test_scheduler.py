import asyncio

import anyio
import pytest

from closest_aircraft.services.scheduler import RefreshScheduler


class FakeResolver:
    def __init__(self, delay: float = 0.0, fail_on: set[int] | None = None):
        self.delay = delay
        self.fail_on = fail_on or set()
        self.call_count = 0

    async def refresh(self) -> bool:
        self.call_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.call_count in self.fail_on:
            raise RuntimeError("cycle blew up")
        return True


class RecordingSleep:
    def __init__(self):
        self.durations: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        await asyncio.sleep(0)


@pytest.mark.anyio
async def test_scheduler_runs_requested_cycles_on_interval():
    resolver = FakeResolver()
    sleep = RecordingSleep()
    scheduler = RefreshScheduler(resolver, interval_seconds=5.0, max_cycles=3, sleep=sleep)

    with anyio.fail_after(5):
        await scheduler.run()

    assert resolver.call_count == 3
    assert scheduler.cycles_run == 3
    assert len(sleep.durations) == 2
    for duration in sleep.durations:
        assert 4.5 < duration <= 5.0


@pytest.mark.anyio
async def test_scheduler_starts_next_cycle_immediately_after_overrun():
    resolver = FakeResolver(delay=0.05)
    sleep = RecordingSleep()
    scheduler = RefreshScheduler(resolver, interval_seconds=0.01, max_cycles=2, sleep=sleep)

    with anyio.fail_after(5):
        await scheduler.run()

    assert resolver.call_count == 2
    assert sleep.durations == [0]


@pytest.mark.anyio
async def test_scheduler_continues_after_failed_cycle():
    resolver = FakeResolver(fail_on={1})
    scheduler = RefreshScheduler(
        resolver, interval_seconds=0.0, max_cycles=3, sleep=RecordingSleep()
    )

    with anyio.fail_after(5):
        await scheduler.run()

    assert resolver.call_count == 3


@pytest.mark.anyio
async def test_scheduler_cancellation_abandons_in_flight_cycle():
    resolver = FakeResolver(delay=30.0)
    scheduler = RefreshScheduler(resolver, interval_seconds=5.0)

    task = asyncio.create_task(scheduler.run())
    while resolver.call_count == 0:
        await asyncio.sleep(0)

    task.cancel()
    with anyio.fail_after(1):
        with pytest.raises(asyncio.CancelledError):
            await task

    assert scheduler.cycles_run == 0
