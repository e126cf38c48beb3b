"""Tests for the TickScheduler and CancellationToken."""

import asyncio

import pytest

from procanalyzer.engine.scheduler import CancellationToken, TickScheduler


class TestCancellationToken:
    @pytest.mark.asyncio
    async def test_wait_times_out(self):
        token = CancellationToken()
        assert await token.wait(0.01) is False
        assert token.cancelled is False

    @pytest.mark.asyncio
    async def test_wait_returns_on_cancel(self):
        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.01, token.cancel)
        assert await token.wait(5.0) is True

    @pytest.mark.asyncio
    async def test_already_cancelled(self):
        token = CancellationToken()
        token.cancel()
        assert await token.wait(5.0) is True


class TestTickScheduler:
    def test_rejects_non_positive_interval(self):
        async def tick():
            pass

        with pytest.raises(ValueError):
            TickScheduler(0, tick)

    @pytest.mark.asyncio
    async def test_first_tick_runs_immediately(self):
        calls = []

        async def tick():
            calls.append(1)

        scheduler = TickScheduler(10.0, tick)
        await scheduler.start()
        await asyncio.sleep(0.05)
        await scheduler.stop()
        assert len(calls) == 1
        assert scheduler.completed_ticks == 1
        assert scheduler.running is False

    @pytest.mark.asyncio
    async def test_ticks_repeat(self):
        calls = []

        async def tick():
            calls.append(1)

        scheduler = TickScheduler(0.01, tick)
        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()
        assert len(calls) >= 3

    @pytest.mark.asyncio
    async def test_ticks_never_overlap(self):
        active = 0
        peak = 0

        async def tick():
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.03)
            active -= 1

        scheduler = TickScheduler(0.001, tick)
        await scheduler.start()
        await asyncio.sleep(0.12)
        await scheduler.stop()
        assert peak == 1

    @pytest.mark.asyncio
    async def test_stop_waits_for_in_flight_tick(self):
        finished = []
        started = asyncio.Event()

        async def tick():
            started.set()
            await asyncio.sleep(0.05)
            finished.append(1)

        scheduler = TickScheduler(10.0, tick)
        await scheduler.start()
        await started.wait()
        await scheduler.stop()
        assert finished == [1]

    @pytest.mark.asyncio
    async def test_failing_tick_does_not_stop_schedule(self):
        calls = []

        async def tick():
            calls.append(1)
            raise RuntimeError("boom")

        scheduler = TickScheduler(0.01, tick)
        await scheduler.start()
        await asyncio.sleep(0.08)
        await scheduler.stop()
        assert len(calls) >= 2
        assert scheduler.failed_ticks == len(calls)
        assert scheduler.completed_ticks == 0

    @pytest.mark.asyncio
    async def test_start_twice_returns_same_token(self):
        async def tick():
            pass

        scheduler = TickScheduler(10.0, tick)
        first = await scheduler.start()
        second = await scheduler.start()
        assert first is second
        await scheduler.stop()
