import asyncio

from games.logic.timer import TickLoop


class TestTickLoopStart:
    def test_start_outside_event_loop_returns_false(self):
        loop = TickLoop(lambda: True)
        assert loop.start(10) is False
        assert loop.running is False
        assert loop.interval_ms is None

    async def test_rejects_non_positive_interval(self):
        loop = TickLoop(lambda: True)
        assert loop.start(0) is False
        assert loop.start(-5) is False
        assert loop.running is False

    async def test_ticks_fire_repeatedly(self):
        ticks = 0
        reached = asyncio.Event()

        def on_tick() -> bool:
            nonlocal ticks
            ticks += 1
            if ticks >= 3:
                reached.set()
            return True

        loop = TickLoop(on_tick, first_tick_delay_ms=1)
        assert loop.start(10) is True
        assert loop.interval_ms == 10
        await asyncio.wait_for(reached.wait(), timeout=1.0)
        loop.cancel()
        assert ticks >= 3

    async def test_first_tick_capped_by_interval(self):
        fired = asyncio.Event()

        def on_tick() -> bool:
            fired.set()
            return True

        # the default first-tick delay is longer than the interval
        loop = TickLoop(on_tick)
        loop.start(5)
        await asyncio.wait_for(fired.wait(), timeout=0.09)
        loop.cancel()


class TestTickLoopStop:
    async def test_cancel_prevents_ticks(self):
        ticks = 0

        def on_tick() -> bool:
            nonlocal ticks
            ticks += 1
            return True

        loop = TickLoop(on_tick, first_tick_delay_ms=20)
        loop.start(20)
        assert loop.cancel() is True
        await asyncio.sleep(0.06)
        assert ticks == 0
        assert loop.running is False

    async def test_cancel_when_stopped_returns_false(self):
        assert TickLoop(lambda: True).cancel() is False

    async def test_stops_when_tick_returns_false(self):
        ticks = 0

        def on_tick() -> bool:
            nonlocal ticks
            ticks += 1
            return False

        loop = TickLoop(on_tick, first_tick_delay_ms=1)
        loop.start(5)
        await asyncio.sleep(0.08)
        assert ticks == 1
        assert loop.running is False

    async def test_restart_replaces_previous_task(self):
        loop = TickLoop(lambda: True, first_tick_delay_ms=1)
        loop.start(1000)
        loop.start(10)
        assert loop.interval_ms == 10
        loop.cancel()


class TestTickLoopErrors:
    async def test_exception_does_not_stop_ticks(self):
        ticks = 0
        recovered = asyncio.Event()

        def on_tick() -> bool:
            nonlocal ticks
            ticks += 1
            if ticks == 1:
                raise RuntimeError("boom")
            recovered.set()
            return True

        loop = TickLoop(on_tick, first_tick_delay_ms=1)
        loop.start(5)
        await asyncio.wait_for(recovered.wait(), timeout=1.0)
        loop.cancel()
        assert ticks >= 2
