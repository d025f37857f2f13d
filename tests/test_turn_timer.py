"""Tests for the turn timer."""

import asyncio

from riftclash.core.turn_timer import TurnTimer


def run_timer(actions, wait=0.05, seconds=0.01):
    """Run actions(timer) inside a loop, wait, and return the fired generations."""
    fired = []

    async def on_expire(generation):
        fired.append(generation)

    async def scenario():
        timer = TurnTimer(on_expire, seconds=seconds)
        result = actions(timer)
        await asyncio.sleep(wait)
        timer.cancel()
        return result

    return fired, asyncio.run(scenario())


class TestTurnTimer:
    def test_fires_once_after_delay(self):
        fired, generation = run_timer(lambda timer: timer.restart())

        assert fired == [generation]

    def test_restart_supersedes_pending_expiry(self):
        def actions(timer):
            timer.restart()
            return timer.restart()

        fired, latest = run_timer(actions)

        assert fired == [latest]

    def test_cancel_prevents_expiry(self):
        def actions(timer):
            timer.restart()
            timer.cancel()
            return timer.active

        fired, active = run_timer(actions)

        assert fired == []
        assert active is False

    def test_is_current(self):
        def actions(timer):
            old = timer.restart()
            new = timer.restart()
            return timer.is_current(old), timer.is_current(new)

        fired, (old_current, new_current) = run_timer(actions, wait=0, seconds=10)

        assert not old_current
        assert new_current
        assert fired == []

    def test_failing_expiry_is_logged(self, caplog):
        async def on_expire(generation):
            raise RuntimeError("boom")

        async def scenario():
            timer = TurnTimer(on_expire, seconds=0.01)
            timer.restart()
            await asyncio.sleep(0.05)

        asyncio.run(scenario())

        assert "Turn timer expiry handler failed" in caplog.text
        assert "boom" in caplog.text
