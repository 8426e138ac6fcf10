from __future__ import annotations

import asyncio

import pytest

from uiprobe.config import Timeouts
from uiprobe.deadline import Deadline
from uiprobe.sleeper import Sleeper


def test_deadline_is_strict() -> None:
    now = {"t": 10.0}
    deadline = Deadline.after_ms(1_000, time_fn=lambda: now["t"])

    assert deadline.expires_at == pytest.approx(11.0)
    now["t"] = 11.0
    assert not deadline.expired()
    assert deadline.reached()
    assert deadline.remaining_ms() == 0.0
    now["t"] = 11.5
    assert deadline.expired()


def test_deadline_remaining_ms() -> None:
    now = {"t": 0.0}
    deadline = Deadline.after_ms(2_000, time_fn=lambda: now["t"])
    now["t"] = 0.5
    assert deadline.remaining_ms() == pytest.approx(1_500.0)


def test_sleeper_uses_configured_quanta() -> None:
    slept: list[float] = []
    sleeper = Sleeper(Timeouts(pause_ms=250, mini_pause_ms=50), sleep_fn=slept.append)

    sleeper.sleep()
    sleeper.sleep_mini()
    sleeper.sleep_for(0)
    sleeper.sleep_for(-5)

    assert slept == [0.25, 0.05]
    assert sleeper.pause_ms == 250
    assert sleeper.mini_pause_ms == 50


@pytest.mark.asyncio
async def test_sleeper_async_pause() -> None:
    sleeper = Sleeper(Timeouts(pause_ms=1))
    loop = asyncio.get_running_loop()
    start = loop.time()
    await sleeper.sleep_async()
    assert loop.time() >= start
