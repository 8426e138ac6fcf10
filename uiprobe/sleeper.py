"""
Sleep primitives.

Every retry loop in uiprobe suspends only through a Sleeper, at one of two
quanta: the default pause (condition and text waits) and the shorter mini
pause (overlay polling). Tests swap in a Sleeper whose `sleep_fn` advances a
fake clock instead of blocking.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

from .config import Timeouts


class Sleeper:
    def __init__(
        self,
        timeouts: Timeouts | None = None,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Args:
            timeouts: Source of the pause quanta (default: Timeouts())
            sleep_fn: Blocking sleep taking seconds (default: time.sleep)
        """
        self._timeouts = timeouts or Timeouts()
        self._sleep_fn = sleep_fn

    @property
    def pause_ms(self) -> int:
        return self._timeouts.pause_ms

    @property
    def mini_pause_ms(self) -> int:
        return self._timeouts.mini_pause_ms

    def sleep(self) -> None:
        """Pause for the default quantum."""
        self.sleep_for(self._timeouts.pause_ms)

    def sleep_mini(self) -> None:
        """Pause for the minimal quantum."""
        self.sleep_for(self._timeouts.mini_pause_ms)

    def sleep_for(self, ms: float) -> None:
        if ms <= 0:
            return
        self._sleep_fn(ms / 1000.0)

    async def sleep_async(self) -> None:
        """Default quantum for asyncio callers."""
        await asyncio.sleep(self._timeouts.pause_ms / 1000.0)
