from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Deadline:
    """
    Absolute deadline fixed once at the start of a wait.

    All checks compare against `expires_at`; nothing ever pushes it later, so
    a stalled caller can only lose retries, not gain time.
    """

    expires_at: float
    time_fn: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    @classmethod
    def after_ms(cls, timeout_ms: float, time_fn: Callable[[], float] = time.monotonic) -> Deadline:
        return cls(expires_at=time_fn() + timeout_ms / 1000.0, time_fn=time_fn)

    def expired(self) -> bool:
        """True once now is strictly past the deadline."""
        return self.time_fn() > self.expires_at

    def reached(self) -> bool:
        """True once now is at or past the deadline."""
        return self.time_fn() >= self.expires_at

    def remaining_ms(self) -> float:
        return max(0.0, (self.expires_at - self.time_fn()) * 1000.0)
