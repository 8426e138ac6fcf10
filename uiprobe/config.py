"""
Engine configuration.

Timeouts and poll quanta are plain pydantic models passed into the engine
components, the same way snapshot options travel through a runtime:

    from uiprobe.config import EngineOptions, Timeouts

    options = EngineOptions(timeouts=Timeouts(large_timeout_ms=30_000))
    solo = Solo(backend, options=options)

Environment overrides are opt-in via `Timeouts.from_env()`:

    UIPROBE_LARGE_TIMEOUT_MS, UIPROBE_SMALL_TIMEOUT_MS,
    UIPROBE_PAUSE_MS, UIPROBE_MINI_PAUSE_MS
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

_ENV_FIELDS = {
    "UIPROBE_LARGE_TIMEOUT_MS": "large_timeout_ms",
    "UIPROBE_SMALL_TIMEOUT_MS": "small_timeout_ms",
    "UIPROBE_PAUSE_MS": "pause_ms",
    "UIPROBE_MINI_PAUSE_MS": "mini_pause_ms",
}


class Timeouts(BaseModel):
    """Timeouts and sleep quanta, all in milliseconds. Quanta must be positive."""

    model_config = ConfigDict(frozen=True)

    large_timeout_ms: int = Field(20_000, ge=0)
    small_timeout_ms: int = Field(10_000, ge=0)
    pause_ms: int = Field(500, gt=0)
    mini_pause_ms: int = Field(300, gt=0)
    dialog_settle_ms: int = Field(1_000, ge=0)
    dialog_close_poll_ms: int = Field(200, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: int) -> Timeouts:
        """
        Build timeouts from UIPROBE_* environment variables.

        Explicit keyword overrides win over the environment. Values that are
        not integers raise a pydantic ValidationError.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for var, field_name in _ENV_FIELDS.items():
            raw = env.get(var)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        values.update(overrides)
        return cls.model_validate(values)


class EngineOptions(BaseModel):
    """Top-level options for a `Solo` session."""

    model_config = ConfigDict(frozen=True)

    timeouts: Timeouts = Field(default_factory=Timeouts)
    # Command run by Waiter.clear_log(); failures are logged, never raised.
    log_clear_command: list[str] = Field(default_factory=lambda: ["logcat", "-c"])
    log_clear_timeout_s: float = Field(5.0, gt=0)
