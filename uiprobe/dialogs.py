"""
Overlay (dialog/popup) detection over window-stack snapshots.

`is_overlay_open()` is a heuristic, not a state machine. An overlay counts as
open when the active top-level window both

1. has a context different from the screen's base context, and
2. is not the screen's base window itself.

Both conditions are required; each one alone misreads some windows as
overlays (a window sharing the app context, a second handle to the base
window).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .backends.protocol import ScreenProvider, ViewProvider
from .config import Timeouts
from .deadline import Deadline
from .models import Window
from .sleeper import Sleeper

logger = logging.getLogger(__name__)


class OverlayDetector:
    def __init__(
        self,
        views: ViewProvider,
        screens: ScreenProvider,
        sleeper: Sleeper | None = None,
        timeouts: Timeouts | None = None,
        time_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self._views = views
        self._screens = screens
        self._timeouts = timeouts or Timeouts()
        self._sleeper = sleeper or Sleeper(self._timeouts)
        self._time_fn = time_fn

    def is_overlay_open(self, check_open: bool = True) -> bool:
        """
        Single-shot check of the current window stack.

        Args:
            check_open: True when asking "is an overlay open?". If the most
                recently added window is the base window, any other shown
                window in the stack is taken as the active one instead (a
                dismissed window can linger at the top of the stack).
                False when asking "has it closed?": only the most recent
                window is considered.
        """
        screen = self._screens.current_screen()
        base = screen.window
        stack = self._views.get_window_stack()
        active: Window | None = self._views.most_recently_added(stack)

        if check_open and active == base:
            for window in stack:
                if window is not None and window.shown and window != base:
                    active = window
                    break

        active_context = active.context if active is not None else None
        return active_context != screen.context and active != base

    def wait_for_overlay_to_open(self, timeout_ms: float, sleep_first: bool = False) -> bool:
        """
        Wait for an overlay to open, polling at the mini quantum.

        Returns:
            True if an overlay opened before the deadline
        """
        deadline = Deadline.after_ms(timeout_ms, time_fn=self._time_fn)
        if sleep_first:
            self._sleeper.sleep()
        while True:
            if self.is_overlay_open(check_open=True):
                return True
            if deadline.expired():
                return False
            self._sleeper.sleep_mini()

    def wait_for_overlay_to_close(self, timeout_ms: float, sleep_first: bool = False) -> bool:
        """
        Wait for the current overlay to close.

        Starts with a settle step: a short wait for the overlay to open
        (`Timeouts.dialog_settle_ms`), so a just-triggered overlay is on screen
        before closure is checked. The settle time is not taken out of
        `timeout_ms`; total wall time can exceed it by up to the settle step.

        Returns:
            True if no overlay is open before the deadline
        """
        settled = self.wait_for_overlay_to_open(self._timeouts.dialog_settle_ms, sleep_first)
        logger.debug("overlay settle step done, open=%s", settled)

        deadline = Deadline.after_ms(timeout_ms, time_fn=self._time_fn)
        while True:
            if not self.is_overlay_open(check_open=False):
                return True
            if deadline.expired():
                logger.debug("overlay still open after %sms", timeout_ms)
                return False
            self._sleeper.sleep_for(self._timeouts.dialog_close_poll_ms)
