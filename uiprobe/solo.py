"""
Solo: one object wiring the engine to a backend.

Example:
    backend = MemoryBackend()
    backend.open_screen("Main")
    solo = Solo(backend)

    solo.wait_for_text("Welcome")
    ok = solo.get_view(ElementKind.BUTTON, 0)
    assert solo.wait_for_dialog_to_close(2_000)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from .backends.protocol import ScreenProvider, Scroller, ViewProvider
from .config import EngineOptions
from .dialogs import OverlayDetector
from .getter import Getter
from .models import Element, ElementKind
from .searcher import Searcher
from .sleeper import Sleeper
from .waiter import Waiter


class Solo:
    """
    Facade over Waiter, Getter and OverlayDetector.

    Attributes:
        waiter: Condition/text/view waits
        getter: Index, text and id resolution
        dialogs: Overlay detection
        searcher: Single search attempts
    """

    def __init__(
        self,
        backend: Any,
        options: EngineOptions | None = None,
        *,
        views: ViewProvider | None = None,
        screens: ScreenProvider | None = None,
        scroller: Scroller | None = None,
        sleeper: Sleeper | None = None,
        time_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            backend: Object implementing ViewProvider, ScreenProvider and
                (optionally) Scroller, e.g. MemoryBackend
            options: Engine options (default: EngineOptions())
            views, screens, scroller: Override individual collaborators
            sleeper: Sleep primitive (default: real sleeping with the configured quanta)
            time_fn: Clock used for deadlines
        """
        self.options = options or EngineOptions()
        views = views or backend
        screens = screens or backend
        if scroller is None and isinstance(backend, Scroller):
            scroller = backend
        sleeper = sleeper or Sleeper(self.options.timeouts)

        self.searcher = Searcher(views, scroller)
        self.waiter = Waiter(views, self.searcher, sleeper, self.options, time_fn=time_fn)
        self.getter = Getter(views, screens, self.waiter)
        self.dialogs = OverlayDetector(views, screens, sleeper, self.options.timeouts, time_fn=time_fn)

    def wait_for_condition(self, condition: Callable[[], object], timeout_ms: float) -> bool:
        return self.waiter.wait_for_condition(condition, timeout_ms)

    def wait_for_text(self, text: str, **kwargs: Any) -> Element | None:
        return self.waiter.wait_for_text(text, **kwargs)

    def get_view(self, element_type: ElementKind, index: int) -> Element | None:
        return self.getter.get_view(element_type, index)

    def wait_for_and_get_view(self, element_type: ElementKind, index: int = 0) -> Element:
        return self.waiter.wait_for_and_get_view(element_type, index)

    def get_view_by_text(self, element_type: ElementKind, text: str, only_visible: bool = True) -> Element:
        return self.getter.get_view_by_text(element_type, text, only_visible)

    def get_view_by_id(self, element_id: int) -> Element | None:
        return self.getter.get_view_by_id(element_id)

    def is_dialog_open(self) -> bool:
        return self.dialogs.is_overlay_open(check_open=True)

    def wait_for_dialog_to_open(self, timeout_ms: float | None = None) -> bool:
        if timeout_ms is None:
            timeout_ms = self.options.timeouts.large_timeout_ms
        return self.dialogs.wait_for_overlay_to_open(timeout_ms, sleep_first=True)

    def wait_for_dialog_to_close(self, timeout_ms: float | None = None) -> bool:
        if timeout_ms is None:
            timeout_ms = self.options.timeouts.large_timeout_ms
        return self.dialogs.wait_for_overlay_to_close(timeout_ms)
