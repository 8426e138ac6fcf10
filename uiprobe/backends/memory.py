"""
In-memory backend: a model UI that can be mutated from one thread while the
engine polls it from another.

Usage:
    backend = MemoryBackend()
    screen = backend.open_screen("Main", context="app")
    ok = backend.add_element(ElementKind.BUTTON, text="OK")

    # elsewhere, on the "UI thread"
    dialog = backend.add_window(context="dialog")
    backend.add_element(ElementKind.TEXT, text="Saved", window_uid=dialog.uid)

Every read returns immutable models; every mutation replaces the stored model
under a lock, so readers always see a consistent point-in-time state.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import ProviderError
from ..models import Element, ElementKind, Screen, Snapshot, Window

logger = logging.getLogger(__name__)


@dataclass
class _Record:
    element: Element
    row: int | None = None


class MemoryBackend:
    """Implements ViewProvider, ScreenProvider and Scroller over a model UI."""

    def __init__(self, viewport_rows: int | None = None) -> None:
        """
        Args:
            viewport_rows: Number of list rows on screen at once. Elements added
                with a `row` are on screen only while inside the viewport.
                None disables scrolling.
        """
        self._lock = threading.RLock()
        self._seq = itertools.count(1)
        self._records: dict[int, _Record] = {}
        self._windows: dict[int, Window] = {}
        self._screen: Screen | None = None
        self._viewport_rows = viewport_rows
        self._scroll_top = 0
        self.scroll_count = 0

    # ========== Windows ==========

    def open_screen(self, name: str, context: str | None = None) -> Screen:
        """Create a base window and make it the foreground screen."""
        ctx = context if context is not None else name
        with self._lock:
            window = self.add_window(context=ctx, title=name)
            self._screen = Screen(name=name, window=window, context=ctx)
            return self._screen

    def add_window(self, context: str | None = None, shown: bool = True, title: str | None = None) -> Window:
        with self._lock:
            seq = next(self._seq)
            window = Window(uid=seq, context=context, shown=shown, title=title, added_at=float(seq))
            self._windows[window.uid] = window
            logger.debug("window added uid=%s context=%s", window.uid, context)
            return window

    def set_window_shown(self, uid: int, shown: bool) -> Window:
        with self._lock:
            window = self._window(uid).model_copy(update={"shown": shown})
            self._windows[uid] = window
            return window

    def remove_window(self, uid: int) -> None:
        """Detach a window and every element that belongs to it."""
        with self._lock:
            self._window(uid)
            del self._windows[uid]
            for el_uid in [u for u, r in self._records.items() if r.element.window_uid == uid]:
                del self._records[el_uid]
            logger.debug("window removed uid=%s", uid)

    def _window(self, uid: int) -> Window:
        try:
            return self._windows[uid]
        except KeyError:
            raise ProviderError(f"unknown window uid={uid}") from None

    # ========== Elements ==========

    def add_element(
        self,
        kind: ElementKind = ElementKind.VIEW,
        text: str | None = None,
        *,
        id: int | None = None,  # noqa: A002
        shown: bool = True,
        window_uid: int | None = None,
        row: int | None = None,
    ) -> Element:
        """
        Attach an element. Without `window_uid` it goes to the current screen's
        base window, and inherits that window's context.
        """
        with self._lock:
            if window_uid is None and self._screen is not None:
                window_uid = self._screen.window.uid
            context = self._window(window_uid).context if window_uid is not None else None
            seq = next(self._seq)
            element = Element(
                uid=seq,
                kind=kind,
                id=id,
                text=text,
                shown=shown,
                context=context,
                window_uid=window_uid,
                drawing_time=float(seq),
            )
            self._records[seq] = _Record(element=element, row=row)
            return element

    def update_element(self, uid: int, **changes: Any) -> Element:
        """Replace fields of an attached element; it counts as freshly drawn."""
        with self._lock:
            record = self._record(uid)
            changes["drawing_time"] = float(next(self._seq))
            record.element = record.element.model_copy(update=changes)
            return record.element

    def remove_element(self, uid: int) -> None:
        with self._lock:
            self._record(uid)
            del self._records[uid]

    def _record(self, uid: int) -> _Record:
        try:
            return self._records[uid]
        except KeyError:
            raise ProviderError(f"unknown element uid={uid}") from None

    def _materialize(self, record: _Record) -> Element:
        if record.row is None or self._viewport_rows is None:
            return record.element
        on_screen = self._scroll_top <= record.row < self._scroll_top + self._viewport_rows
        if on_screen == record.element.on_screen:
            return record.element
        return record.element.model_copy(update={"on_screen": on_screen})

    # ========== ViewProvider ==========

    def get_views(self, element_type: ElementKind | None, only_visible: bool) -> Snapshot:
        with self._lock:
            elements = tuple(
                el
                for el in (self._materialize(r) for r in self._records.values())
                if el.kind.matches(element_type) and (el.visible or not only_visible)
            )
        return Snapshot(elements=elements, element_type=element_type, only_visible=only_visible)

    def get_window_stack(self) -> tuple[Window, ...]:
        with self._lock:
            return tuple(self._windows.values())

    def most_recently_added(self, stack: Sequence[Window]) -> Window | None:
        recent: Window | None = None
        for window in stack:
            if recent is None or window.added_at >= recent.added_at:
                recent = window
        return recent

    def freshest_of(self, element_type: ElementKind | None) -> Element | None:
        freshest: Element | None = None
        for el in self.get_views(element_type, only_visible=True).elements:
            if freshest is None or el.drawing_time >= freshest.drawing_time:
                freshest = el
        return freshest

    # ========== ScreenProvider ==========

    def current_screen(self) -> Screen:
        with self._lock:
            if self._screen is None:
                raise ProviderError("no screen is open; call open_screen() first")
            return self._screen

    def find_by_id(self, screen: Screen, element_id: int) -> Element | None:
        with self._lock:
            for record in self._records.values():
                el = record.element
                if el.id == element_id and el.window_uid == screen.window.uid:
                    return self._materialize(record)
        return None

    # ========== Scroller ==========

    def scroll_down(self) -> bool:
        with self._lock:
            if self._viewport_rows is None:
                return False
            rows = [r.row for r in self._records.values() if r.row is not None]
            if not rows or self._scroll_top + self._viewport_rows > max(rows):
                return False
            self._scroll_top += self._viewport_rows
            self.scroll_count += 1
            logger.debug("scrolled to row %s", self._scroll_top)
            return True

    def scroll_to_top(self) -> None:
        with self._lock:
            self._scroll_top = 0
