"""
Element resolution by index, shown text or identifier.

Index and text lookups are hard: when they cannot resolve an element they
raise ElementNotFoundError and the test case fails there. Identifier and
freshness lookups are soft and return None.
"""

from __future__ import annotations

import logging

from .backends.protocol import ScreenProvider, ViewProvider
from .errors import ElementNotFoundError
from .models import Element, ElementKind
from .waiter import Waiter

logger = logging.getLogger(__name__)


class Getter:
    def __init__(self, views: ViewProvider, screens: ScreenProvider, waiter: Waiter) -> None:
        self._views = views
        self._screens = screens
        self._waiter = waiter

    def get_view(self, element_type: ElementKind, index: int) -> Element | None:
        """
        Return the `index`-th visible element of `element_type`.

        Waits until at least `index + 1` such elements exist, then reads a
        fresh snapshot. If elements vanished between the wait and the
        snapshot, the index is clamped to the last element.

        Returns:
            The element, or None if the fresh snapshot is empty

        Raises:
            ElementNotFoundError: If the wait times out
        """
        if not self._waiter.wait_for_view(element_type, index):
            raise ElementNotFoundError(
                "index_not_found",
                f"No {element_type.display_name} with index {index} is found!",
                element_type=element_type,
                index=index,
            )
        views = self._views.get_views(element_type, only_visible=True)
        return views.get(valid_index(index, len(views)))

    def get_view_by_text(self, element_type: ElementKind, text: str, only_visible: bool = True) -> Element:
        """
        Return the element of `element_type` whose shown text equals `text` exactly.

        `text` is first waited for as a pattern (any number of matches, no
        scrolling). If several elements show the same text the last one in
        snapshot order wins.

        Raises:
            ElementNotFoundError: If no element shows `text` after the wait
        """
        self._waiter.wait_for_text(
            text,
            min_matches=0,
            timeout_ms=self._waiter.timeouts.small_timeout_ms,
            scroll=False,
            only_visible=only_visible,
        )
        views = self._views.get_views(element_type, only_visible=only_visible)

        found: Element | None = None
        for el in views.elements:
            if el.shown_text == text:
                found = el
        if found is None:
            raise ElementNotFoundError(
                "text_not_found",
                f"No {element_type.display_name} with text {text} is found!",
                element_type=element_type,
                text=text,
            )
        return found

    def get_view_by_id(self, element_id: int) -> Element | None:
        """Look up an element by identifier on the current screen, then anywhere."""
        screen = self._screens.current_screen()
        found = self._screens.find_by_id(screen, element_id)
        if found is not None:
            return found

        for el in self._views.get_views(None, only_visible=False).elements:
            if el.id == element_id:
                return el
        logger.debug("no element with id %s", element_id)
        return None

    def get_freshest_view(self, element_type: ElementKind) -> Element | None:
        """Most recently drawn visible element of `element_type`, if any."""
        return self._views.freshest_of(element_type)


def valid_index(index: int, size: int) -> int:
    """Clamp `index` into [0, size - 1]; returns -1 for an empty list."""
    if index >= size:
        return size - 1
    return max(index, 0) if size else -1
