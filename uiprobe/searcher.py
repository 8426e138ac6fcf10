"""
Element search: single search attempts over fresh snapshots.

A search attempt never waits on its own; the retry loop and deadline live in
Waiter. With `scroll=True` an attempt keeps scrolling down until it finds a
match or the scroller reports the end of the content.
"""

from __future__ import annotations

import logging
import re

from .backends.protocol import Scroller, ViewProvider
from .models import Element, ElementKind

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Case-insensitive regex; patterns that do not compile are matched literally."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(pattern), re.IGNORECASE)


def text_matches(pattern: re.Pattern[str], element: Element) -> bool:
    return pattern.search(element.shown_text) is not None


class Searcher:
    def __init__(self, views: ViewProvider, scroller: Scroller | None = None) -> None:
        self._views = views
        self._scroller = scroller
        self._unique_views_count = 0

    def search_for(
        self,
        element_type: ElementKind,
        pattern: str,
        min_matches: int = 0,
        scroll: bool = True,
        only_visible: bool = False,
    ) -> Element | None:
        """
        Search once for an element of `element_type` whose shown text matches `pattern`.

        Matches are counted uniquely across scroll steps of this attempt. With
        `min_matches` 0 or 1 the first match is returned; otherwise the element
        that completes the `min_matches`-th unique match is returned.

        Returns:
            The matching element, or None if the attempt found too few matches.
        """
        expected = max(1, min_matches)
        regex = compile_pattern(pattern)
        unique: set[Element] = set()

        while True:
            snapshot = self._views.get_views(element_type, only_visible)
            for el in snapshot.elements:
                if text_matches(regex, el):
                    unique.add(el)
                    if len(unique) == expected:
                        return el
            if not scroll or not self._scroll_step():
                logger.debug(
                    "%d match(es) of %r among %s, expected %d",
                    len(unique),
                    pattern,
                    element_type.value,
                    expected,
                )
                return None

    def search_after_timeout(
        self,
        element_type: ElementKind,
        pattern: str,
        min_matches: int = 0,
        only_visible: bool = False,
        hard_stoppage: bool = True,
    ) -> Element | None:
        """
        Last chance pass after a wait's deadline: one scroll step, then one
        scrolling search. A hard stop skips the pass and returns None.
        """
        if hard_stoppage:
            return None
        self._scroll_step()
        return self.search_for(element_type, pattern, min_matches, scroll=True, only_visible=only_visible)

    def search_for_view(self, unique_views: set[Element], element_type: ElementKind, index: int) -> bool:
        """
        Record visible elements of `element_type` into `unique_views`.

        Returns True once more than `index` unique elements have been seen
        across calls sharing the same set.
        """
        snapshot = self._views.get_views(element_type, only_visible=True)
        unique_views.update(snapshot.elements)
        self._unique_views_count = len(unique_views)
        return self._unique_views_count > 0 and index < self._unique_views_count

    def unique_match_count(self) -> int:
        return self._unique_views_count

    def scroll_down(self) -> bool:
        return self._scroll_step()

    def _scroll_step(self) -> bool:
        if self._scroller is None:
            return False
        return self._scroller.scroll_down()
