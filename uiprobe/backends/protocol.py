"""
Collaborator protocols consumed by the engine.

The engine never talks to a device directly. It reads structural snapshots
through these protocols and asks a Scroller for scroll steps. Any object with
matching methods works (structural typing); `MemoryBackend` implements all of
them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models import Element, ElementKind, Screen, Snapshot, Window


@runtime_checkable
class ViewProvider(Protocol):
    def get_views(self, element_type: ElementKind | None, only_visible: bool) -> Snapshot:
        """Return the currently attached elements of `element_type` (None = all)."""
        ...

    def get_window_stack(self) -> Sequence[Window]:
        """Return top-level windows in stack order."""
        ...

    def most_recently_added(self, stack: Sequence[Window]) -> Window | None:
        """Return the window of `stack` that was added last."""
        ...

    def freshest_of(self, element_type: ElementKind | None) -> Element | None:
        """Return the most recently drawn visible element of `element_type`."""
        ...


@runtime_checkable
class ScreenProvider(Protocol):
    def current_screen(self) -> Screen: ...

    def find_by_id(self, screen: Screen, element_id: int) -> Element | None: ...


@runtime_checkable
class Scroller(Protocol):
    def scroll_down(self) -> bool:
        """Scroll one step; return False when there is nothing more to scroll."""
        ...


@runtime_checkable
class ElementSearch(Protocol):
    def search_for(
        self,
        element_type: ElementKind,
        pattern: str,
        min_matches: int,
        scroll: bool,
        only_visible: bool,
    ) -> Element | None:
        """One search attempt over a fresh snapshot."""
        ...

    def search_after_timeout(
        self,
        element_type: ElementKind,
        pattern: str,
        min_matches: int,
        only_visible: bool,
        hard_stoppage: bool,
    ) -> Element | None:
        """Called once a wait's deadline passed; one more scroll-and-search pass unless `hard_stoppage`."""
        ...

    def search_for_view(self, unique_views: set[Element], element_type: ElementKind, index: int) -> bool:
        """Add visible elements to `unique_views`; True once more than `index` were seen."""
        ...

    def unique_match_count(self) -> int:
        """Number of unique elements counted by the most recent view search."""
        ...

    def scroll_down(self) -> bool:
        """One scroll step through the underlying Scroller; False at the end."""
        ...
