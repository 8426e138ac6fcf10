"""
Pydantic models for uiprobe - elements, windows, snapshots and wait results.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Capability(str, Enum):
    """Capability tags used to dispatch "elements of type T" filtering."""

    TEXT_BEARING = "text_bearing"
    CLICKABLE = "clickable"
    EDITABLE = "editable"
    CHECKABLE = "checkable"
    SCROLLABLE = "scrollable"


class ElementKind(str, Enum):
    """Element type tag. `VIEW` matches everything, `TEXT` every text-bearing kind."""

    VIEW = "view"
    TEXT = "text"
    BUTTON = "button"
    EDIT_TEXT = "edit_text"
    CHECK_BOX = "check_box"
    RADIO_BUTTON = "radio_button"
    TOGGLE_BUTTON = "toggle_button"
    IMAGE = "image"
    IMAGE_BUTTON = "image_button"
    LIST = "list"
    SCROLL = "scroll"
    SPINNER = "spinner"
    WEB = "web"

    @property
    def capabilities(self) -> frozenset[Capability]:
        return _CAPABILITIES[self]

    @property
    def display_name(self) -> str:
        """CamelCase name used in failure messages, e.g. "EditText"."""
        return "".join(part.capitalize() for part in self.value.split("_"))

    def has(self, capability: Capability) -> bool:
        return capability in _CAPABILITIES[self]

    def matches(self, requested: ElementKind | None) -> bool:
        """Return True if an element of this kind satisfies a `requested` filter."""
        if requested is None or requested is ElementKind.VIEW:
            return True
        if requested is ElementKind.TEXT:
            return self.has(Capability.TEXT_BEARING)
        return self is requested


_TB = Capability.TEXT_BEARING
_CL = Capability.CLICKABLE

_CAPABILITIES: dict[ElementKind, frozenset[Capability]] = {
    ElementKind.VIEW: frozenset(),
    ElementKind.TEXT: frozenset({_TB}),
    ElementKind.BUTTON: frozenset({_TB, _CL}),
    ElementKind.EDIT_TEXT: frozenset({_TB, Capability.EDITABLE}),
    ElementKind.CHECK_BOX: frozenset({_TB, _CL, Capability.CHECKABLE}),
    ElementKind.RADIO_BUTTON: frozenset({_TB, _CL, Capability.CHECKABLE}),
    ElementKind.TOGGLE_BUTTON: frozenset({_TB, _CL, Capability.CHECKABLE}),
    ElementKind.IMAGE: frozenset(),
    ElementKind.IMAGE_BUTTON: frozenset({_CL}),
    ElementKind.LIST: frozenset({Capability.SCROLLABLE}),
    ElementKind.SCROLL: frozenset({Capability.SCROLLABLE}),
    ElementKind.SPINNER: frozenset({_CL}),
    ElementKind.WEB: frozenset({Capability.SCROLLABLE}),
}


class Element(BaseModel):
    """
    One UI element as seen at snapshot time.

    `uid` is the provider's handle; two Element values with the same uid refer
    to the same live element even if its text or visibility changed between
    snapshots. `id` is the optional stable identifier assigned by the app.
    """

    model_config = ConfigDict(frozen=True)

    uid: int
    kind: ElementKind = ElementKind.VIEW
    id: Optional[int] = None
    text: Optional[str] = None
    shown: bool = True
    on_screen: bool = True
    context: Optional[str] = None
    window_uid: Optional[int] = None
    drawing_time: float = 0.0

    @property
    def visible(self) -> bool:
        return self.shown and self.on_screen

    @property
    def shown_text(self) -> str:
        return self.text or ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.uid == other.uid

    def __hash__(self) -> int:
        return hash(("element", self.uid))


class Window(BaseModel):
    """A top-level window in the application's window stack."""

    model_config = ConfigDict(frozen=True)

    uid: int
    context: Optional[str] = None
    shown: bool = True
    title: Optional[str] = None
    added_at: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Window):
            return NotImplemented
        return self.uid == other.uid

    def __hash__(self) -> int:
        return hash(("window", self.uid))


class Screen(BaseModel):
    """The current foreground screen: its base window and base context."""

    model_config = ConfigDict(frozen=True)

    name: str
    window: Window
    context: Optional[str] = None


class Snapshot(BaseModel):
    """Immutable, ordered listing of elements captured at one instant."""

    model_config = ConfigDict(frozen=True)

    elements: tuple[Element, ...] = ()
    element_type: Optional[ElementKind] = None
    only_visible: bool = False
    captured_at: float = Field(default_factory=time.monotonic)

    def __len__(self) -> int:
        return len(self.elements)

    def get(self, index: int) -> Element | None:
        """Return the element at `index`, or None if out of bounds (no negative indexing)."""
        if 0 <= index < len(self.elements):
            return self.elements[index]
        return None

    def visible_only(self) -> Snapshot:
        return self.model_copy(
            update={
                "elements": tuple(e for e in self.elements if e.visible),
                "only_visible": True,
            }
        )


class WaitSpec(BaseModel):
    """Parameters of one text wait. `min_matches=0` means first match wins."""

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    element_type: ElementKind = ElementKind.TEXT
    min_matches: int = Field(0, ge=0)
    timeout_ms: Optional[int] = Field(None, ge=0)  # None -> large default timeout
    scroll: bool = True
    only_visible: bool = False
    hard_stoppage: bool = True


class WaitResult(BaseModel):
    """Result of an instrumented wait_for operation"""

    found: bool
    element: Optional[Element] = None
    duration_ms: int
    timeout: bool
