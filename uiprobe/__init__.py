"""
uiprobe - wait & locate engine for live UI test automation.

Quick start:
    from uiprobe import ElementKind, Solo
    from uiprobe.backends import MemoryBackend

    backend = MemoryBackend()
    backend.open_screen("Main")
    backend.add_element(ElementKind.BUTTON, text="OK")

    solo = Solo(backend)
    assert solo.wait_for_text("OK", timeout_ms=1_000) is not None
    ok = solo.get_view(ElementKind.BUTTON, 0)
"""

from .config import EngineOptions, Timeouts
from .deadline import Deadline
from .dialogs import OverlayDetector
from .errors import ElementNotFoundError, ProviderError, UIProbeError
from .getter import Getter
from .models import (
    Capability,
    Element,
    ElementKind,
    Screen,
    Snapshot,
    WaitResult,
    WaitSpec,
    Window,
)
from .searcher import Searcher
from .sleeper import Sleeper
from .solo import Solo
from .waiter import Waiter, stabilize_index

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Solo",
    # Engine
    "Waiter",
    "Getter",
    "OverlayDetector",
    "Searcher",
    "Sleeper",
    "Deadline",
    "stabilize_index",
    # Config
    "EngineOptions",
    "Timeouts",
    # Models
    "Capability",
    "Element",
    "ElementKind",
    "Screen",
    "Snapshot",
    "WaitResult",
    "WaitSpec",
    "Window",
    # Errors
    "UIProbeError",
    "ProviderError",
    "ElementNotFoundError",
]
