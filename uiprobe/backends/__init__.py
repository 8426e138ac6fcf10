"""
Backend abstractions for uiprobe.

The engine reads UI state through small protocols (ViewProvider,
ScreenProvider, Scroller) so it can run against any automation driver.
`MemoryBackend` is an in-process model UI used by tests and examples:

    from uiprobe.backends import MemoryBackend
    from uiprobe import Solo, ElementKind

    backend = MemoryBackend()
    backend.open_screen("Main")
    backend.add_element(ElementKind.BUTTON, text="Save")

    solo = Solo(backend)
    button = solo.getter.get_view(ElementKind.BUTTON, 0)
"""

from .memory import MemoryBackend
from .protocol import ElementSearch, ScreenProvider, Scroller, ViewProvider

__all__ = [
    # Protocols
    "ViewProvider",
    "ScreenProvider",
    "Scroller",
    "ElementSearch",
    # In-memory backend
    "MemoryBackend",
]
