from __future__ import annotations

from .models import ElementKind


class UIProbeError(Exception):
    """Base class for uiprobe errors."""


class ProviderError(UIProbeError):
    """Raised by a backend when it is asked about something it does not hold."""


class ElementNotFoundError(UIProbeError, AssertionError):
    """
    Hard failure: a locate call could not resolve its element.

    Subclasses AssertionError so that it fails the current test case under any
    test runner rather than surfacing later as a None dereference.
    """

    def __init__(
        self,
        reason_code: str,
        message: str,
        *,
        element_type: ElementKind | None = None,
        index: int | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason_code = reason_code
        self.element_type = element_type
        self.index = index
        self.text = text

    @classmethod
    def for_index(cls, element_type: ElementKind, index: int) -> ElementNotFoundError:
        """Message for an index that is not present after stabilization."""
        match = index + 1
        name = element_type.display_name
        if match > 1:
            message = f"{match} {name}s are not found!"
        else:
            message = f"{name} is not found!"
        return cls("view_not_found", message, element_type=element_type, index=index)
