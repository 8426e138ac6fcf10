"""
Wait & locate engine.

Every wait here has the same shape: fix an absolute deadline once, evaluate,
return on success, give up once the deadline has passed, otherwise sleep one
quantum and evaluate again. Timeouts are soft: they come back as False/None.
Only the view lookups (`get_view()`, `wait_for_and_get_view()`) fail hard,
because callers use them right before acting on the element.

Example:
    waiter = Waiter(backend, Searcher(backend, backend), Sleeper())

    if not waiter.wait_for_condition(lambda: backend.current_screen().name == "Home", 5_000):
        ...
    label = waiter.wait_for_text("Saved", timeout_ms=2_000)
"""

from __future__ import annotations

import inspect
import logging
import subprocess
import time
from collections.abc import Awaitable, Callable

from .backends.protocol import ElementSearch, ViewProvider
from .config import EngineOptions, Timeouts
from .deadline import Deadline
from .errors import ElementNotFoundError
from .models import Element, ElementKind, WaitResult, WaitSpec
from .sleeper import Sleeper

logger = logging.getLogger(__name__)

Condition = Callable[[], object]
AsyncCondition = Callable[[], "object | Awaitable[object]"]


class Waiter:
    def __init__(
        self,
        views: ViewProvider,
        searcher: ElementSearch,
        sleeper: Sleeper | None = None,
        options: EngineOptions | None = None,
        time_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self._views = views
        self._searcher = searcher
        self._options = options or EngineOptions()
        self._timeouts = self._options.timeouts
        self._sleeper = sleeper or Sleeper(self._timeouts)
        self._time_fn = time_fn

    @property
    def timeouts(self) -> Timeouts:
        return self._timeouts

    def _deadline(self, timeout_ms: float) -> Deadline:
        return Deadline.after_ms(timeout_ms, time_fn=self._time_fn)

    # ========== Conditions ==========

    def wait_for_condition(self, condition: Condition, timeout_ms: float) -> bool:
        """
        Wait for `condition()` to become truthy.

        The condition is evaluated at least once, even with a zero or negative
        timeout. There is no sleep after a passing evaluation.

        Args:
            condition: Zero-argument predicate; exceptions it raises propagate
            timeout_ms: Time budget in milliseconds

        Returns:
            True if the condition passed before the deadline, False otherwise
        """
        deadline = self._deadline(timeout_ms)
        attempts = 0
        while True:
            attempts += 1
            if condition():
                logger.debug("condition satisfied after %d attempt(s)", attempts)
                return True
            if deadline.expired():
                logger.debug("condition not satisfied after %d attempt(s), timeout=%sms", attempts, timeout_ms)
                return False
            self._sleeper.sleep()

    async def wait_for_condition_async(self, condition: AsyncCondition, timeout_ms: float) -> bool:
        """Same as wait_for_condition() for asyncio callers; `condition` may be async."""
        deadline = self._deadline(timeout_ms)
        while True:
            result = condition()
            if inspect.isawaitable(result):
                result = await result
            if result:
                return True
            if deadline.expired():
                return False
            await self._sleeper.sleep_async()

    # ========== Text ==========

    def wait_for_text(
        self,
        text: str,
        min_matches: int = 0,
        timeout_ms: float | None = None,
        scroll: bool = True,
        only_visible: bool = False,
        hard_stoppage: bool = True,
        element_type: ElementKind = ElementKind.TEXT,
    ) -> Element | None:
        """
        Wait for an element showing text that matches `text`.

        Args:
            text: Regular expression matched (case-insensitive) against shown text
            min_matches: Unique matches required before returning; 0 means any
            timeout_ms: Budget in milliseconds (default: the large timeout)
            scroll: Allow each search attempt to scroll down
            only_visible: Only consider visible elements
            hard_stoppage: If False, run one more untimed scroll-and-search
                pass in the search layer after the deadline
            element_type: Kind of element to search among

        Returns:
            The matching element, or None if the deadline passed first
        """
        if timeout_ms is None:
            timeout_ms = self._timeouts.large_timeout_ms
        deadline = self._deadline(timeout_ms)

        while True:
            found = self._searcher.search_for(element_type, text, min_matches, scroll, only_visible)
            if found is not None:
                return found
            if deadline.expired():
                break
            self._sleeper.sleep()

        logger.debug("wait_for_text(%r) timed out after %sms (hard_stoppage=%s)", text, timeout_ms, hard_stoppage)
        return self._searcher.search_after_timeout(
            element_type, text, min_matches, only_visible, hard_stoppage=hard_stoppage
        )

    def wait_for(self, spec: WaitSpec) -> WaitResult:
        """Run wait_for_text() from a WaitSpec and report timing."""
        if spec.text is None:
            raise ValueError("WaitSpec.text is required for wait_for()")
        start = self._time_fn()
        element = self.wait_for_text(
            spec.text,
            min_matches=spec.min_matches,
            timeout_ms=spec.timeout_ms,
            scroll=spec.scroll,
            only_visible=spec.only_visible,
            hard_stoppage=spec.hard_stoppage,
            element_type=spec.element_type,
        )
        duration_ms = int((self._time_fn() - start) * 1000)
        return WaitResult(
            found=element is not None,
            element=element,
            duration_ms=duration_ms,
            timeout=element is None,
        )

    # ========== Views ==========

    def wait_for_view(
        self,
        element_type: ElementKind,
        index: int = 0,
        timeout_ms: float | None = None,
        scroll: bool = True,
    ) -> bool:
        """
        Wait until more than `index` unique visible elements of `element_type` were seen.

        Elements seen on earlier scroll steps of the same call still count.
        """
        if timeout_ms is None:
            timeout_ms = self._timeouts.small_timeout_ms
        unique_views: set[Element] = set()
        deadline = self._deadline(timeout_ms)

        while True:
            if self._searcher.search_for_view(unique_views, element_type, index):
                return True
            if deadline.expired():
                logger.debug("%d unique %s(s) seen, needed %d", len(unique_views), element_type.value, index + 1)
                return False
            if scroll:
                self._searcher.scroll_down()
            self._sleeper.sleep()

    def wait_for_and_get_view(
        self,
        element_type: ElementKind,
        index: int = 0,
        timeout_ms: float | None = None,
    ) -> Element:
        """
        Wait for the `index`-th visible element of `element_type`, then resolve it.

        The wait and the resolution share one unique-view count, so elements
        that vanish between the two shift the index the way `get_view()`
        describes. A timed-out wait is not an error by itself; the element is
        still resolved from a fresh snapshot.

        Raises:
            ElementNotFoundError: If the index is out of range after the wait
        """
        if not self.wait_for_view(element_type, index, timeout_ms):
            logger.debug("wait for %s #%d timed out, resolving anyway", element_type.value, index)
        return self.get_view(index, element_type)

    def get_view(self, index: int, element_type: ElementKind) -> Element:
        """
        Resolve the `index`-th visible element of `element_type` from a fresh snapshot.

        Pair it with a preceding `wait_for_view()` on the same kind (see
        `wait_for_and_get_view()`); the shrinkage check uses the count that
        wait recorded.

        If fewer elements are visible now than the last view search counted,
        the index is shifted down by the difference (elements ahead of it were
        scrolled away or destroyed), unless that would make it negative. A
        grown list is left alone.

        Raises:
            ElementNotFoundError: If the index is still out of range
        """
        unique_count = self._searcher.unique_match_count()
        views = self._views.get_views(element_type, only_visible=True)
        resolved = stabilize_index(index, unique_count, len(views))
        element = views.get(resolved)
        if element is None:
            raise ElementNotFoundError.for_index(element_type, resolved)
        return element

    # ========== Device Log ==========

    def clear_log(self) -> bool:
        """
        Clear the device log with the configured command.

        Failures are logged and swallowed; they never abort a test.

        Returns:
            True if the command ran and exited with status 0
        """
        cmd = list(self._options.log_clear_command)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self._options.log_clear_timeout_s,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.warning("Could not clear log with %s: %s", cmd, e)
            return False
        if result.returncode != 0:
            logger.warning("Log clear command %s exited with status %s", cmd, result.returncode)
            return False
        return True


def stabilize_index(index: int, previous_count: int, current_count: int) -> int:
    """
    Compensate `index` for elements that disappeared since `previous_count` was observed.

    Only shrinkage is compensated, and never below zero:

        >>> stabilize_index(4, previous_count=7, current_count=5)
        2
        >>> stabilize_index(1, previous_count=7, current_count=5)
        1
    """
    if current_count < previous_count:
        adjusted = index - (previous_count - current_count)
        if adjusted >= 0:
            return adjusted
    return index
