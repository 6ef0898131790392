"""Scroll completion, scroll-draining and scroll-to-reveal.

Two loops live here:

- ``Scroller.drain`` scrolls a lazily loaded container (the endorsers
  popup list) page by page until the Scroll-Complete Detector reports
  its end, pausing between pages according to a ``DelayPolicy``.
- ``Scroller.reveal`` scrolls the document until a lazily rendered
  section appears, or until the page bottom or the time budget is hit.

Both are bounded by a wall-clock budget measured with an injectable
clock.
"""

import logging
import random
import time
from enum import Enum
from typing import Callable, Optional

from .events import EventSink, LoggingEventSink, emit
from .surface import ElementHandle, RenderableSurface, ScrollMetrics

# Maps the number of scrolls performed so far to the pause before the
# next completeness check, in seconds.
DelayPolicy = Callable[[int], float]


def random_jitter(
    low: float = 5.0, high: float = 10.0, rng: Optional[random.Random] = None
) -> DelayPolicy:
    """Uniformly random pause in ``[low, high)`` seconds, independent of attempt."""
    source = rng or random.Random()

    def policy(attempt: int) -> float:
        return low + source.random() * (high - low)

    return policy


def no_delay(attempt: int) -> float:
    """Policy for tests and fast surfaces: never pause."""
    return 0.0


class ScrollCompleteDetector:
    """Decides whether a scrollable container has reached its end."""

    def __init__(self, surface: RenderableSurface):
        self.surface = surface

    @staticmethod
    def reached_limit(metrics: ScrollMetrics) -> bool:
        return metrics.position + metrics.viewport >= metrics.limit

    async def is_complete(self, container: Optional[ElementHandle]) -> bool:
        """True when the container cannot be scrolled any further.

        Content may still be loading, so callers re-check after every
        scroll and pause instead of trusting a single reading.
        """
        metrics = await self.surface.scroll_metrics(container)
        return self.reached_limit(metrics)


class ScrollOutcome(str, Enum):
    """How a drain loop ended."""

    COMPLETE = "complete"
    BUDGET_EXCEEDED = "budget_exceeded"


class Scroller:
    """Scroll loops bounded by a wall-clock budget."""

    def __init__(
        self,
        surface: RenderableSurface,
        delay_policy: DelayPolicy = no_delay,
        poll_interval: float = 1.0,
        drain_budget: float = 600.0,
        reveal_timeout: float = 10.0,
        events: Optional[EventSink] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.surface = surface
        self.detector = ScrollCompleteDetector(surface)
        self.delay_policy = delay_policy
        self.poll_interval = poll_interval
        self.drain_budget = drain_budget
        self.reveal_timeout = reveal_timeout
        self.events = events or LoggingEventSink()
        self.clock = clock

    async def drain(self, container: ElementHandle) -> ScrollOutcome:
        """Scroll ``container`` one page at a time until it is exhausted."""
        started = self.clock()
        attempt = 0
        while not await self.detector.is_complete(container):
            if self.clock() - started >= self.drain_budget:
                emit(
                    self.events,
                    "scroll.budget_exceeded",
                    logging.WARNING,
                    scrolls=attempt,
                    budget=self.drain_budget,
                )
                return ScrollOutcome.BUDGET_EXCEEDED
            await self.surface.scroll_by(container)
            pause = self.delay_policy(attempt)
            attempt += 1
            emit(self.events, "scroll.page", scrolls=attempt, pause=round(pause, 3))
            await self.surface.delay(pause)
        emit(self.events, "scroll.complete", scrolls=attempt)
        return ScrollOutcome.COMPLETE

    async def reveal(self, selector: str) -> Optional[ElementHandle]:
        """Scroll the document until ``selector`` appears.

        Returns the element, or ``None`` when the page bottom or the
        reveal timeout is reached first.
        """
        started = self.clock()
        while True:
            found = await self.surface.wait_for_appearance(
                selector, None, self.poll_interval
            )
            if found is not None:
                return found
            if await self.detector.is_complete(None):
                emit(self.events, "reveal.absent", selector=selector, reason="page_end")
                return None
            if self.clock() - started >= self.reveal_timeout:
                emit(self.events, "reveal.absent", selector=selector, reason="timeout")
                return None
            await self.surface.scroll_by(None)
