"""Click-driven disclosure of hidden content.

LinkedIn hides most list entries behind "see more" / "show all" buttons
that disappear (or move further down) once they have been clicked. The
``DisclosureDriver`` keeps clicking such a trigger until it is gone.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .events import EventSink, LoggingEventSink, emit
from .scraper_errors import ElementDetached
from .surface import ElementHandle, RenderableSurface


class DisclosureState(Enum):
    """States of a single disclosure run."""

    PROBE = "probe"
    ACTIVATE = "activate"
    AWAIT_VANISH = "await_vanish"
    DONE = "done"
    BUDGET_EXCEEDED = "budget_exceeded"


class DisclosureOutcome(str, Enum):
    """How a disclosure run ended."""

    COMPLETE = "complete"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(frozen=True)
class DisclosureResult:
    """Outcome of a disclosure run and the number of clicks it made."""

    outcome: DisclosureOutcome
    clicks: int

    @property
    def complete(self) -> bool:
        return self.outcome is DisclosureOutcome.COMPLETE


class DisclosureDriver:
    """Clicks a trigger until it no longer exists in its scope.

    Each round probes for the trigger, clicks it, then waits up to
    ``poll_interval`` seconds for it to vanish before probing again. A
    trigger that is absent on the first probe is a no-op. The run stops
    with ``BUDGET_EXCEEDED`` once ``budget`` seconds of wall-clock time
    have elapsed; whatever was disclosed by then stays on the page.

    Runs against disjoint scopes are independent. Runs against the same
    scope must be sequenced by the caller.
    """

    def __init__(
        self,
        surface: RenderableSurface,
        poll_interval: float = 1.0,
        budget: float = 60.0,
        events: Optional[EventSink] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.surface = surface
        self.poll_interval = poll_interval
        self.budget = budget
        self.events = events or LoggingEventSink()
        self.clock = clock

    async def expand(
        self, trigger: str, scope: Optional[ElementHandle] = None
    ) -> DisclosureResult:
        """Click ``trigger`` inside ``scope`` until it disappears."""
        started = self.clock()
        state = DisclosureState.PROBE
        handle: Optional[ElementHandle] = None
        clicks = 0

        while True:
            if state is DisclosureState.PROBE:
                handle = await self.surface.query(trigger, scope)
                if handle is None:
                    state = DisclosureState.DONE
                elif self.clock() - started >= self.budget:
                    state = DisclosureState.BUDGET_EXCEEDED
                else:
                    state = DisclosureState.ACTIVATE

            elif state is DisclosureState.ACTIVATE:
                try:
                    await self.surface.click(handle)
                except ElementDetached:
                    # Re-rendered between probe and click
                    state = DisclosureState.PROBE
                    continue
                clicks += 1
                emit(self.events, "disclosure.click", trigger=trigger, clicks=clicks)
                state = DisclosureState.AWAIT_VANISH

            elif state is DisclosureState.AWAIT_VANISH:
                await self.surface.wait_for_disappearance(
                    trigger, scope, self.poll_interval
                )
                state = DisclosureState.PROBE

            elif state is DisclosureState.DONE:
                emit(self.events, "disclosure.complete", trigger=trigger, clicks=clicks)
                return DisclosureResult(DisclosureOutcome.COMPLETE, clicks)

            else:
                emit(
                    self.events,
                    "disclosure.budget_exceeded",
                    logging.WARNING,
                    trigger=trigger,
                    clicks=clicks,
                    budget=self.budget,
                )
                return DisclosureResult(DisclosureOutcome.BUDGET_EXCEEDED, clicks)
