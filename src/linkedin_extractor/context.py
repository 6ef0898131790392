"""Collaborators shared by the section extractors."""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .config import ExtractionConfig
from .disclosure import DisclosureDriver
from .events import EventSink, LoggingEventSink
from .reader import SafeFieldReader
from .scroll import DelayPolicy, Scroller, random_jitter
from .selectors import DEFAULT_SELECTORS, ProfileSelectors
from .surface import RenderableSurface


@dataclass
class ExtractionContext:
    """Everything an extractor needs to work against one surface."""

    surface: RenderableSurface
    reader: SafeFieldReader
    disclosure: DisclosureDriver
    scroller: Scroller
    events: EventSink
    selectors: ProfileSelectors = field(default=DEFAULT_SELECTORS)
    wait_timeout: float = 10.0
    badge_timeout: float = 2.0
    settle_delay: float = 5.0

    @classmethod
    def create(
        cls,
        surface: RenderableSurface,
        config: Optional[ExtractionConfig] = None,
        selectors: ProfileSelectors = DEFAULT_SELECTORS,
        events: Optional[EventSink] = None,
        delay_policy: Optional[DelayPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "ExtractionContext":
        """Wire the default collaborators for ``surface`` from ``config``."""
        config = config or ExtractionConfig()
        events = events or LoggingEventSink()
        if delay_policy is None:
            delay_policy = random_jitter(config.jitter_min, config.jitter_max)
        return cls(
            surface=surface,
            reader=SafeFieldReader(surface),
            disclosure=DisclosureDriver(
                surface,
                poll_interval=config.poll_interval,
                budget=config.disclosure_budget,
                events=events,
                clock=clock,
            ),
            scroller=Scroller(
                surface,
                delay_policy=delay_policy,
                poll_interval=config.poll_interval,
                drain_budget=config.scroll_budget,
                reveal_timeout=config.wait_timeout,
                events=events,
                clock=clock,
            ),
            events=events,
            selectors=selectors,
            wait_timeout=config.wait_timeout,
            badge_timeout=config.badge_timeout,
            settle_delay=config.settle_delay,
        )
