"""In-memory renderable surface for testing the extraction core.

Elements are plain nodes whose children are keyed by the exact selector
string used to find them, so a test page is built by nesting
``FakeElement`` instances under the selectors the extractors query.
Clicks and scrolls can run callbacks to mutate the page, which is how
"see more" buttons and lazily loaded lists are simulated.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from linkedin_extractor.config import ExtractionConfig
from linkedin_extractor.context import ExtractionContext
from linkedin_extractor.events import ExtractionEvent
from linkedin_extractor.scraper_errors import ElementDetached
from linkedin_extractor.scroll import no_delay
from linkedin_extractor.surface import ScrollMetrics


@dataclass
class ScrollState:
    """Mutable scroll position of a fake container."""

    position: float = 0.0
    viewport: float = 100.0
    limit: float = 100.0
    on_scroll: Optional[Callable[["ScrollState"], None]] = None


class FakeElement:
    """A node of the fake page."""

    def __init__(
        self,
        text: str = "",
        attrs: Optional[dict[str, str]] = None,
        children: Optional[dict[str, list["FakeElement"]]] = None,
        on_click: Optional[Callable[[], None]] = None,
        scroll: Optional[ScrollState] = None,
        name: str = "",
    ):
        self.text = text
        self.attrs = attrs or {}
        self.children = {k: list(v) for k, v in (children or {}).items()}
        self.on_click = on_click
        self.scroll = scroll
        self.name = name
        self.detached = False
        self.clicks = 0

    def add(self, selector: str, *elements: "FakeElement") -> "FakeElement":
        self.children.setdefault(selector, []).extend(elements)
        return self

    def remove(self, selector: str) -> None:
        self.children.pop(selector, None)

    def __repr__(self) -> str:
        return f"FakeElement({self.name or self.text!r})"


class FakeSurface:
    """``RenderableSurface`` over a tree of ``FakeElement`` nodes.

    Attributes:
        root: The document node
        document_scroll: Scroll state of the document itself
        failures: Selector to exception raised whenever it is looked up
        delays: Every ``delay`` requested, in order
        clicked: Every element clicked, in order
        scrolled: Every container scrolled (``None`` for the document)
        waits: ``(selector, timeout)`` of every appearance wait
    """

    def __init__(self, root: Optional[FakeElement] = None):
        self.root = root or FakeElement(name="document")
        self.document_scroll = ScrollState()
        self.failures: dict[str, Exception] = {}
        self.delays: list[float] = []
        self.clicked: list[FakeElement] = []
        self.scrolled: list[Optional[FakeElement]] = []
        self.waits: list[tuple[str, Optional[float]]] = []

    def _lookup(self, selector: str, scope: Optional[FakeElement]) -> list[FakeElement]:
        if selector in self.failures:
            raise self.failures[selector]
        node = scope if scope is not None else self.root
        if node.detached:
            raise ElementDetached()
        return list(node.children.get(selector, []))

    def _first(self, selector: str, scope: Optional[FakeElement]) -> Optional[FakeElement]:
        found = self._lookup(selector, scope)
        if not found:
            return None
        if found[0].detached:
            raise ElementDetached()
        return found[0]

    async def text_content(self, selector, scope=None):
        element = self._first(selector, scope)
        return None if element is None else element.text

    async def text_of(self, element):
        if element.detached:
            raise ElementDetached()
        return element.text

    async def attribute(self, selector, name, scope=None):
        element = self._first(selector, scope)
        return None if element is None else element.attrs.get(name)

    async def query(self, selector, scope=None):
        return self._first(selector, scope)

    async def query_all(self, selector, scope=None):
        return self._lookup(selector, scope)

    async def click(self, element):
        if element.detached:
            raise ElementDetached()
        element.clicks += 1
        self.clicked.append(element)
        if element.on_click is not None:
            element.on_click()

    async def wait_for_appearance(self, selector, scope=None, timeout=None):
        self.waits.append((selector, timeout))
        return self._first(selector, scope)

    async def wait_for_disappearance(self, selector, scope=None, timeout=None):
        return not self._lookup(selector, scope)

    def _scroll_state(self, element: Optional[FakeElement]) -> ScrollState:
        if element is None:
            return self.document_scroll
        if element.scroll is None:
            element.scroll = ScrollState()
        return element.scroll

    async def scroll_by(self, element, amount=None):
        state = self._scroll_state(element)
        state.position += state.viewport if amount is None else amount
        self.scrolled.append(element)
        if state.on_scroll is not None:
            state.on_scroll(state)

    async def scroll_metrics(self, element=None):
        state = self._scroll_state(element)
        return ScrollMetrics(
            position=state.position, viewport=state.viewport, limit=state.limit
        )

    async def delay(self, seconds):
        self.delays.append(seconds)


class RecordingSink:
    """Event sink that keeps every event for assertions."""

    def __init__(self):
        self.events: list[ExtractionEvent] = []

    def emit(self, event: ExtractionEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.name for event in self.events]

    def named(self, name: str) -> list[ExtractionEvent]:
        return [event for event in self.events if event.name == name]

    def warnings(self) -> list[ExtractionEvent]:
        return [event for event in self.events if event.level >= logging.WARNING]


class TickingClock:
    """Clock that advances by ``step`` seconds every time it is read."""

    def __init__(self, step: float = 0.0, start: float = 0.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


def make_context(
    surface: FakeSurface,
    config: Optional[ExtractionConfig] = None,
    clock: Optional[TickingClock] = None,
    events: Optional[RecordingSink] = None,
) -> ExtractionContext:
    """Context wired to ``surface`` with no pauses and a recording sink."""
    return ExtractionContext.create(
        surface,
        config or ExtractionConfig(),
        events=events or RecordingSink(),
        delay_policy=no_delay,
        clock=clock or TickingClock(),
    )


def text(value: str, **attrs: str) -> FakeElement:
    """Leaf element with text and attributes."""
    return FakeElement(text=value, attrs=attrs)


def see_more_button(
    parent: FakeElement,
    selector: str,
    reveal: Callable[[], None],
    times: int = 1,
) -> FakeElement:
    """Attach a trigger that runs ``reveal`` per click and vanishes after ``times``."""
    button = FakeElement(name=f"see-more:{selector}")

    def on_click():
        reveal()
        if button.clicks >= times:
            parent.remove(selector)

    button.on_click = on_click
    parent.add(selector, button)
    return button
