"""Structured extraction events.

Extraction components report what they did (clicks, exhausted budgets,
missing popups, failed sections) through an injected ``EventSink`` rather
than writing to a module logger directly. The default sink forwards every
event to ``logging``; tests swap in a sink that simply records events.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionEvent:
    """A single structured event emitted during extraction."""

    name: str
    level: int = logging.DEBUG
    fields: dict[str, Any] = field(default_factory=dict)


class EventSink(Protocol):
    """Receiver for extraction events."""

    def emit(self, event: ExtractionEvent) -> None: ...


class LoggingEventSink:
    """Event sink that writes events as log records.

    The event name becomes the message and the event fields are attached
    to the record under ``extra["event_fields"]``.
    """

    def __init__(self, target: logging.Logger | None = None):
        self.logger = target or logger

    def emit(self, event: ExtractionEvent) -> None:
        if not self.logger.isEnabledFor(event.level):
            return
        detail_str = ", ".join(f"{k}={v}" for k, v in event.fields.items())
        message = f"{event.name} ({detail_str})" if detail_str else event.name
        self.logger.log(
            event.level,
            message,
            extra={"event_name": event.name, "event_fields": dict(event.fields)},
        )


def emit(sink: EventSink, name: str, level: int = logging.DEBUG, **fields: Any) -> None:
    """Shorthand for building and emitting an event."""
    sink.emit(ExtractionEvent(name=name, level=level, fields=fields))
