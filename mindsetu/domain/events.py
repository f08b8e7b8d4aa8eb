"""Domain events for check-in and completion workflows.

Defines event types and a lightweight synchronous EventBus so callers can
persist what the engine produces without the engine knowing about storage.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

from ..models.records import CheckinRecord, CompletionRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


@dataclass
class CheckinResolved:
    """Emitted when a check-in flow resolves to an action."""

    record: CheckinRecord
    subject_kind: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class CompletionRecorded:
    """Emitted when a subject is marked done with a completion mood."""

    record: CompletionRecord
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class HabitCompleted:
    """Emitted after a habit completion is appended."""

    habit_id: str
    completed_on: datetime
    streak: int
    timestamp: datetime = field(default_factory=datetime.now)


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------

EventHandler = Callable[[Any], None]


class EventBus:
    """Simple in-process event bus.

    Subscribers register for a specific event type. When that event is
    published, all registered handlers are invoked in order. A failing
    handler logs the error but does not prevent remaining handlers from
    running.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[Type, List[EventHandler]] = {}

    def subscribe(self, event_type: Type, handler: EventHandler) -> None:
        """Register *handler* for *event_type*."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Type, handler: EventHandler) -> None:
        """Remove *handler* for *event_type* if registered."""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Any) -> None:
        """Dispatch *event* to all registered handlers for its type."""
        handlers = self._subscribers.get(type(event), [])
        for handler in list(handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Event handler %s failed for %s",
                    getattr(handler, "__name__", handler),
                    type(event).__name__,
                )

    def handler_count(self, event_type: Type) -> int:
        """Number of handlers registered for *event_type*."""
        return len(self._subscribers.get(event_type, []))


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------

_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Return the global EventBus singleton (create on first call)."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Replace the global EventBus (useful in tests)."""
    global _event_bus
    _event_bus = None
