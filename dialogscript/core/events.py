"""
Typed event bus for compile diagnostics.

The compiler never raises for malformed scripts, so anything worth
knowing about a compile (nodes closed, entries dropped for capacity)
is published here for tools and tests to observe.

Handlers are held by strong reference, so inline lambdas and closures
stay subscribed until unsubscribed or cleared.

Usage:
    bus = EventBus()
    dropped = []
    bus.subscribe(CompilerEvent.ENTRY_DROPPED, lambda e: dropped.append(e["kind"]))

    DialogueCompiler(event_bus=bus).compile(script)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class CompilerEvent(Enum):
    """Events published while compiling a script."""
    COMPILE_STARTED = auto()
    NODE_CLOSED = auto()
    CHOICES_ATTACHED = auto()
    ENTRY_DROPPED = auto()
    COMPILE_FINISHED = auto()


class DropKind(Enum):
    """What was dropped when a bounded buffer was full."""
    COMMAND = auto()
    CHOICE = auto()
    NODE = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type
        data: Keyword data given to publish()
        consumed: Set by a handler to stop lower priority handlers
    """
    type: CompilerEvent
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    handler: EventHandler
    priority: int = 0
    one_shot: bool = False


class EventBus:
    """
    Publish/subscribe for CompilerEvent.

    Handlers run synchronously in priority order (highest first, then
    subscription order). A failing handler is logged and skipped.
    """

    def __init__(self):
        self._subscriptions: dict[CompilerEvent, list[_Subscription]] = {}

    def subscribe(
        self,
        event_type: CompilerEvent,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after its first call
        """
        subscriptions = self._subscriptions.setdefault(event_type, [])
        subscriptions.append(_Subscription(handler, priority, one_shot))
        # Stable sort keeps subscription order among equal priorities
        subscriptions.sort(key=lambda s: -s.priority)

    def unsubscribe(self, event_type: CompilerEvent, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            subscriptions[:] = [s for s in subscriptions if s.handler != handler]

    def publish(self, event_type: CompilerEvent, **data: Any) -> Event:
        """
        Publish an event to its handlers.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)

        for subscription in list(self._subscriptions.get(event_type, ())):
            if subscription.one_shot:
                self.unsubscribe(event_type, subscription.handler)

            try:
                subscription.handler(event)
            except Exception:
                logger.exception("Error in event handler for %s", event_type)

            if event.consumed:
                break

        return event

    def has_subscribers(self, event_type: CompilerEvent) -> bool:
        return bool(self._subscriptions.get(event_type))

    def clear(self, event_type: CompilerEvent | None = None) -> None:
        """Remove all handlers, or only those of one event type."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)
