"""Event system for formstate.

The engine emits a FormEvent for every dispatched action, every field
validation and every submit attempt. Listeners subscribe through an
EventEmitter to drive UI refreshes, analytics or audit trails without
touching the engine's state transitions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import json
import logging

from dateutil.parser import isoparse

from .types import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormEvent:
    """A single notification emitted by the form engine.

    Attributes:
        event_id: Unique event identifier (e.g., "evt_1f3a...")
        type: Event type from EventType enum
        ts: UTC timestamp when the event occurred
        field: Field the event relates to, when it concerns a single field
        payload: Optional event-specific data (merged payload, message, values)

    Examples:
        >>> from datetime import datetime, timezone
        >>> event = FormEvent(
        ...     event_id="evt_001",
        ...     type=EventType.VALIDATION_FAILED,
        ...     ts=datetime.now(timezone.utc),
        ...     field="email",
        ...     payload={"message": "Email is invalid"},
        ... )
        >>> event.to_dict()["type"]
        'validation.failed'
    """
    event_id: str
    type: EventType
    ts: datetime
    field: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if isinstance(self.type, str) and not isinstance(self.type, EventType):
            object.__setattr__(self, "type", EventType(self.type))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization.

        Timestamp is formatted as an ISO 8601 string.
        """
        result: Dict[str, Any] = {
            "eventId": self.event_id,
            "type": self.type.value,
            "ts": self.ts.isoformat(),
        }
        if self.field is not None:
            result["field"] = self.field
        if self.payload is not None:
            result["payload"] = self.payload
        return result

    def to_jsonl(self) -> str:
        """Convert event to a single-line JSON string.

        Payload values that JSON cannot represent are written with ``str()``.
        """
        return json.dumps(self.to_dict(), separators=(',', ':'), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormEvent":
        """Create FormEvent from a dictionary with camelCase keys."""
        return cls(
            event_id=data["eventId"],
            type=EventType(data["type"]),
            ts=isoparse(data["ts"]),
            field=data.get("field"),
            payload=data.get("payload"),
        )


EventListener = Callable[[FormEvent], None]
"""Type alias for event listener callbacks.

Listeners are called synchronously when events are emitted.
"""


class EventEmitter:
    """Dispatches FormEvents to subscribed listeners.

    Listeners for a specific type run first, then wildcard listeners, each in
    registration order. A listener that raises is logged and skipped; the
    remaining listeners and the engine carry on.

    Examples:
        >>> emitter = EventEmitter()
        >>> emitter.on(EventType.VALIDATION_FAILED, lambda e: print(e.field))
        >>> emitter.listener_count()
        1
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventListener]] = {}
        self._any_listeners: List[EventListener] = []

    def on(self, event_type: EventType, listener: EventListener) -> None:
        """Subscribe to a specific event type."""
        self._listeners.setdefault(event_type, []).append(listener)

    def on_any(self, listener: EventListener) -> None:
        """Subscribe to all event types."""
        self._any_listeners.append(listener)

    def off(self, event_type: EventType, listener: EventListener) -> None:
        """Unsubscribe from a specific event type.

        Removing a listener that is not subscribed does nothing.
        """
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: EventListener) -> None:
        """Unsubscribe a wildcard listener."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, event: FormEvent) -> None:
        """Dispatch an event to all registered listeners."""
        for listener in [*self._listeners.get(event.type, []), *self._any_listeners]:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Listener %r failed while handling %s", listener, event.type.value
                )

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners.clear()
        self._any_listeners.clear()

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Count registered listeners.

        Args:
            event_type: If provided, count listeners for this type only.
                        If None, count all listeners (including wildcard).
        """
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return len(self._any_listeners) + sum(
            len(listeners) for listeners in self._listeners.values()
        )


__all__ = [
    "FormEvent",
    "EventType",
    "EventListener",
    "EventEmitter",
]
