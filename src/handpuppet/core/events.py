"""EventBus for decoupled publish/subscribe communication."""

from enum import Enum, auto
from typing import Any, Callable
from collections import defaultdict


class EventType(Enum):
    # Frame events
    FRAME_UPDATE = auto()         # data: result (FrameResult)

    # Hand tracking
    HANDS_STATE_CHANGED = auto()  # data: state (FrameState), previous (FrameState)

    # Physics
    CIRCLE_RESPAWNED = auto()     # data: position (tuple[float, float])

    # Canvas
    CANVAS_RESIZED = auto()       # data: width (int), height (int)


class EventBus:
    """Simple publish/subscribe event system."""

    def __init__(self):
        self._handlers: dict[EventType, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, **data: Any) -> None:
        for handler in self._handlers[event_type]:
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
