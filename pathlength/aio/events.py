"""Scan notifications.

The engine emits four kinds of event during a scan. Callers register a
handler per kind with an EventDispatcher; handlers are plain callables
that receive the event object.
"""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, DefaultDict, List, Union

from ..config import ScanOptions
from ..core import Result


class EventType(Enum):
    """Kinds of notification emitted during a scan."""
    CHECK_STARTED = "check"      # Options finalized, before any I/O on the root
    PATH_CHECKING = "checkpath"  # A path is about to be checked
    PATH_FOUND = "result"        # A path was accepted
    SCAN_ENDED = "end"           # Scan finished, results sorted


@dataclass(frozen=True)
class CheckStartedEvent:
    options: ScanOptions


@dataclass(frozen=True)
class PathCheckingEvent:
    path: str
    options: ScanOptions


@dataclass(frozen=True)
class PathFoundEvent:
    result: Result

    @property
    def path(self) -> str:
        return self.result.path

    @property
    def length(self) -> int:
        return self.result.length

    @property
    def is_directory(self) -> bool:
        return self.result.is_directory


@dataclass(frozen=True)
class ScanEndedEvent:
    options: ScanOptions
    results: List[Result]


ScanEvent = Union[CheckStartedEvent, PathCheckingEvent, PathFoundEvent, ScanEndedEvent]
EventHandler = Callable[[ScanEvent], None]


class EventDispatcher:
    """Registry of handlers per event type.

    Handlers run synchronously, in registration order, on the thread that
    emits. An exception raised by a handler propagates to the emitter.
    """

    def __init__(self):
        self._handlers: DefaultDict[EventType, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: EventHandler) -> EventHandler:
        """Register handler for event_type.

        Returns:
            The registered handler
        """
        if not callable(handler):
            raise TypeError(f"Handler must be callable: {handler!r}")
        self._handlers[EventType(event_type)].append(handler)
        return handler

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """Remove a previously registered handler.

        Returns:
            True if the handler was registered
        """
        handlers = self._handlers.get(EventType(event_type), [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def handlers(self, event_type: EventType) -> List[EventHandler]:
        """Get the handlers registered for event_type."""
        return list(self._handlers.get(EventType(event_type), []))

    def emit(self, event_type: EventType, event: ScanEvent) -> None:
        """Deliver event to every handler registered for event_type."""
        # Copy so handlers may unsubscribe themselves while being called
        for handler in list(self._handlers.get(event_type, [])):
            handler(event)
