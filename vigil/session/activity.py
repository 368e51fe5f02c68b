"""Activity tracker: records user interaction for inactivity detection."""

import time
from collections.abc import Callable, Iterable
from typing import Protocol

from vigil.session.clock import Clock

ActivityHandler = Callable[[], None]


class ActivitySource(Protocol):
    """Protocol for hosts that emit named interaction signals."""

    def add_listener(self, event: str, handler: ActivityHandler) -> None:
        """Register a handler for an event name."""
        ...

    def remove_listener(self, event: str, handler: ActivityHandler) -> None:
        """Unregister a previously added handler."""
        ...


class LocalActivitySource:
    """In-process listener registry."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[ActivityHandler]] = {}

    def add_listener(self, event: str, handler: ActivityHandler) -> None:
        self._listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: ActivityHandler) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._listeners.pop(event, None)

    def emit(self, event: str) -> None:
        """Deliver an event to its handlers."""
        for handler in list(self._listeners.get(event, [])):
            handler()

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, []))
        return sum(len(handlers) for handlers in self._listeners.values())


class ActivityTracker:
    """Tracks the last moment the user interacted with the host."""

    def __init__(
        self,
        events: Iterable[str],
        clock: Clock = time.time,
        on_activity: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the activity tracker.

        Args:
            events: Event names counted as activity.
            clock: Returns the current Unix time in seconds.
            on_activity: Optional callback after each accepted signal.
        """
        self._events = tuple(events)
        self._clock = clock
        self._on_activity = on_activity
        self._source: ActivitySource | None = None
        self._paused = False
        self._last_activity = int(clock())

    @property
    def last_activity(self) -> int:
        return self._last_activity

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def attached(self) -> bool:
        return self._source is not None

    def attach(self, source: ActivitySource) -> None:
        """Subscribe to every configured event on ``source``."""
        if self._source is not None:
            self.detach()
        for event in self._events:
            source.add_listener(event, self.signal)
        self._source = source

    def detach(self) -> None:
        """Remove every listener added by attach()."""
        if self._source is None:
            return
        for event in self._events:
            self._source.remove_listener(event, self.signal)
        self._source = None

    def pause(self) -> None:
        """Ignore signals (a dialog is asking for an explicit choice)."""
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def record(self) -> None:
        """Record activity now, regardless of pause state."""
        self._last_activity = int(self._clock())
        if self._on_activity is not None:
            self._on_activity()

    def idle_seconds(self) -> int:
        return max(0, int(self._clock()) - self._last_activity)

    def signal(self) -> None:
        """Handle one interaction signal; ignored while paused."""
        if self._paused:
            return
        self.record()
