"""Countdown engine: remaining session time from the persisted expiry instant."""

import time
from collections.abc import Callable

from vigil.storage.session_storage import SessionStorage

Clock = Callable[[], float]


def format_timer(seconds: int) -> str:
    """Format seconds as m:ss.

    Args:
        seconds: Non-negative number of seconds.

    Returns:
        Minutes (unpadded, unbounded) and zero-padded seconds, e.g. "29:05".
    """
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class CountdownEngine:
    """Computes remaining time by re-reading the stored expiry on every call."""

    def __init__(
        self,
        storage: SessionStorage,
        max_lifetime_seconds: int,
        clock: Clock = time.time,
    ) -> None:
        """Initialize the countdown engine.

        Args:
            storage: Session storage holding the expiry instant.
            max_lifetime_seconds: Configured maximum session lifetime.
            clock: Returns the current Unix time in seconds.
        """
        self._storage = storage
        self._max_lifetime = max_lifetime_seconds
        self._clock = clock

    @property
    def max_lifetime(self) -> int:
        return self._max_lifetime

    def now(self) -> int:
        """Current Unix time in whole seconds."""
        return int(self._clock())

    def remaining_time(self) -> int:
        """Seconds until the stored expiry, never negative.

        A missing or corrupt expiry yields the maximum lifetime, so an
        uninitialized session is not reported as expired.
        """
        expiry = self._storage.read_expiry()
        if expiry is None:
            return self._max_lifetime
        return max(0, expiry - self.now())

    def formatted_time(self) -> str:
        return format_timer(self.remaining_time())

    def reset(self) -> int:
        """Persist a fresh expiry one full lifetime from now.

        Returns:
            The new expiry instant.
        """
        expiry = self.now() + self._max_lifetime
        self._storage.write_expiry(expiry)
        return expiry

    def extend(self, previous: int | None) -> int:
        """Persist the expiry after a successful renewal.

        The persisted instant is always strictly later than ``previous``:
        when ``now + lifetime`` does not pass it, ``previous + 1`` is written.

        Args:
            previous: Expiry stored before the renewal started, if any.

        Returns:
            The persisted expiry instant.
        """
        expiry = self.now() + self._max_lifetime
        if previous is not None and previous >= expiry:
            print(f"[Session] Renewed expiry {expiry} does not pass stored {previous}")
            expiry = previous + 1
        self._storage.write_expiry(expiry)
        return expiry


class DialogCountdown:
    """Countdown shown inside a dialog, tracked as a deadline on the same clock."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._deadline: int | None = None

    @property
    def active(self) -> bool:
        return self._deadline is not None

    def start(self, seconds: int) -> None:
        """Start counting down from ``seconds``."""
        self._deadline = int(self._clock()) + max(0, int(seconds))

    def remaining(self) -> int:
        """Seconds left, 0 when finished or not running."""
        if self._deadline is None:
            return 0
        return max(0, self._deadline - int(self._clock()))

    def clear(self) -> None:
        self._deadline = None
