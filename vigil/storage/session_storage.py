"""Typed accessors over the key-value store."""

from vigil.storage.base import KeyValueStore
from vigil.storage.keys import StorageKeys


class SessionStorage:
    """Reads and writes session values under their named keys."""

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize session storage.

        Args:
            store: Underlying key-value store.
        """
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying store."""
        return self._store

    def read_expiry(self) -> int | None:
        """Read the absolute session expiry instant.

        Returns:
            Unix time in seconds, or None when the value is missing or not a
            positive integer.
        """
        raw = self._store.get(StorageKeys.SESSION_EXPIRY_TIME)
        if raw is None:
            return None
        try:
            expiry = int(raw.strip())
        except ValueError:
            print(f"[Storage] Ignoring unparsable session expiry: {raw!r}")
            return None
        if expiry <= 0:
            print(f"[Storage] Ignoring non-positive session expiry: {expiry}")
            return None
        return expiry

    def write_expiry(self, expiry: int) -> None:
        """Persist the absolute session expiry instant.

        Args:
            expiry: Unix time in seconds.
        """
        if expiry <= 0:
            raise ValueError(f"Session expiry must be a positive integer, got {expiry}")
        self._store.set(StorageKeys.SESSION_EXPIRY_TIME, str(int(expiry)))

    def clear_expiry(self) -> None:
        self._store.remove(StorageKeys.SESSION_EXPIRY_TIME)

    def retry_attempts(self) -> int:
        """Read the retry attempt counter (0 when absent or corrupt)."""
        raw = self._store.get(StorageKeys.RETRY_ATTEMPTS)
        if raw is None:
            return 0
        try:
            return max(0, int(raw))
        except ValueError:
            return 0

    def increment_retry_attempts(self) -> int:
        """Record one more retry.

        Returns:
            The new attempt count.
        """
        attempts = self.retry_attempts() + 1
        self._store.set(StorageKeys.RETRY_ATTEMPTS, str(attempts))
        return attempts

    def clear_retry_attempts(self) -> None:
        self._store.remove(StorageKeys.RETRY_ATTEMPTS)

    def failed_operation(self) -> str | None:
        return self._store.get(StorageKeys.FAILED_OPERATION)

    def mark_failed_operation(self, marker: str) -> None:
        self._store.set(StorageKeys.FAILED_OPERATION, marker)

    def clear_failed_operation(self) -> None:
        self._store.remove(StorageKeys.FAILED_OPERATION)

    def clear_auth(self) -> None:
        """Remove every stored credential and the logged-in flag."""
        for key in StorageKeys.AUTH_KEYS:
            self._store.remove(key)
