"""Base protocol for durable key-value stores."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Protocol for synchronous, string-keyed stores."""

    def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Storage key.

        Returns:
            Stored string, or None if the key is absent.
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one.

        Args:
            key: Storage key.
            value: String value to store.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored.

        Args:
            key: Storage key.
        """
        ...
