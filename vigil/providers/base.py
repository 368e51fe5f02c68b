"""Base protocol definitions for session collaborators."""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol

# Owner callback invoked on forced expiry; expected to log out and redirect
ExpiryCallback = Callable[[], Awaitable[bool]]


class NotificationKind(Enum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class TokenRefresher(Protocol):
    """Protocol for token renewal backends."""

    async def refresh(self) -> bool:
        """Exchange current credentials for a renewed session.

        Returns:
            True if the session was renewed, False if the backend refused.

        Raises:
            Exception: On transport or unexpected failures.
        """
        ...


class Notifier(Protocol):
    """Protocol for user-facing notification sinks."""

    def notify(self, title: str, description: str, kind: NotificationKind) -> None:
        """Show a notification. Fire-and-forget.

        Args:
            title: Short heading.
            description: Message body.
            kind: Severity of the notification.
        """
        ...
