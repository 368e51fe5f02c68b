"""Session collaborator adapters."""

from vigil.providers.base import (
    ExpiryCallback,
    NotificationKind,
    Notifier,
    TokenRefresher,
)

__all__ = ["ExpiryCallback", "NotificationKind", "Notifier", "TokenRefresher"]
