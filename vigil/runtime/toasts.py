"""On-screen toast notifications."""

import time
from dataclasses import dataclass

from vigil.providers.base import NotificationKind
from vigil.session.clock import Clock


@dataclass
class Toast:
    """A notification shown for a limited time."""

    title: str
    description: str
    kind: NotificationKind
    shown_at: float


class ToastNotifier:
    """Notifier that keeps recent notifications for the view to draw."""

    def __init__(self, duration_seconds: float = 5.0, clock: Clock = time.time) -> None:
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._toasts: list[Toast] = []

    def notify(self, title: str, description: str, kind: NotificationKind) -> None:
        print(f"[Toast:{kind.value}] {title}: {description}")
        self._toasts.append(Toast(title, description, kind, self._clock()))

    def active(self) -> list[Toast]:
        """Return toasts still on screen, dropping expired ones."""
        now = self._clock()
        self._toasts = [t for t in self._toasts if now - t.shown_at < self.duration_seconds]
        return list(self._toasts)
