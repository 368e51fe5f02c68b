"""Session timer configuration."""

from dataclasses import dataclass, field
from typing import Any

# Interaction signals that count as user activity
USER_ACTIVITY_EVENTS: tuple[str, ...] = (
    "mousedown",
    "mousemove",
    "click",
    "wheel",
    "keydown",
    "keypress",
    "input",
    "touchstart",
    "touchmove",
    "scroll",
    "focus",
)


@dataclass
class SessionConfig:
    """Configuration for the session lifecycle manager."""

    session_timeout_minutes: float = 30  # Maximum session lifetime
    warning_threshold_minutes: float = 1  # Low-time warning before expiry
    inactivity_threshold_minutes: float = 23  # Idle time before inactivity warning
    inactivity_dialog_countdown_minutes: float = 1  # Time to respond to inactivity warning
    expired_dialog_countdown_seconds: int = 60  # Expired dialog auto-logout delay
    tick_interval_seconds: float = 1.0
    activity_events: tuple[str, ...] = field(default_factory=lambda: USER_ACTIVITY_EVENTS)

    @property
    def session_timeout_seconds(self) -> int:
        return int(self.session_timeout_minutes * 60)

    @property
    def warning_threshold_seconds(self) -> int:
        return int(self.warning_threshold_minutes * 60)

    @property
    def inactivity_threshold_seconds(self) -> int:
        return int(self.inactivity_threshold_minutes * 60)

    @property
    def inactivity_dialog_countdown_seconds(self) -> int:
        return int(self.inactivity_dialog_countdown_minutes * 60)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionConfig":
        """Create config from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            SessionConfig instance.
        """
        events = data.get("activity_events")
        return cls(
            session_timeout_minutes=float(data.get("session_timeout_minutes", 30)),
            warning_threshold_minutes=float(data.get("warning_threshold_minutes", 1)),
            inactivity_threshold_minutes=float(data.get("inactivity_threshold_minutes", 23)),
            inactivity_dialog_countdown_minutes=float(
                data.get("inactivity_dialog_countdown_minutes", 1)
            ),
            expired_dialog_countdown_seconds=int(data.get("expired_dialog_countdown_seconds", 60)),
            tick_interval_seconds=float(data.get("tick_interval_seconds", 1.0)),
            activity_events=tuple(events) if events else USER_ACTIVITY_EVENTS,
        )
