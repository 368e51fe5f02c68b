"""Session lifecycle: countdown, activity, renewal, and the state machine."""

from vigil.session.activity import ActivitySource, ActivityTracker, LocalActivitySource
from vigil.session.clock import CountdownEngine, DialogCountdown, format_timer
from vigil.session.config import USER_ACTIVITY_EVENTS, SessionConfig
from vigil.session.manager import SessionManager
from vigil.session.renewal import RenewalCoordinator, RenewalOutcome
from vigil.session.state import SessionSnapshot, SessionState

__all__ = [
    "ActivitySource",
    "ActivityTracker",
    "CountdownEngine",
    "DialogCountdown",
    "LocalActivitySource",
    "RenewalCoordinator",
    "RenewalOutcome",
    "SessionConfig",
    "SessionManager",
    "SessionSnapshot",
    "SessionState",
    "USER_ACTIVITY_EVENTS",
    "format_timer",
]
