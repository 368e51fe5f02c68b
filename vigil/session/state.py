"""Session state machine states and snapshot."""

from dataclasses import dataclass
from enum import Enum, auto


class SessionState(Enum):
    """Session state machine states."""

    ACTIVE = auto()  # Counting down, no dialog
    INACTIVITY_WARNING = auto()  # User idle, waiting for resume
    SESSION_WARNING = auto()  # Session close to expiry
    EXPIRED = auto()  # Re-authentication required

    @property
    def is_warning(self) -> bool:
        return self in (SessionState.INACTIVITY_WARNING, SessionState.SESSION_WARNING)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a host needs to render the session status."""

    state: SessionState
    remaining_time: int
    formatted_time: str
    inactivity_countdown: int
    show_expired_dialog: bool
    expired_countdown: int
    is_renewing: bool

    @property
    def is_expired(self) -> bool:
        return self.state == SessionState.EXPIRED

    @property
    def show_warning_dialog(self) -> bool:
        return self.state.is_warning

    @property
    def is_inactivity_warning(self) -> bool:
        return self.state == SessionState.INACTIVITY_WARNING
