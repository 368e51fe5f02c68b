"""Renewal coordinator: one refresh call in flight at a time."""

from enum import Enum, auto

from vigil.providers.base import NotificationKind, Notifier, TokenRefresher


class RenewalOutcome(Enum):
    """Result of a renewal attempt."""

    RENEWED = auto()  # Refresh returned True
    REJECTED = auto()  # Refresh returned a falsy result
    FAILED = auto()  # Refresh raised
    BUSY = auto()  # Another renewal was already pending


# (kind, title, description) shown for each outcome
_ANNOUNCEMENTS: dict[RenewalOutcome, tuple[NotificationKind, str, str]] = {
    RenewalOutcome.RENEWED: (
        NotificationKind.SUCCESS,
        "Session Extended",
        "Your session has been extended successfully.",
    ),
    RenewalOutcome.REJECTED: (
        NotificationKind.ERROR,
        "Session Refresh Failed",
        "Unable to extend your session. You will be logged out for security reasons.",
    ),
    RenewalOutcome.FAILED: (
        NotificationKind.ERROR,
        "Session Extension Error",
        "An error occurred while extending your session. You will be logged out.",
    ),
}


class RenewalCoordinator:
    """Calls the refresh collaborator and classifies its result."""

    def __init__(self, refresher: TokenRefresher, notifier: Notifier) -> None:
        self._refresher = refresher
        self._notifier = notifier
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def renew(self) -> RenewalOutcome:
        """Run one renewal.

        Returns:
            The classified outcome. BUSY if a renewal is already pending, in
            which case the refresher is not called.
        """
        if self._in_flight:
            print("[Renewal] Renewal already in progress, ignoring request")
            return RenewalOutcome.BUSY

        self._in_flight = True
        try:
            renewed = await self._refresher.refresh()
        except Exception as e:
            print(f"[Renewal] Error extending session: {e}")
            return RenewalOutcome.FAILED
        finally:
            self._in_flight = False

        if not renewed:
            print("[Renewal] Refresh token failed, logging out user")
            return RenewalOutcome.REJECTED
        return RenewalOutcome.RENEWED

    def announce(self, outcome: RenewalOutcome) -> None:
        """Notify the user about a finished renewal."""
        announcement = _ANNOUNCEMENTS.get(outcome)
        if announcement is None:
            return
        kind, title, description = announcement
        self._notifier.notify(title, description, kind)
