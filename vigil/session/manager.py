"""Session lifecycle state machine."""

import asyncio
import time
from collections.abc import Callable

from vigil.providers.base import ExpiryCallback, NotificationKind, Notifier, TokenRefresher
from vigil.session.activity import ActivitySource, ActivityTracker
from vigil.session.clock import Clock, CountdownEngine, DialogCountdown, format_timer
from vigil.session.config import SessionConfig
from vigil.session.renewal import RenewalCoordinator, RenewalOutcome
from vigil.session.state import SessionSnapshot, SessionState
from vigil.storage.session_storage import SessionStorage


class SessionManager:
    """Tracks session expiry, warns the user, and forces expiry.

    A single repeating tick re-reads the persisted expiry instant and
    re-evaluates every threshold, so state stays correct across suspended
    event loops and across instances sharing the same store.
    """

    def __init__(
        self,
        config: SessionConfig,
        storage: SessionStorage,
        refresher: TokenRefresher,
        notifier: Notifier,
        on_expire: ExpiryCallback,
        on_state_change: Callable[[SessionState], None] | None = None,
        clock: Clock = time.time,
    ) -> None:
        """Initialize the session manager.

        Args:
            config: Session timing configuration.
            storage: Session storage holding the expiry instant.
            refresher: Token renewal backend.
            notifier: User-facing notification sink.
            on_expire: Owner callback invoked once on forced expiry
                (expected to log out and redirect to sign-in).
            on_state_change: Optional callback when the state changes.
            clock: Returns the current Unix time in seconds.
        """
        self.config = config
        self._storage = storage
        self._notifier = notifier
        self._on_expire = on_expire
        self._on_state_change = on_state_change

        self._engine = CountdownEngine(storage, config.session_timeout_seconds, clock)
        self._tracker = ActivityTracker(
            config.activity_events, clock, on_activity=self._on_activity
        )
        self._renewal = RenewalCoordinator(refresher, notifier)
        self._inactivity_countdown = DialogCountdown(clock)
        self._expired_countdown = DialogCountdown(clock)

        self._state = SessionState.ACTIVE
        self._remaining = self._engine.max_lifetime
        self._show_expired_dialog = False

        # Low-time warning dismissed since the last reset or renewal
        self._warning_dismissed = False
        # Inactivity warning dismissed since the last activity signal
        self._inactivity_dismissed = False
        # Owner callback already invoked for this session
        self._expiry_fired = False

        self._mounted = False
        self._disposed = False
        self._task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Get current session state."""
        return self._state

    @property
    def remaining_time(self) -> int:
        """Seconds remaining as of the last evaluation."""
        return self._remaining

    @property
    def formatted_time(self) -> str:
        return format_timer(self._remaining)

    @property
    def is_expired(self) -> bool:
        return self._state == SessionState.EXPIRED

    @property
    def show_warning_dialog(self) -> bool:
        return self._state.is_warning

    @property
    def is_inactivity_warning(self) -> bool:
        return self._state == SessionState.INACTIVITY_WARNING

    @property
    def inactivity_countdown(self) -> int:
        return self._inactivity_countdown.remaining()

    @property
    def show_expired_dialog(self) -> bool:
        return self._show_expired_dialog

    @property
    def expired_countdown(self) -> int:
        return self._expired_countdown.remaining()

    @property
    def is_renewing(self) -> bool:
        return self._renewal.in_flight

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def activity(self) -> ActivityTracker:
        return self._tracker

    def snapshot(self) -> SessionSnapshot:
        """Capture everything a host renders."""
        return SessionSnapshot(
            state=self._state,
            remaining_time=self._remaining,
            formatted_time=self.formatted_time,
            inactivity_countdown=self.inactivity_countdown,
            show_expired_dialog=self._show_expired_dialog,
            expired_countdown=self.expired_countdown,
            is_renewing=self.is_renewing,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self, source: ActivitySource | None = None) -> None:
        """Evaluate the stored expiry and start listening for activity.

        Args:
            source: Host emitting interaction signals. Without one, activity
                is reported through record_activity().
        """
        if self._disposed:
            raise RuntimeError("SessionManager cannot be mounted again after unmount")
        if self._mounted:
            return

        self._mounted = True
        self._tracker.record()
        if source is not None:
            self._tracker.attach(source)

        self._remaining = self._engine.remaining_time()
        if self._remaining <= 0:
            self._enter_expired(show_dialog=True)

    def start(self) -> "asyncio.Task[None]":
        """Schedule the repeating tick on the running event loop.

        Returns:
            The tick task; unmount() cancels it.
        """
        if not self._mounted:
            self.mount()
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def run(self) -> None:
        """Tick once per interval until unmounted."""
        while self._mounted:
            await asyncio.sleep(self.config.tick_interval_seconds)
            try:
                await self.tick()
            except Exception as e:
                print(f"[Session] Tick failed: {e}")

    def unmount(self) -> None:
        """Cancel the tick, remove activity listeners, ignore late results."""
        if self._disposed:
            return
        self._mounted = False
        self._disposed = True
        self._tracker.detach()
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._inactivity_countdown.clear()
        self._expired_countdown.clear()

    async def tick(self) -> None:
        """Re-read the stored expiry and apply every threshold."""
        if not self._mounted:
            return

        remaining = self._engine.remaining_time()
        self._remaining = remaining

        if self._state == SessionState.EXPIRED:
            if self._show_expired_dialog and self._expired_countdown.remaining() == 0:
                self._close_expired_dialog()
                await self._fire_expiry()
            return

        # Expiry wins over any warning
        if remaining <= 0:
            self._enter_expired(show_dialog=True)
            return

        if self._state == SessionState.INACTIVITY_WARNING:
            if self._inactivity_countdown.remaining() == 0:
                await self._expire_for_inactivity()
            return

        if self._state == SessionState.SESSION_WARNING:
            return

        idle = self._tracker.idle_seconds()
        if idle >= self.config.inactivity_threshold_seconds and not self._inactivity_dismissed:
            self._inactivity_countdown.start(self.config.inactivity_dialog_countdown_seconds)
            self._tracker.pause()
            self._set_state(SessionState.INACTIVITY_WARNING)
        elif remaining <= self.config.warning_threshold_seconds and not self._warning_dismissed:
            self._tracker.pause()
            self._set_state(SessionState.SESSION_WARNING)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def reset_timer(self) -> None:
        """Start a full session lifetime from now. No network call."""
        if self._disposed:
            return
        self._engine.reset()
        self._remaining = self._engine.remaining_time()
        self._warning_dismissed = False
        self._inactivity_dismissed = False
        self._expiry_fired = False
        self._inactivity_countdown.clear()
        self._close_expired_dialog()
        self._tracker.resume()
        self._tracker.record()
        self._set_state(SessionState.ACTIVE)

    async def extend_session(self) -> None:
        """Renew the session through the refresh collaborator.

        Success persists a new expiry and returns to ACTIVE. Rejection or an
        exception forces EXPIRED and invokes the owner callback.
        """
        if self._disposed:
            return
        if self._state == SessionState.EXPIRED:
            print("[Session] Session already expired, sign in again to continue")
            return

        previous = self._storage.read_expiry()
        outcome = await self._renewal.renew()

        if self._disposed:
            print("[Session] Renewal finished after unmount, ignoring result")
            return
        if outcome == RenewalOutcome.BUSY:
            return

        if outcome == RenewalOutcome.RENEWED and self._state == SessionState.EXPIRED:
            # Expired while pending (timeout or logout); sign-in is the only way out
            print("[Session] Renewal succeeded after expiry, ignoring result")
            return

        self._renewal.announce(outcome)

        if outcome == RenewalOutcome.RENEWED:
            self._engine.extend(previous)
            self._remaining = self._engine.remaining_time()
            self._warning_dismissed = False
            self._inactivity_dismissed = False
            self._inactivity_countdown.clear()
            self._close_expired_dialog()
            self._tracker.resume()
            self._tracker.record()
            self._set_state(SessionState.ACTIVE)
            return

        self._enter_expired(show_dialog=False)
        await self._fire_expiry()

    def resume_session(self) -> None:
        """Close the open warning and count this moment as activity."""
        if self._disposed or not self._state.is_warning:
            return
        if self._state == SessionState.SESSION_WARNING:
            self._warning_dismissed = True
        self._inactivity_countdown.clear()
        self._tracker.resume()
        self._tracker.record()
        self._set_state(SessionState.ACTIVE)

    def dismiss_warning(self) -> None:
        """Close the open warning without activity and without renewing."""
        if self._disposed or not self._state.is_warning:
            return
        if self._state == SessionState.SESSION_WARNING:
            self._warning_dismissed = True
        else:
            self._inactivity_dismissed = True
        self._inactivity_countdown.clear()
        self._tracker.resume()
        self._set_state(SessionState.ACTIVE)

    async def handle_expired_login(self) -> None:
        """Close the expired dialog and hand over to the owner's sign-in flow."""
        if self._disposed:
            return
        self._close_expired_dialog()
        if self._state != SessionState.EXPIRED:
            self._enter_expired(show_dialog=False)
        await self._fire_expiry()

    def record_activity(self) -> None:
        """Report one interaction signal from a host without an ActivitySource."""
        if self._disposed:
            return
        self._tracker.signal()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_activity(self) -> None:
        self._inactivity_dismissed = False

    def _enter_expired(self, show_dialog: bool) -> None:
        self._inactivity_countdown.clear()
        self._tracker.pause()
        if show_dialog:
            self._show_expired_dialog = True
            self._expired_countdown.start(self.config.expired_dialog_countdown_seconds)
        else:
            self._close_expired_dialog()
        self._set_state(SessionState.EXPIRED)

    def _close_expired_dialog(self) -> None:
        self._show_expired_dialog = False
        self._expired_countdown.clear()

    async def _expire_for_inactivity(self) -> None:
        self._enter_expired(show_dialog=False)
        self._notifier.notify(
            "Session Ended",
            "You have been logged out due to inactivity.",
            NotificationKind.WARNING,
        )
        await self._fire_expiry()

    async def _fire_expiry(self) -> None:
        """Invoke the owner callback, at most once per session."""
        if self._expiry_fired or self._disposed:
            return
        self._expiry_fired = True
        try:
            await self._on_expire()
        except Exception as e:
            print(f"[Session] Expiry callback failed: {e}")

    def _set_state(self, new_state: SessionState) -> None:
        """Update state and notify callback.

        Args:
            new_state: New session state.
        """
        if self._state != new_state:
            print(f"[Session] {self._state.name} -> {new_state.name}")
            self._state = new_state
            if self._on_state_change is not None:
                self._on_state_change(new_state)
