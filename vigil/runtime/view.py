"""Pygame rendering of the session status, dialogs, and toasts."""

import pygame

from vigil.providers.base import NotificationKind
from vigil.runtime.toasts import Toast
from vigil.session.clock import format_timer
from vigil.session.state import SessionSnapshot, SessionState

BACKGROUND = (45, 45, 45)
TEXT = (230, 230, 230)
DIALOG = (70, 70, 90)

STATE_COLORS = {
    SessionState.ACTIVE: (0, 200, 0),  # Green
    SessionState.INACTIVITY_WARNING: (200, 200, 0),  # Yellow
    SessionState.SESSION_WARNING: (230, 140, 0),  # Orange
    SessionState.EXPIRED: (200, 0, 0),  # Red
}

TOAST_COLORS = {
    NotificationKind.SUCCESS: (0, 150, 70),
    NotificationKind.ERROR: (170, 30, 30),
    NotificationKind.WARNING: (170, 130, 0),
    NotificationKind.INFO: (0, 90, 170),
}


def dialog_lines(snapshot: SessionSnapshot) -> list[str]:
    """Text of the dialog to show for a snapshot (empty when none).

    Args:
        snapshot: Current session snapshot.

    Returns:
        Dialog lines, heading first.
    """
    if snapshot.state == SessionState.SESSION_WARNING:
        lines = [
            "Your session is about to expire",
            f"Time remaining: {snapshot.formatted_time}",
        ]
    elif snapshot.state == SessionState.INACTIVITY_WARNING:
        lines = [
            "Are you still there?",
            f"You will be logged out in {format_timer(snapshot.inactivity_countdown)}",
        ]
    elif snapshot.show_expired_dialog:
        return [
            "Your session has expired",
            f"Returning to sign in in {snapshot.expired_countdown}s",
            "[L] Sign in again",
        ]
    else:
        return []

    if snapshot.is_renewing:
        lines.append("Extending session...")
    elif snapshot.state == SessionState.INACTIVITY_WARNING:
        lines.append("[R] Resume   [E] Extend   [D] Dismiss")
    else:
        lines.append("[E] Extend   [D] Dismiss")
    return lines


class SessionView:
    """Draws the session countdown window."""

    def __init__(self, resolution: tuple[int, int] = (640, 360), fps: int = 30) -> None:
        self.resolution = resolution
        self.fps = fps
        self._screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

    def initialize(self) -> None:
        """Initialize Pygame and create window."""
        pygame.init()
        pygame.display.set_caption("Vigil")
        self._screen = pygame.display.set_mode(self.resolution)
        self._font = pygame.font.Font(None, 72)
        self._small_font = pygame.font.Font(None, 28)

    def shutdown(self) -> None:
        pygame.quit()

    def render(self, snapshot: SessionSnapshot, toasts: list[Toast]) -> None:
        """Render the current frame."""
        if self._screen is None or self._font is None or self._small_font is None:
            return

        self._screen.fill(BACKGROUND)
        width, height = self.resolution

        timer = self._font.render(snapshot.formatted_time, True, TEXT)
        self._screen.blit(timer, timer.get_rect(center=(width // 2, height // 3)))

        lines = dialog_lines(snapshot)
        if lines:
            self._draw_dialog(lines)

        self._draw_toasts(toasts)

        # State indicator in the bottom-right corner
        pygame.draw.circle(
            self._screen,
            STATE_COLORS.get(snapshot.state, (100, 100, 100)),
            (width - 20, height - 20),
            10,
        )

        pygame.display.flip()

    def _draw_dialog(self, lines: list[str]) -> None:
        if self._screen is None or self._small_font is None:
            return
        width, height = self.resolution
        line_height = self._small_font.get_linesize()
        rect = pygame.Rect(0, 0, width * 3 // 4, line_height * (len(lines) + 1))
        rect.center = (width // 2, height * 2 // 3)
        pygame.draw.rect(self._screen, DIALOG, rect, border_radius=8)
        for i, line in enumerate(lines):
            surface = self._small_font.render(line, True, TEXT)
            y = rect.top + line_height // 2 + i * line_height
            self._screen.blit(surface, surface.get_rect(midtop=(rect.centerx, y)))

    def _draw_toasts(self, toasts: list[Toast]) -> None:
        if self._screen is None or self._small_font is None:
            return
        line_height = self._small_font.get_linesize()
        for i, toast in enumerate(toasts[-3:]):
            surface = self._small_font.render(f"{toast.title}: {toast.description}", True, TEXT)
            rect = surface.get_rect(topleft=(10, 10 + i * (line_height + 6)))
            pygame.draw.rect(
                self._screen,
                TOAST_COLORS.get(toast.kind, DIALOG),
                rect.inflate(12, 6),
                border_radius=4,
            )
            self._screen.blit(surface, rect)
