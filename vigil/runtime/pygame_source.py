"""Activity source fed by the pygame event queue."""

import pygame

from vigil.session.activity import LocalActivitySource

# pygame event type -> activity event names
PYGAME_ACTIVITY_EVENTS: dict[int, tuple[str, ...]] = {
    pygame.MOUSEMOTION: ("mousemove",),
    pygame.MOUSEBUTTONDOWN: ("mousedown",),
    pygame.MOUSEBUTTONUP: ("click",),
    pygame.MOUSEWHEEL: ("wheel", "scroll"),
    pygame.KEYDOWN: ("keydown",),
    pygame.KEYUP: ("keypress",),
    pygame.TEXTINPUT: ("input",),
    pygame.FINGERDOWN: ("touchstart",),
    pygame.FINGERMOTION: ("touchmove",),
    pygame.WINDOWFOCUSGAINED: ("focus",),
}


class PygameActivitySource(LocalActivitySource):
    """Translates pygame events into named activity signals."""

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Emit the activity events matching a pygame event.

        Args:
            event: Event taken from the pygame queue.

        Returns:
            True if the event counts as user activity.
        """
        names = PYGAME_ACTIVITY_EVENTS.get(event.type)
        if names is None:
            return False
        for name in names:
            self.emit(name)
        return True
