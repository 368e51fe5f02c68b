"""Console notification sink."""

from vigil.providers.base import NotificationKind


class ConsoleNotifier:
    """Prints notifications to stdout."""

    def __init__(self, prefix: str = "Toast") -> None:
        self.prefix = prefix

    def notify(self, title: str, description: str, kind: NotificationKind) -> None:
        print(f"[{self.prefix}:{kind.value}] {title}: {description}")
