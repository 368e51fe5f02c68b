"""Notification sinks."""

from vigil.providers.notify.console import ConsoleNotifier

__all__ = ["ConsoleNotifier"]
