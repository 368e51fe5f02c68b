"""Pygame host for the session manager."""

from vigil.runtime.controller import SessionController

__all__ = ["SessionController"]
