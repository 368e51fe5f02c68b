"""Token refresh backends."""

from vigil.providers.refresh.http import HttpTokenRefresher
from vigil.providers.refresh.local import LocalRefresher

__all__ = ["HttpTokenRefresher", "LocalRefresher"]
