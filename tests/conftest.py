"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from vigil.session.activity import LocalActivitySource
from vigil.session.config import SessionConfig
from vigil.session.manager import SessionManager
from vigil.storage.memory import MemoryStore
from vigil.storage.session_storage import SessionStorage


class FakeClock:
    """Virtual Unix clock advanced by hand."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a virtual clock."""
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    """Create an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def storage(store) -> SessionStorage:
    """Create session storage over the in-memory store."""
    return SessionStorage(store)


@pytest.fixture
def session_config() -> SessionConfig:
    """Create a test session configuration (30 minute session)."""
    return SessionConfig(
        session_timeout_minutes=30,
        warning_threshold_minutes=1,
        inactivity_threshold_minutes=23,
        inactivity_dialog_countdown_minutes=1,
        expired_dialog_countdown_seconds=60,
        tick_interval_seconds=1.0,
    )


@pytest.fixture
def refresher() -> MagicMock:
    """Mock token refresher that succeeds."""
    mock = MagicMock()
    mock.refresh = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def notifier() -> MagicMock:
    """Mock notification sink."""
    return MagicMock()


@pytest.fixture
def on_expire() -> AsyncMock:
    """Mock owner expiry callback."""
    return AsyncMock(return_value=True)


@pytest.fixture
def activity_source() -> LocalActivitySource:
    """Create an in-process activity source."""
    return LocalActivitySource()


@pytest.fixture
def manager(session_config, storage, refresher, notifier, on_expire, clock) -> SessionManager:
    """Create a session manager on virtual time (not mounted)."""
    return SessionManager(
        session_config,
        storage,
        refresher,
        notifier,
        on_expire=on_expire,
        clock=clock,
    )
