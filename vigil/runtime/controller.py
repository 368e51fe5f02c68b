"""Runtime controller that hosts the session manager in a pygame window."""

import asyncio
import os
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

import pygame
import yaml
from dotenv import load_dotenv

from vigil.providers.base import TokenRefresher
from vigil.providers.refresh.http import HttpTokenRefresher
from vigil.providers.refresh.local import LocalRefresher
from vigil.runtime.pygame_source import PygameActivitySource
from vigil.runtime.toasts import ToastNotifier
from vigil.runtime.view import SessionView
from vigil.session.config import SessionConfig
from vigil.session.manager import SessionManager
from vigil.storage.base import KeyValueStore
from vigil.storage.memory import MemoryStore
from vigil.storage.session_storage import SessionStorage
from vigil.storage.sqlite import SqliteStore


class SessionController:
    """Main controller that wires the session manager to a window."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the session controller.

        Args:
            config_path: Path to configuration YAML file.
        """
        # Load environment variables
        load_dotenv()

        self.config = self._load_config(config_path)
        self.session_config = SessionConfig.from_dict(self.config.get("session", {}))

        self._store = self._build_store(self.config.get("storage", {}))
        self._storage = SessionStorage(self._store)
        self._refresher = self._build_refresher(self.config.get("refresh", {}), self._store)

        window_config = self.config.get("window", {})
        res = window_config.get("resolution", [640, 360])
        self._view = SessionView(
            resolution=(int(res[0]), int(res[1])),
            fps=int(window_config.get("fps", 30)),
        )

        self._notifier = ToastNotifier()
        self._source = PygameActivitySource()
        self._manager = SessionManager(
            self.session_config,
            self._storage,
            self._refresher,
            self._notifier,
            on_expire=self._on_expire,
        )

        self._running = False
        # Pending key-triggered actions
        self._actions: set[asyncio.Task[None]] = set()

    @property
    def manager(self) -> SessionManager:
        return self._manager

    @property
    def storage(self) -> SessionStorage:
        return self._storage

    @property
    def running(self) -> bool:
        return self._running

    def _load_config(self, config_path: Path | None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file.

        Returns:
            Configuration dictionary.
        """
        if config_path is None:
            # Try default location
            config_path = Path("config/default.yaml")

        if config_path.exists():
            with open(config_path) as f:
                loaded: dict[str, Any] = yaml.safe_load(f) or {}
                return loaded

        # Return minimal default config
        return {
            "session": {},
            "storage": {"backend": "sqlite", "db_path": "data/session.db"},
            "refresh": {"provider": "local"},
            "window": {"resolution": [640, 360], "fps": 30},
        }

    @staticmethod
    def _build_store(config: dict[str, Any]) -> KeyValueStore:
        backend = config.get("backend", "sqlite")
        if backend == "memory":
            return MemoryStore()
        if backend == "sqlite":
            return SqliteStore(Path(config.get("db_path", "data/session.db")))
        raise ValueError(f"Unknown storage backend: {backend}")

    @staticmethod
    def _build_refresher(config: dict[str, Any], store: KeyValueStore) -> TokenRefresher:
        provider = config.get("provider", "local")
        if provider == "local":
            return LocalRefresher(succeed=bool(config.get("succeed", True)))
        if provider == "http":
            base_url = config.get("base_url") or os.environ.get("VIGIL_REFRESH_BASE_URL")
            if not base_url:
                raise ValueError(
                    "refresh.base_url (or VIGIL_REFRESH_BASE_URL) is required for the http provider"
                )
            return HttpTokenRefresher(
                base_url=base_url,
                store=store,
                timeout_seconds=float(config.get("timeout_seconds", 30.0)),
            )
        raise ValueError(f"Unknown refresh provider: {provider}")

    def reset_session(self) -> None:
        """Start a full session lifetime (an authoritative sign-in happened)."""
        self._manager.reset_timer()

    def start(self) -> None:
        """Open the window and run until quit or forced logout."""
        asyncio.run(self.run())

    async def run(self) -> None:
        """Main render/event loop."""
        self._view.initialize()
        self._running = True
        self._manager.mount(self._source)
        self._manager.start()

        print("Vigil started. Press ESC to quit.")

        try:
            while self._running:
                if not self._process_events():
                    break
                self._view.render(self._manager.snapshot(), self._notifier.active())
                await asyncio.sleep(1 / self._view.fps)
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Unmount the session manager and shutdown."""
        self._running = False
        self._manager.unmount()
        if isinstance(self._refresher, HttpTokenRefresher):
            await self._refresher.aclose()
        self._view.shutdown()
        print("Vigil stopped.")

    def _process_events(self) -> bool:
        """Process Pygame events.

        Returns:
            True if should continue running, False to quit.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            self._source.dispatch(event)
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                self.handle_key(event.key)
        return True

    def handle_key(self, key: int) -> None:
        """Map dialog key bindings to session operations.

        Args:
            key: Pygame key code.
        """
        snapshot = self._manager.snapshot()
        if key == pygame.K_e and snapshot.show_warning_dialog:
            # Renewal is disabled while one is pending
            if not snapshot.is_renewing:
                self._spawn(self._manager.extend_session())
        elif key == pygame.K_r and snapshot.is_inactivity_warning:
            self._manager.resume_session()
        elif key == pygame.K_d and snapshot.show_warning_dialog:
            self._manager.dismiss_warning()
        elif key == pygame.K_l and snapshot.show_expired_dialog:
            self._spawn(self._manager.handle_expired_login())

    def _spawn(self, action: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(action)
        self._actions.add(task)
        task.add_done_callback(self._actions.discard)

    async def _on_expire(self) -> bool:
        """Log out: drop credentials and the session expiry, then quit."""
        self._storage.clear_auth()
        self._storage.clear_expiry()
        print("Session ended. Sign in again to continue.")
        self._running = False
        return True
