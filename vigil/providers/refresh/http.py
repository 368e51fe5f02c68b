"""HTTP token refresh backend."""

import asyncio
from typing import Any

import httpx

from vigil.storage.base import KeyValueStore
from vigil.storage.keys import StorageKeys
from vigil.storage.session_storage import SessionStorage


class HttpTokenRefresher:
    """Renews the access token against the auth service's refresh endpoint.

    Concurrent callers share a single in-flight request.
    """

    REFRESH_PATH = "/auth/refresh"

    def __init__(
        self,
        base_url: str,
        store: KeyValueStore,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP refresher.

        Args:
            base_url: Auth service base URL.
            store: Store holding the tokens and user email written at login.
            timeout_seconds: Request timeout.
            client: Optional preconfigured client (owned by the caller).
        """
        self.base_url = base_url.rstrip("/")
        self._store = store
        self._storage = SessionStorage(store)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
        self._pending: asyncio.Future[bool] | None = None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.REFRESH_PATH}"

    async def refresh(self) -> bool:
        """Renew the access token.

        Returns:
            True when a new access token was stored, False when credentials
            are missing or the service refused the renewal. Stored auth data
            is cleared on every failure.

        Raises:
            httpx.HTTPError: On transport failures.
        """
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._refresh())
            self._pending.add_done_callback(self._clear_pending)
        return await asyncio.shield(self._pending)

    async def aclose(self) -> None:
        """Close the HTTP client if this refresher created it."""
        if self._owns_client:
            await self._client.aclose()

    def _clear_pending(self, _future: "asyncio.Future[bool]") -> None:
        self._pending = None

    async def _refresh(self) -> bool:
        refresh_token = self._store.get(StorageKeys.REFRESH_TOKEN)
        email = self._store.get(StorageKeys.USER_EMAIL)
        if not refresh_token or not email:
            print("[Refresh] No refresh token or user email available")
            self._storage.clear_auth()
            return False

        headers = {"Content-Type": "application/json"}
        access_token = self._store.get(StorageKeys.ACCESS_TOKEN)
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        print("[Refresh] Starting token refresh")
        try:
            response = await self._client.post(self.url, json={"email": email}, headers=headers)
        except httpx.HTTPError as e:
            print(f"[Refresh] Token refresh failed: {e}")
            self._storage.clear_auth()
            raise

        token = self._extract_token(response)
        if token is None:
            print(f"[Refresh] Token refresh rejected (status {response.status_code})")
            self._storage.clear_auth()
            return False

        self._store.set(StorageKeys.ACCESS_TOKEN, token)
        print("[Refresh] Token refreshed successfully")
        return True

    @staticmethod
    def _extract_token(response: httpx.Response) -> str | None:
        """Pull the new access token out of a refresh response.

        Args:
            response: Refresh endpoint response.

        Returns:
            The access token, or None if the response is not a success.
        """
        if not response.is_success:
            return None
        try:
            payload: Any = response.json()
        except ValueError:
            return None
        if not isinstance(payload, dict) or not payload.get("success"):
            return None
        data = payload.get("data")
        if not isinstance(data, dict) or not data.get("accessToken"):
            return None
        return str(data["accessToken"])
