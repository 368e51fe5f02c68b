"""Tests for provider modules."""

import asyncio
import json

import httpx
import pytest

from vigil.providers.base import NotificationKind
from vigil.providers.notify.console import ConsoleNotifier
from vigil.providers.refresh.http import HttpTokenRefresher
from vigil.providers.refresh.local import LocalRefresher
from vigil.storage.keys import StorageKeys
from vigil.storage.memory import MemoryStore

BASE_URL = "https://auth.example.test/api"


@pytest.fixture
def auth_store() -> MemoryStore:
    """Store holding the auth data written at login."""
    return MemoryStore(
        {
            StorageKeys.ACCESS_TOKEN: "old-access",
            StorageKeys.REFRESH_TOKEN: "refresh-123",
            StorageKeys.LOGGED_IN: "true",
            StorageKeys.USER_EMAIL: "user@example.test",
            StorageKeys.SESSION_EXPIRY_TIME: "1700001800",
        }
    )


def _refresher(store: MemoryStore, handler) -> HttpTokenRefresher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTokenRefresher(BASE_URL, store, client=client)


class TestConsoleNotifier:
    """Tests for ConsoleNotifier."""

    def test_notify_prints(self, capsys):
        """Test that notifications are printed with their kind."""
        notifier = ConsoleNotifier()
        notifier.notify("Session Extended", "Done.", NotificationKind.SUCCESS)
        assert "[Toast:success] Session Extended: Done." in capsys.readouterr().out

    def test_custom_prefix(self, capsys):
        notifier = ConsoleNotifier(prefix="Vigil")
        notifier.notify("Session Ended", "Bye.", NotificationKind.WARNING)
        assert "[Vigil:warning]" in capsys.readouterr().out


class TestLocalRefresher:
    """Tests for LocalRefresher."""

    @pytest.mark.asyncio
    async def test_succeeds_by_default(self):
        refresher = LocalRefresher()
        assert await refresher.refresh() is True
        assert refresher.calls == 1

    @pytest.mark.asyncio
    async def test_configured_failure(self):
        refresher = LocalRefresher(succeed=False)
        assert await refresher.refresh() is False
        assert await refresher.refresh() is False
        assert refresher.calls == 2


class TestHttpTokenRefresher:
    """Tests for HttpTokenRefresher."""

    def test_url(self, auth_store):
        refresher = HttpTokenRefresher(BASE_URL + "/", auth_store)
        assert refresher.url == "https://auth.example.test/api/auth/refresh"

    @pytest.mark.asyncio
    async def test_success_stores_new_token(self, auth_store):
        """Test a successful refresh request and response handling."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"success": True, "data": {"accessToken": "new-access"}})

        refresher = _refresher(auth_store, handler)
        assert await refresher.refresh() is True

        assert auth_store.get(StorageKeys.ACCESS_TOKEN) == "new-access"
        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/auth/refresh"
        assert request.headers["Authorization"] == "Bearer old-access"
        assert json.loads(request.content) == {"email": "user@example.test"}

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_access_token(self, auth_store):
        auth_store.remove(StorageKeys.ACCESS_TOKEN)
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "data": {"accessToken": "a"}})

        refresher = _refresher(auth_store, handler)
        assert await refresher.refresh() is True
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", [StorageKeys.REFRESH_TOKEN, StorageKeys.USER_EMAIL])
    async def test_missing_credentials(self, auth_store, missing):
        """Test that no request is sent without credentials."""
        auth_store.remove(missing)
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        refresher = _refresher(auth_store, handler)
        assert await refresher.refresh() is False
        assert calls == []
        for key in StorageKeys.AUTH_KEYS:
            assert auth_store.get(key) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={"success": False}),
            httpx.Response(200, json={"success": True, "data": {}}),
            httpx.Response(200, text="not json"),
            httpx.Response(401, json={"success": False, "message": "Unauthorized"}),
            httpx.Response(500),
        ],
    )
    async def test_rejected_clears_auth(self, auth_store, response):
        refresher = _refresher(auth_store, lambda request: response)
        assert await refresher.refresh() is False

        for key in StorageKeys.AUTH_KEYS:
            assert auth_store.get(key) is None
        # The session expiry is left to the session manager
        assert auth_store.get(StorageKeys.SESSION_EXPIRY_TIME) == "1700001800"

    @pytest.mark.asyncio
    async def test_transport_error_clears_auth_and_raises(self, auth_store):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Network error", request=request)

        refresher = _refresher(auth_store, handler)
        with pytest.raises(httpx.ConnectError):
            await refresher.refresh()
        assert auth_store.get(StorageKeys.REFRESH_TOKEN) is None

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_request(self, auth_store):
        calls: list[httpx.Request] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={"success": True, "data": {"accessToken": "shared"}})

        refresher = _refresher(auth_store, handler)
        results = await asyncio.gather(refresher.refresh(), refresher.refresh())

        assert results == [True, True]
        assert len(calls) == 1

        # A later call sends a new request
        assert await refresher.refresh() is True
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self, auth_store):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        refresher = HttpTokenRefresher(BASE_URL, auth_store, client=client)
        await refresher.aclose()
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_own_client(self, auth_store):
        refresher = HttpTokenRefresher(BASE_URL, auth_store)
        await refresher.aclose()
        assert refresher._client.is_closed
