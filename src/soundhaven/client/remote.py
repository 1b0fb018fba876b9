"""HTTP client wrapper used by every client-side store."""

import logging
from types import TracebackType
from typing import Any

import httpx

from soundhaven.config import ClientSettings

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


class RemoteClient:
    """Configured httpx.AsyncClient for the SoundHaven API.

    Non-2xx responses raise httpx.HTTPStatusError, transport problems raise the usual
    httpx.TransportError subclasses. Stores turn both into state; nothing here swallows.
    """

    # Hey future me, the client is created lazily so a RemoteClient can be built outside a
    # running event loop (module import, test fixtures). `transport` is mostly for tests -
    # pass httpx.MockTransport to talk to a fake server without sockets.
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        user_id: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._user_id = user_id
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RemoteClient":
        return cls(
            base_url=settings.base_url,
            token=settings.token,
            timeout=settings.timeout,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if self._user_id:
            headers[USER_ID_HEADER] = self._user_id
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    def set_token(self, token: str | None) -> None:
        """Swap credentials, e.g. after the identity provider refreshed the session."""
        self._token = token
        if self._client is not None:
            self._client.headers.pop("Authorization", None)
            if token:
                self._client.headers["Authorization"] = f"Bearer {token}"

    def set_user_id(self, user_id: str | None) -> None:
        """Set the external id forwarded to the server for admin checks."""
        self._user_id = user_id
        if self._client is not None:
            self._client.headers.pop(USER_ID_HEADER, None)
            if user_id:
                self._client.headers[USER_ID_HEADER] = user_id

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies).

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            httpx.TransportError: Connection/timeout problems
        """
        response = await self._get_client().request(method, path, **kwargs)
        logger.debug("%s %s -> %d", method, path, response.status_code)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RemoteClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
