"""Async HTTP primitive shared by the document cache and the dispatcher.

Thin wrapper over a lazily-created ``httpx.AsyncClient``. It performs the call
and hands back the raw response; callers decide what a failure means and turn
exceptions into Results.

Example:
    >>> client = HttpClient(HttpSettings(timeout=10.0))
    >>> response = await client.request("GET", "https://api.example.com/openapi.json")
    >>> await client.aclose()

    >>> # Tests route requests through a mock transport
    >>> client = HttpClient(transport=httpx.MockTransport(handler))
"""

from __future__ import annotations

import httpx

from swagger_mcp.foundation.config import HttpSettings


class HttpClient:
    """Lazily-created async client configured from HttpSettings."""

    __slots__ = ("_settings", "_transport", "_client")

    def __init__(
        self,
        settings: HttpSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or HttpSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def settings(self) -> HttpSettings:
        return self._settings

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                follow_redirects=self._settings.follow_redirects,
                verify=self._settings.verify_ssl,
                timeout=self._settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        content: bytes | str | None = None,
    ) -> httpx.Response:
        """Perform one request and read the full body. Raises httpx.HTTPError on transport failure."""
        return await self._get_client().request(method, url, headers=headers, content=content)

    async def aclose(self) -> None:
        """Close the underlying client. A later request reopens it."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()
