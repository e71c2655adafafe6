"""Fetch-once cache for the interface document.

The document is fetched lazily on first use and kept for the lifetime of the
process. Callers arriving while the first fetch is in flight await the same
task instead of issuing their own request. Failed fetches are not cached.
"""

from __future__ import annotations

import asyncio

import orjson

from swagger_mcp.foundation.errors import DOCUMENT_KIND, Err, ErrorCode, Ok, Result, SwaggerError
from swagger_mcp.http import HttpClient
from swagger_mcp.observability import get_logger

from .view import InterfaceDocument

DocumentResult = Result[InterfaceDocument, SwaggerError]


class DocumentCache:
    """Owns the single interface document fetched from ``document_url``.

    Example:
        >>> cache = DocumentCache("https://api.example.com/openapi.json", HttpClient())
        >>> result = await cache.get()
        >>> result.unwrap().server_url()
        'https://api.example.com/v1'
    """

    __slots__ = ("_url", "_client", "_document", "_pending", "_guard", "_log")

    def __init__(self, document_url: str, client: HttpClient) -> None:
        self._url = document_url
        self._client = client
        self._document: InterfaceDocument | None = None
        self._pending: asyncio.Task[DocumentResult] | None = None
        self._guard = asyncio.Lock()
        self._log = get_logger("document", url=document_url)

    @property
    def document_url(self) -> str:
        return self._url

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    async def get(self) -> DocumentResult:
        """Return the cached document, fetching it on first use."""
        if self._document is not None:
            return Ok(self._document)

        async with self._guard:
            if self._document is not None:
                return Ok(self._document)
            task = self._pending
            if task is None:
                task = asyncio.create_task(self._fetch_and_store())
                self._pending = task

        return await asyncio.shield(task)

    async def _fetch_and_store(self) -> DocumentResult:
        try:
            result = await self._fetch()
            if isinstance(result, Ok):
                self._document = result.value
            return result
        finally:
            async with self._guard:
                self._pending = None

    async def _fetch(self) -> DocumentResult:
        self._log.debug("fetching document")
        try:
            response = await self._client.request("GET", self._url)
        except Exception as e:
            self._log.error("document fetch failed", error=str(e))
            return Err(SwaggerError.from_exception(ErrorCode.FETCH_FAILED, e, f"Failed to fetch {DOCUMENT_KIND} spec"))

        if not response.is_success:
            self._log.error("document fetch failed", status=response.status_code)
            return Err(SwaggerError.create(
                ErrorCode.FETCH_FAILED,
                f"Failed to fetch {DOCUMENT_KIND} spec: {response.reason_phrase}",
            ))

        try:
            raw = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            self._log.error("document is not valid JSON", error=str(e))
            return Err(SwaggerError.create(
                ErrorCode.PARSE_ERROR, f"Invalid JSON in {DOCUMENT_KIND} spec: {e}", recoverable=False
            ))

        document = InterfaceDocument(raw)
        self._log.info("document loaded", paths=len(document.paths))
        return Ok(document)
