"""Remotely invocable operations rendered into uniform response envelopes.

This is the boundary where Result values become text: Ok payloads pass
through, Err values are rendered with :meth:`SwaggerError.render`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from swagger_mcp.dispatch import RequestDescriptor, RequestDispatcher
from swagger_mcp.document import DocumentCache
from swagger_mcp.foundation.config import SwaggerConfig
from swagger_mcp.foundation.errors import Err, ErrorCode, Ok, Result, Surface, SwaggerError
from swagger_mcp.http import HttpClient


class ToolResponse(BaseModel):
    """Envelope returned by an operation: text plus an error flag."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    text: str
    is_error: bool = False

    @classmethod
    def from_result(cls, result: Result[str, SwaggerError], *, surface: Surface = "request") -> ToolResponse:
        match result:
            case Ok(text):
                return cls(text=text)
            case Err(error):
                return cls(text=error.render(surface), is_error=True)


class SwaggerOperations:
    """``loadSwaggerDoc``, ``makeRequest`` and the documentation resource.

    Example:
        >>> ops = SwaggerOperations.from_config(config, HttpClient())
        >>> (await ops.make_request("/pets/{id}", "get", {"id": 7})).text
        '{\\n  "id": 7\\n}'
    """

    __slots__ = ("_cache", "_dispatcher")

    def __init__(self, cache: DocumentCache, dispatcher: RequestDispatcher) -> None:
        self._cache = cache
        self._dispatcher = dispatcher

    @classmethod
    def from_config(cls, config: SwaggerConfig, client: HttpClient) -> SwaggerOperations:
        cache = DocumentCache(config.document_url, client)
        return cls(cache, RequestDispatcher(config, cache, client))

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    async def load_document(self) -> ToolResponse:
        """Full cached document as formatted JSON."""
        result = await self._cache.get()
        return ToolResponse.from_result(result.map(lambda doc: doc.to_json()), surface="document")

    async def make_request(
        self,
        path: str,
        method: str,
        parameters: dict[str, Any] | None = None,
        body: Any = None,
    ) -> ToolResponse:
        """Dispatch a request against the operation declared at ``path``/``method``."""
        try:
            descriptor = RequestDescriptor(path=path, method=method, parameters=parameters, body=body)
        except ValidationError as e:
            return ToolResponse(text=SwaggerError.create(ErrorCode.REQUEST_FAILED, str(e)).render(), is_error=True)
        return ToolResponse.from_result(await self._dispatcher.dispatch(descriptor))

    async def read_documentation(self) -> str:
        """Resource body: same text as load_document, errors embedded without a flag."""
        return (await self.load_document()).text
