"""Request dispatch: resolve a declared operation and perform the HTTP call.

Each dispatch is one linear pipeline:

1. get the document from the cache
2. resolve ``paths[path][method]``
3. pick the base origin (first declared server, else the document's origin)
4. substitute ``{name}`` placeholders
5. attach Content-Type and, when configured, bearer auth
6. send, parse the JSON response, re-serialize it

Every step returns a Result; nothing raises past :meth:`RequestDispatcher.dispatch`.
"""

from __future__ import annotations

import time
from collections.abc import Mapping

import httpx
import orjson

from swagger_mcp.document import DocumentCache, InterfaceDocument
from swagger_mcp.foundation.config import SwaggerConfig
from swagger_mcp.foundation.errors import Err, ErrorCode, Ok, Result, SwaggerError
from swagger_mcp.http import HttpClient, auth_for
from swagger_mcp.observability import get_logger

from .request import RequestDescriptor

JSON_CONTENT_TYPE = "application/json"


# ─────────────────────────────────────────────────────────────────────────────
# URL & Header Construction
# ─────────────────────────────────────────────────────────────────────────────


def origin_of(url: str) -> str:
    """scheme://host[:port] of an absolute URL; default ports are omitted."""
    parsed = httpx.URL(url)
    host = f"[{parsed.host}]" if ":" in parsed.host else parsed.host
    return f"{parsed.scheme}://{host}" + (f":{parsed.port}" if parsed.port is not None else "")


def stringify_param(value: object) -> str:
    """String form of a placeholder value.

    >>> [stringify_param(v) for v in (42, 1.0, True, None, [1, "a"])]
    ['42', '1', 'true', 'null', '1,a']
    """
    match value:
        case None: return "null"
        case bool(): return "true" if value else "false"
        case float() if value.is_integer(): return str(int(value))
        case str(): return value
        case list() | tuple(): return ",".join("" if v is None else stringify_param(v) for v in value)
        case dict(): return orjson.dumps(value, default=str).decode()
        case _: return str(value)


def expand_template(url: str, parameters: Mapping[str, object] | None) -> str:
    """Replace the first ``{key}`` for each parameter; unmatched placeholders stay verbatim."""
    for key, value in (parameters or {}).items():
        url = url.replace(f"{{{key}}}", stringify_param(value), 1)
    return url


# ─────────────────────────────────────────────────────────────────────────────
# Dispatcher
# ─────────────────────────────────────────────────────────────────────────────


class RequestDispatcher:
    """Turns a RequestDescriptor plus the cached document into one HTTP call.

    Example:
        >>> dispatcher = RequestDispatcher(config, cache, client)
        >>> result = await dispatcher.dispatch(RequestDescriptor(path="/ping", method="get"))
        >>> result.unwrap()
        '{\\n  "pong": true\\n}'
    """

    __slots__ = ("_cache", "_client", "_auth", "_fallback_origin", "_log")

    def __init__(self, config: SwaggerConfig, cache: DocumentCache, client: HttpClient) -> None:
        self._cache = cache
        self._client = client
        self._auth = auth_for(config.credential)
        self._fallback_origin = origin_of(config.document_url)
        self._log = get_logger("dispatch")

    def base_origin(self, document: InterfaceDocument) -> str:
        return document.server_url() or self._fallback_origin

    def build_url(self, document: InterfaceDocument, descriptor: RequestDescriptor) -> str:
        return expand_template(f"{self.base_origin(document)}{descriptor.path}", descriptor.parameters)

    def build_headers(self) -> dict[str, str]:
        return self._auth.apply({"Content-Type": JSON_CONTENT_TYPE})

    async def dispatch(self, descriptor: RequestDescriptor) -> Result[str, SwaggerError]:
        """Run the full resolve-build-call-normalize pipeline for one request."""
        resolved = (await self._cache.get()).flat_map(
            lambda doc: doc.operation(descriptor.path, descriptor.method).map(
                lambda _op: self.build_url(doc, descriptor)
            )
        )
        match resolved:
            case Ok(url):
                return await self._send(descriptor, url)
            case Err(error) if error.is_resolution_error:
                self._log.warning("operation not declared", path=descriptor.path, method=descriptor.method,
                                  code=error.code.value)
        return resolved

    async def _send(self, descriptor: RequestDescriptor, url: str) -> Result[str, SwaggerError]:
        log = self._log.bind(method=descriptor.method, url=url)
        start = time.perf_counter()
        try:
            content = orjson.dumps(descriptor.body) if descriptor.has_body else None
            response = await self._client.request(
                descriptor.method, url, headers=self.build_headers(), content=content
            )
            data = orjson.loads(response.content)
        except Exception as e:
            log.error("request failed", error=str(e) or type(e).__name__)
            return Err(SwaggerError.from_exception(ErrorCode.REQUEST_FAILED, e))

        log.info("request completed", status=response.status_code,
                 duration_ms=round((time.perf_counter() - start) * 1000, 2))
        return Ok(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
