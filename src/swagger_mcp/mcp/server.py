"""FastMCP server exposing the Swagger operations.

Tools:
    loadSwaggerDoc  -> full document as formatted JSON
    makeRequest     -> dispatch a request against a declared operation
Resource:
    swagger://documentation -> same document text

Example:
    >>> server = build_server(get_settings())
    >>> server.run(transport="stdio")
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from swagger_mcp.foundation.config import SwaggerSettings, Transport
from swagger_mcp.http import HttpClient
from swagger_mcp.observability import get_logger

from .operations import SwaggerOperations, ToolResponse

RESOURCE_URI = "swagger://documentation"
RESOURCE_NAME = "swagger-doc"


def _unwrap(response: ToolResponse) -> str:
    """Return success text; error envelopes become MCP error results."""
    if response.is_error:
        raise ToolError(response.text)
    return response.text


class SwaggerMCPServer:
    """FastMCP-backed server for MCP clients (Claude Desktop, Cursor, VS Code, ...).

    Example:
        >>> server = SwaggerMCPServer("swagger-mcp", operations, client)
        >>> server.run(transport="sse", port=8080)
    """

    __slots__ = ("_name", "_operations", "_client", "_mcp")

    def __init__(self, name: str, operations: SwaggerOperations, client: HttpClient | None = None) -> None:
        self._name = name
        self._operations = operations
        self._client = client
        self._mcp = self._create_server()

    @property
    def name(self) -> str:
        return self._name

    @property
    def operations(self) -> SwaggerOperations:
        return self._operations

    @property
    def fastmcp(self) -> FastMCP:
        """Access underlying FastMCP instance."""
        return self._mcp

    def _create_server(self) -> FastMCP:
        mcp = FastMCP(self._name, lifespan=self._lifespan)
        self._register(mcp)
        return mcp

    @asynccontextmanager
    async def _lifespan(self, _server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        try:
            yield {}
        finally:
            if self._client is not None:
                await self._client.aclose()

    def _register(self, mcp: FastMCP) -> None:
        ops = self._operations

        async def load_swagger_doc() -> str:
            return _unwrap(await ops.load_document())

        async def make_request(
            path: str,
            method: str,
            parameters: dict[str, Any] | None = None,
            body: Any = None,
        ) -> str:
            return _unwrap(await ops.make_request(path, method, parameters, body))

        async def swagger_documentation() -> str:
            return await ops.read_documentation()

        mcp.tool(name="loadSwaggerDoc", description="Loads and returns the Swagger documentation")(load_swagger_doc)
        mcp.tool(name="makeRequest", description="Make an API request based on the Swagger spec")(make_request)
        mcp.resource(
            RESOURCE_URI,
            name=RESOURCE_NAME,
            description="Get the full Swagger documentation",
        )(swagger_documentation)

    def run(self, transport: Transport = "stdio", *, host: str = "127.0.0.1", port: int = 8080) -> None:
        """Start the server (blocking).

        Args:
            transport: "stdio" (CLI), "sse" (HTTP), "streamable-http"
            host: Host for HTTP transports
            port: Port for HTTP transports
        """
        get_logger("server").info("starting server", name=self._name, transport=transport)
        if transport == "stdio":
            self._mcp.run()
        else:
            self._mcp.run(transport=transport, host=host, port=port)


def build_server(settings: SwaggerSettings, *, client: HttpClient | None = None) -> SwaggerMCPServer:
    """Wire configuration, HTTP client, cache, dispatcher and operations into a server."""
    client = client or HttpClient(settings.http)
    operations = SwaggerOperations.from_config(settings.to_config(), client)
    return SwaggerMCPServer(settings.server.name, operations, client)
