"""MCP surface: operations, envelopes and the FastMCP server."""

from .operations import SwaggerOperations, ToolResponse
from .server import RESOURCE_NAME, RESOURCE_URI, SwaggerMCPServer, build_server

__all__ = [
    "RESOURCE_NAME",
    "RESOURCE_URI",
    "SwaggerMCPServer",
    "SwaggerOperations",
    "ToolResponse",
    "build_server",
]
