"""swagger-mcp - Swagger/OpenAPI-driven HTTP client exposed as MCP tools.

Fetches an interface document once, then lets MCP clients read it and issue
requests against its declared operations with path substitution and bearer
auth applied automatically.

Quick Start:
    $ SWAGGER_URL=https://petstore3.swagger.io/api/v3/openapi.json swagger-mcp

Programmatic use:
    >>> from swagger_mcp import HttpClient, SwaggerConfig, SwaggerOperations
    >>> config = SwaggerConfig(document_url="https://api.example.com/openapi.json")
    >>> ops = SwaggerOperations.from_config(config, HttpClient())
    >>> response = await ops.make_request("/pets/{petId}", "get", {"petId": 1})
    >>> response.is_error
    False
"""

from __future__ import annotations

__version__ = "1.0.0"

from .dispatch import RequestDescriptor, RequestDispatcher
from .document import DocumentCache, InterfaceDocument
from .foundation.config import SwaggerConfig, SwaggerSettings, get_settings
from .foundation.errors import Err, ErrorCode, Ok, Result, SwaggerError
from .http import HttpClient
from .mcp import SwaggerMCPServer, SwaggerOperations, ToolResponse, build_server

__all__ = [
    "__version__",
    # Core
    "DocumentCache", "InterfaceDocument", "RequestDescriptor", "RequestDispatcher",
    # Configuration
    "SwaggerConfig", "SwaggerSettings", "get_settings",
    # Errors
    "ErrorCode", "SwaggerError", "Result", "Ok", "Err",
    # Transport & surface
    "HttpClient", "SwaggerMCPServer", "SwaggerOperations", "ToolResponse", "build_server",
]
