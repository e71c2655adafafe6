"""Unified error handling for swagger-mcp.

- ErrorCode: failure taxonomy for document loading and dispatch
- SwaggerError: structured error rendered into envelope text
- Result/Ok/Err: monadic error propagation
- Json*: JSON type aliases
"""

from .errors import DOCUMENT_KIND, ErrorCode, Surface, SwaggerError, method_not_supported, path_not_found
from .result import Err, Ok, Result
from .types import JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "DOCUMENT_KIND", "ErrorCode", "Surface", "SwaggerError", "method_not_supported", "path_not_found",
    # Result monad
    "Result", "Ok", "Err",
    # JSON aliases
    "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
