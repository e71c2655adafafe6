"""Typed read-only view over a fetched Swagger/OpenAPI document.

The document stays an opaque JSON value; only the two lookups the dispatcher
needs are exposed, so nothing else walks the raw structure.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import orjson

from swagger_mcp.foundation.errors import (
    Err,
    JsonMapping,
    JsonValue,
    Ok,
    Result,
    SwaggerError,
    method_not_supported,
    path_not_found,
)

_EMPTY: JsonMapping = {}


@dataclass(frozen=True, slots=True)
class OperationRef:
    """A declared (path template, method) pair and its uninterpreted descriptor."""

    path: str
    method: str
    descriptor: JsonValue


class InterfaceDocument:
    """Immutable wrapper around the raw document JSON.

    Example:
        >>> doc = InterfaceDocument({"paths": {"/ping": {"get": {}}}})
        >>> doc.operation("/ping", "GET").unwrap().method
        'get'
        >>> doc.server_url() is None
        True
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: JsonValue) -> None:
        self._raw = raw

    @property
    def raw(self) -> JsonValue:
        return self._raw

    @property
    def paths(self) -> JsonMapping:
        """Declared path templates; empty when the document has none."""
        paths = self._raw.get("paths") if isinstance(self._raw, Mapping) else None
        return paths if isinstance(paths, Mapping) else _EMPTY

    def operation(self, path: str, method: str) -> Result[OperationRef, SwaggerError]:
        """Resolve an operation by exact path template and case-insensitive method.

        The path is matched verbatim: no pattern matching, no trailing-slash
        or case normalization. An entry counts as declared unless it is null,
        false, zero or an empty string; empty objects and arrays are declared.
        ``method`` is echoed as given in the error.
        """
        entry = self.paths.get(path)
        if not _declared(entry):
            return Err(path_not_found(path))
        key = method.lower()
        descriptor = entry.get(key) if isinstance(entry, Mapping) else None
        if not _declared(descriptor):
            return Err(method_not_supported(method, path))
        return Ok(OperationRef(path, key, descriptor))

    def server_url(self) -> str | None:
        """``url`` of the first declared server, if present and non-empty."""
        servers = self._raw.get("servers") if isinstance(self._raw, Mapping) else None
        if not isinstance(servers, list) or not servers:
            return None
        first = servers[0]
        url = first.get("url") if isinstance(first, Mapping) else None
        return url if isinstance(url, str) and url else None

    def to_json(self) -> str:
        """Full document as two-space indented JSON text."""
        return orjson.dumps(self._raw, option=orjson.OPT_INDENT_2).decode()

    def __repr__(self) -> str:
        return f"InterfaceDocument(paths={len(self.paths)})"


def _declared(value: object) -> bool:
    """JSON truthiness: containers count as present even when empty."""
    match value:
        case None | False:
            return False
        case float():
            return value == value and value != 0
        case int() | str():
            return bool(value)
        case _:
            return True
