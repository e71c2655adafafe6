"""Error codes and the structured error carried by failed Results.

Failures are values: every fallible step returns ``Err(SwaggerError)``.
The operation boundary renders the error into envelope text with
:meth:`SwaggerError.render`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

DOCUMENT_KIND = "Swagger"

Surface = Literal["document", "request"]


class ErrorCode(StrEnum):
    """Failure taxonomy for document loading and request dispatch."""
    FETCH_FAILED = "FETCH_FAILED"
    PARSE_ERROR = "PARSE_ERROR"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    METHOD_NOT_SUPPORTED = "METHOD_NOT_SUPPORTED"
    REQUEST_FAILED = "REQUEST_FAILED"


# Resolution failures are reported without the "making request" prefix
_RESOLUTION_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.PATH_NOT_FOUND,
    ErrorCode.METHOD_NOT_SUPPORTED,
})


class SwaggerError(BaseModel):
    """Structured failure from loading the document or dispatching a request.

    Attributes:
        code: Machine-readable failure kind
        message: Human-readable cause, without any surface prefix
        recoverable: Whether repeating the call might succeed
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Swagger Error",
            "examples": [{
                "code": "PATH_NOT_FOUND",
                "message": "Path /pets/{id} not found in Swagger spec",
                "recoverable": False,
            }],
        },
    )

    code: ErrorCode
    message: Annotated[str, Field(min_length=1)]
    recoverable: bool = True

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return _exc_message(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_resolution_error(self) -> bool:
        """Whether the failure happened before any HTTP call was attempted."""
        return self.code in _RESOLUTION_CODES

    @classmethod
    def create(cls, code: ErrorCode, message: str, *, recoverable: bool = True) -> Self:
        return cls(code=code, message=message, recoverable=recoverable)

    @classmethod
    def from_exception(cls, code: ErrorCode, exc: Exception, context: str = "") -> Self:
        """Create from exception, optionally prefixing a context phrase."""
        msg = _exc_message(exc)
        return cls(code=code, message=f"{context}: {msg}" if context else msg)

    def render(self, surface: Surface = "request") -> str:
        """Format the error as envelope text for the given operation surface."""
        if surface == "document":
            return f"Error loading {DOCUMENT_KIND} documentation: {self.message}"
        if self.is_resolution_error:
            return f"Error: {self.message}"
        return f"Error making request: {self.message}"

    __str__ = render


def _exc_message(exc: Exception) -> str:
    # some httpx errors carry an empty message
    return str(exc) or type(exc).__name__


def path_not_found(path: str) -> SwaggerError:
    return SwaggerError.create(
        ErrorCode.PATH_NOT_FOUND, f"Path {path} not found in {DOCUMENT_KIND} spec", recoverable=False
    )


def method_not_supported(method: str, path: str) -> SwaggerError:
    return SwaggerError.create(
        ErrorCode.METHOD_NOT_SUPPORTED, f"Method {method} not supported for path {path}", recoverable=False
    )
