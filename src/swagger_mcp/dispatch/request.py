"""Caller-supplied description of one request against a declared operation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class RequestDescriptor(BaseModel):
    """Parameters for one dispatch.

    Attributes:
        path: Path template exactly as declared in the document (e.g. ``/pets/{petId}``)
        method: HTTP method; normalized to upper case
        parameters: Values substituted into ``{name}`` placeholders
        body: JSON request body; ``None`` sends no body at all
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "title": "Swagger Request",
            "examples": [{
                "path": "/pets/{petId}",
                "method": "GET",
                "parameters": {"petId": 42},
            }, {
                "path": "/pets",
                "method": "POST",
                "body": {"name": "Rex"},
            }],
        },
    )

    path: str = Field(description="Path template as declared in the document")
    method: str = Field(description="HTTP method")
    parameters: dict[str, Any] | None = Field(default=None, description="Path placeholder values", repr=False)
    body: Any = Field(default=None, description="JSON request body", repr=False)

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @computed_field
    @property
    def has_body(self) -> bool:
        return self.body is not None
