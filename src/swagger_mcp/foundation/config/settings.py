"""Environment-based configuration using pydantic-settings.

The document location and credential use the bare ``SWAGGER_URL`` and
``AUTH_KEY`` variables; tuning knobs live under the ``SWAGGER_MCP_`` prefix.

Example:
    >>> from swagger_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.http.timeout
    30.0

    # Environment:
    # SWAGGER_URL=https://petstore3.swagger.io/api/v3/openapi.json
    # AUTH_KEY=sk-xxx
    # SWAGGER_MCP_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Transport = Literal["stdio", "sse", "streamable-http"]


class SwaggerConfig(BaseModel):
    """Immutable, process-lifetime configuration consumed by the core.

    ``credential`` absent means no Authorization header is ever sent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    document_url: str
    credential: SecretStr | None = Field(default=None, repr=False)

    @field_validator("document_url", mode="before")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        return _absolute_url(v)


class HttpSettings(BaseSettings):
    """HTTP client configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SWAGGER_MCP_HTTP_",
        extra="ignore",
    )

    timeout: PositiveFloat = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = True
    follow_redirects: bool = True


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SWAGGER_MCP_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ServerSettings(BaseSettings):
    """MCP server transport configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SWAGGER_MCP_",
        extra="ignore",
    )

    name: str = "swagger-mcp"
    transport: Transport = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)


class SwaggerSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        SWAGGER_URL=https://api.example.com/openapi.json   (required)
        AUTH_KEY=sk-xxx
        SWAGGER_MCP_HTTP_TIMEOUT=60
        SWAGGER_MCP_LOG_FORMAT=json
        SWAGGER_MCP_TRANSPORT=sse
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    swagger_url: str = Field(..., description="Absolute URL of the Swagger/OpenAPI document")
    auth_key: SecretStr | None = Field(default=None, description="Bearer token for API requests")

    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("swagger_url", mode="before")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        return _absolute_url(v)

    @field_validator("auth_key", mode="before")
    @classmethod
    def _empty_as_missing(cls, v: object) -> object:
        """An empty AUTH_KEY means no credential."""
        return None if isinstance(v, str) and not v.strip() else v

    def to_config(self) -> SwaggerConfig:
        return SwaggerConfig(document_url=self.swagger_url, credential=self.auth_key)


def _absolute_url(v: object) -> object:
    """Require an absolute http(s) URL."""
    if not isinstance(v, str):
        return v
    v = v.strip()
    try:
        url = httpx.URL(v)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid URL: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError("URL must be absolute and start with http:// or https://")
    return v


@lru_cache(maxsize=1)
def get_settings() -> SwaggerSettings:
    """Get the global settings instance (cached).

    Raises pydantic.ValidationError when SWAGGER_URL is missing or invalid.
    """
    return SwaggerSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
