"""Configuration: environment settings and the immutable core config."""

from .settings import (
    HttpSettings,
    LoggingSettings,
    ServerSettings,
    SwaggerConfig,
    SwaggerSettings,
    Transport,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "HttpSettings",
    "LoggingSettings",
    "ServerSettings",
    "SwaggerConfig",
    "SwaggerSettings",
    "Transport",
    "clear_settings_cache",
    "get_settings",
]
