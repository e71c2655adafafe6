"""Process entry point: ``swagger-mcp`` / ``python -m swagger_mcp``.

Reads configuration once, fails fast when SWAGGER_URL is missing or invalid,
configures logging and runs the MCP server on the configured transport.
"""

from __future__ import annotations

import sys

from pydantic import ValidationError

from swagger_mcp.foundation.config import SwaggerSettings, get_settings
from swagger_mcp.mcp import build_server
from swagger_mcp.observability import configure_logging, get_logger


def startup_error(exc: ValidationError) -> str:
    """Diagnostic line for a configuration failure."""
    for err in exc.errors():
        if err.get("loc") == ("swagger_url",):
            if err.get("type") == "missing":
                return "Error: SWAGGER_URL environment variable is required"
            return f"Error: SWAGGER_URL is invalid: {err.get('msg', 'invalid URL')}"
    return f"Error: invalid configuration: {exc}"


def load_settings() -> SwaggerSettings:
    """Load settings or exit the process with status 1."""
    try:
        return get_settings()
    except ValidationError as e:
        sys.stderr.write(startup_error(e) + "\n")
        sys.exit(1)


def main() -> None:
    settings = load_settings()
    configure_logging(format=settings.logging.format, level=settings.logging.level)
    get_logger("cli").debug("configuration loaded", document_url=settings.swagger_url,
                            auth=settings.auth_key is not None)
    server = build_server(settings)
    server.run(settings.server.transport, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
