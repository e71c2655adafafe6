"""Structured logging: context-bound loggers with console and JSON renderers."""

from .logging import BoundLogger, ConsoleRenderer, JsonRenderer, NoOpRenderer, configure_logging, get_logger

__all__ = ["BoundLogger", "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "configure_logging", "get_logger"]
