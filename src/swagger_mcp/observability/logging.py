"""Structured logging with bound context.

Console output for development, JSON Lines for aggregation, silence for tests.
Every renderer writes to stderr: stdout carries the stdio MCP transport.

Quick Start:
    >>> from swagger_mcp.observability import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("dispatch")
    >>> log.info("request completed", method="GET", status=200)

    >>> log = log.bind(path="/items/{id}")
    >>> log.warning("operation not declared", method="DELETE")
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import NamedTuple, Protocol, TextIO

import orjson

from swagger_mcp.foundation.errors import JsonDict, JsonValue


class _Record(NamedTuple):
    timestamp: float
    level: str
    event: str
    fields: JsonDict


class _Renderer(Protocol):
    def render(self, record: _Record) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class BoundLogger:
    """Logger carrying key/value context into every record. ``bind()`` returns a new logger.

    Example:
        >>> log = BoundLogger(context={"logger": "document"})
        >>> log.info("document loaded", paths=12)
        # => 10:30:45.120 [info] document loaded logger="document" paths=12
    """

    context: JsonDict = field(default_factory=dict)
    renderer: _Renderer | None = None
    threshold: int = logging.DEBUG

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **kw}, self.renderer, self.threshold)

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if level >= self.threshold:
            record = _Record(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw})
            (self.renderer or _active_renderer()).render(record)

    def debug(self, event: str, **kw: JsonValue) -> None: self._emit(logging.DEBUG, event, kw)
    def info(self, event: str, **kw: JsonValue) -> None: self._emit(logging.INFO, event, kw)
    def warning(self, event: str, **kw: JsonValue) -> None: self._emit(logging.WARNING, event, kw)
    def error(self, event: str, **kw: JsonValue) -> None: self._emit(logging.ERROR, event, kw)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


_ANSI = {
    "reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "key": "\033[36m",
    "string": "\033[33m", "number": "\033[34m",
    "debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m",
}
_PLAIN = dict.fromkeys(_ANSI, "")


@dataclass(slots=True)
class ConsoleRenderer:
    """``HH:MM:SS.mmm [level] event key=value ...``; colored only when ``colors`` (default: output is a TTY)."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None
    _palette: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()
        self._palette = _ANSI if self.colors else _PLAIN

    def _paint(self, style: str, text: str) -> str:
        return f"{self._palette.get(style, '')}{text}{self._palette['reset']}"

    def render(self, record: _Record) -> None:
        clock = datetime.fromtimestamp(record.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]
        parts = [
            self._paint("dim", clock),
            self._paint(record.level, f"[{record.level}]"),
            self._paint("bold", record.event),
        ]
        parts += [f"{self._paint('key', k)}={self._value(v)}" for k, v in sorted(record.fields.items())]
        print(" ".join(parts), file=self.output)

    def _value(self, v: object) -> str:
        match v:
            case str(): return self._paint("string", f'"{v}"')
            case bool(): return self._paint("number", "true" if v else "false")
            case int() | float(): return self._paint("number", str(v))
            case dict() | list() | tuple(): return self._paint("dim", f"<{len(v)} items>")
            case _: return repr(v)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, record: _Record) -> None:
        payload = {
            "timestamp": datetime.fromtimestamp(record.timestamp, tz=UTC).isoformat(),
            "level": record.level,
            "event": record.event,
            **record.fields,
        }
        print(orjson.dumps(payload, option=orjson.OPT_NON_STR_KEYS, default=str).decode(), file=self.output)


class NoOpRenderer:
    """Discards every record."""

    __slots__ = ()

    def render(self, record: _Record) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[_Renderer | None] = ContextVar("log_renderer", default=None)
_threshold: ContextVar[int] = ContextVar("log_threshold", default=logging.INFO)


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> ConsoleRenderer | JsonRenderer | NoOpRenderer:
    """Install the process-wide renderer and level. Format: "console", "json" or "none"."""
    renderer: ConsoleRenderer | JsonRenderer | NoOpRenderer
    match format:
        case "console": renderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stderr)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _threshold.set(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    _renderer.set(renderer)
    return renderer


def get_logger(name: str | None = None, **context: JsonValue) -> BoundLogger:
    """Logger at the configured level; ``name`` is bound as ``logger``."""
    if name:
        context["logger"] = name
    return BoundLogger(context, threshold=_threshold.get())


def _active_renderer() -> _Renderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer
