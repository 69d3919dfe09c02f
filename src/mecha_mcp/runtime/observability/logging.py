"""Structured logging with scoped context.

Records are an event name plus key/value fields. Fields come from three
places, later ones winning: the ``log_context`` scope (e.g. the tool being
invoked), the logger's bound context (e.g. method and path of a request),
and the call site.

All output goes to stderr. With the stdio transport, stdout carries the MCP
message stream and must stay clean.

Quick Start:
    >>> configure_logging("console", "DEBUG")
    >>> log = get_logger("mecha.http").bind(method="GET", path="agents")
    >>> with log_context(tool="list-agents"):
    ...     log.info("request succeeded")
    # 10:30:45.123 [info] request succeeded logger="mecha.http" method="GET" path="agents" tool="list-agents"
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from mecha_mcp.foundation.errors import JsonDict, JsonValue

_scope: ContextVar[JsonDict] = ContextVar("mecha_log_scope", default={})


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    fields: JsonDict

    @property
    def iso_time(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def clock_time(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────

_ANSI = {"debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m", "critical": "\033[31m"}
_RESET = "\033[0m"


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per record: ``time [level] event key=value ...``.

    Colors default to on when the output is a terminal.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", lambda: False)())

    def render(self, entry: LogEntry) -> None:
        level = f"[{entry.level}]"
        if self.colors:
            level = f"{_ANSI.get(entry.level, '')}{level}{_RESET}"
        pairs = " ".join(f"{k}={_console_value(v)}" for k, v in sorted(entry.fields.items()) if k != "exc_info")
        line = f"{entry.clock_time} {level} {entry.event}"
        print(f"{line} {pairs}" if pairs else line, file=self.output)
        if exc := entry.fields.get("exc_info"):
            print(exc, file=self.output, end="" if str(exc).endswith("\n") else "\n")


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.iso_time, "level": entry.level, "event": entry.event, **entry.fields}
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=str).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Drops everything (tests, or ``MECHA_AGENT_LOG_FORMAT=none``)."""

    def render(self, entry: LogEntry) -> None:
        pass


def _console_value(v: object) -> str:
    match v:
        case None: return "null"
        case bool(): return "true" if v else "false"
        case str(): return f'"{v}"'
        case int() | float(): return str(v)
        case dict() | list() | tuple(): return orjson.dumps(v, default=str).decode()
        case _: return repr(v)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class _Config:
    renderer: LogRenderer | None = None
    level: int = logging.INFO


_config = _Config()


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Install the process-wide renderer. Format: "console", "json" or "none"."""
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stderr)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _config.renderer = renderer
    _config.level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger carrying bound fields. ``bind`` returns a new logger."""

    context: JsonDict = field(default_factory=dict)

    def bind(self, **fields: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **fields})

    def _emit(self, level: int, event: str, fields: JsonDict) -> None:
        if level < _config.level:
            return
        if _config.renderer is None:
            _config.renderer = ConsoleRenderer()
        merged = {**_scope.get(), **self.context, **fields}
        _config.renderer.render(LogEntry(time.time(), logging.getLevelName(level).lower(), event, merged))

    def debug(self, event: str, **fields: JsonValue) -> None:
        self._emit(logging.DEBUG, event, fields)

    def info(self, event: str, **fields: JsonValue) -> None:
        self._emit(logging.INFO, event, fields)

    def warning(self, event: str, **fields: JsonValue) -> None:
        self._emit(logging.WARNING, event, fields)

    def error(self, event: str, **fields: JsonValue) -> None:
        self._emit(logging.ERROR, event, fields)

    def exception(self, event: str, **fields: JsonValue) -> None:
        """Error record with the active traceback attached."""
        self._emit(logging.ERROR, event, {**fields, "exc_info": traceback.format_exc()})


def get_logger(name: str | None = None, **fields: JsonValue) -> BoundLogger:
    """Logger with ``logger=name`` bound."""
    return BoundLogger({**fields, "logger": name} if name else dict(fields))


@contextmanager
def log_context(**fields: JsonValue) -> Iterator[JsonDict]:
    """Add fields to every record logged inside the block, across awaits."""
    token = _scope.set({**_scope.get(), **fields})
    try:
        yield _scope.get()
    finally:
        _scope.reset(token)
