from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from rich.console import Console

from src.core.levels import LogLevel, LogType, rank
from src.lib.environment import is_ci
from src.logging.console_logger import ConsoleLogger
from src.logging.terminal import ConsoleSinks, TextLike, build_console

DEFAULT_PREFIX = "[devconsole]"
# Attributes every LogRecord carries; anything else arrived through ``extra``
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class Logger(Protocol):
    has_warned: bool

    def info(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None: ...

    def warn(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None: ...

    def warn_once(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None: ...

    def error(
        self,
        msg: TextLike,
        *,
        clear: bool = False,
        timestamp: bool = False,
        error: object | None = None,
    ) -> None: ...

    def clear_screen(self, type_: LogType) -> None: ...

    def has_error_logged(self, error: object) -> bool: ...


@dataclass
class LoggerOptions:
    prefix: str = DEFAULT_PREFIX
    allow_clear_screen: bool = True
    custom_logger: Optional[Logger] = None
    # Streams default to the process stdout/stderr
    stdout: Optional[Console] = None
    stderr: Optional[Console] = None


def create_logger(level: LogLevel = "info", options: LoggerOptions | None = None) -> Logger:
    """Build a console logger, or hand back ``options.custom_logger`` untouched."""

    options = options or LoggerOptions()
    if options.custom_logger is not None:
        return options.custom_logger

    threshold = rank(level)
    sinks = ConsoleSinks(
        stdout=options.stdout if options.stdout is not None else build_console(),
        stderr=options.stderr if options.stderr is not None else build_console(stderr=True),
    )
    can_clear_screen = options.allow_clear_screen and sinks.stdout.is_terminal and not is_ci()
    logging.getLogger(__name__).debug(
        "Console logger created",
        extra={"level": level, "can_clear_screen": can_clear_screen},
    )
    return ConsoleLogger(
        threshold=threshold,
        prefix=options.prefix,
        can_clear_screen=can_clear_screen,
        sinks=sinks,
    )


class JsonFormatter(logging.Formatter):
    """One JSON object per diagnostic record, ``extra`` fields under ``context``."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {key: value for key, value in vars(record).items() if key not in _RECORD_FIELDS}
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(*, level: int = logging.WARNING) -> logging.Logger:
    """Configure the ``src`` diagnostic logger with one JSON stderr handler."""

    diagnostics = logging.getLogger("src")
    diagnostics.setLevel(level)

    if not _has_stream_handler(diagnostics.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(JsonFormatter())
        diagnostics.addHandler(stream_handler)

    return diagnostics


def _has_stream_handler(handlers: list[logging.Handler]) -> bool:
    return any(isinstance(handler, logging.StreamHandler) for handler in handlers)


__all__ = [
    "Logger",
    "LoggerOptions",
    "create_logger",
    "JsonFormatter",
    "configure_logging",
    "DEFAULT_PREFIX",
]
