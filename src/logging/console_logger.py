from __future__ import annotations

import threading
import weakref
from datetime import datetime
from typing import Optional

from rich.text import Text

from src.core.levels import LogType, rank
from src.logging import terminal
from src.logging.terminal import ConsoleSinks, TextLike


class ErrorRegistry:
    """Identity-keyed record of error objects that have been surfaced.

    Entries are held weakly so a logged error can still be garbage
    collected. Objects that refuse weak references (instances of built-in
    exception types) are kept in a strong id-keyed map instead and live as
    long as the registry does.
    """

    def __init__(self) -> None:
        # Keyed by id() so a custom __eq__/__hash__ on the error never matters
        self._weak: weakref.WeakValueDictionary[int, object] = weakref.WeakValueDictionary()
        self._strong: dict[int, object] = {}

    def add(self, error: object) -> None:
        try:
            self._weak[id(error)] = error
        except TypeError:
            self._strong[id(error)] = error

    def __contains__(self, error: object) -> bool:
        key = id(error)
        return self._weak.get(key) is error or self._strong.get(key) is error


class ConsoleLogger:
    """Console logger with severity gating and repeat collapsing.

    Identical consecutive messages are collapsed into one line with a
    ``(xN)`` counter, which needs the screen to be cleared between prints.
    When clearing is not permitted every accepted message is printed as is.
    """

    def __init__(
        self,
        *,
        threshold: int,
        prefix: str,
        can_clear_screen: bool,
        sinks: ConsoleSinks,
    ) -> None:
        self._threshold = threshold
        self._prefix = prefix
        self._can_clear_screen = can_clear_screen
        self._sinks = sinks
        self._lock = threading.RLock()
        self._last_type: Optional[LogType] = None
        self._last_msg: Optional[str] = None
        self._repeat_count = 0
        self._warned_once: set[str] = set()
        self._reported_errors = ErrorRegistry()
        self.has_warned = False

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def can_clear_screen(self) -> bool:
        return self._can_clear_screen

    @property
    def repeat_count(self) -> int:
        return self._repeat_count

    def info(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None:
        self._output("info", msg, clear=clear, timestamp=timestamp)

    def warn(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None:
        self.has_warned = True
        self._output("warn", msg, clear=clear, timestamp=timestamp)

    def warn_once(self, msg: TextLike, *, clear: bool = False, timestamp: bool = False) -> None:
        key = _plain(msg)
        with self._lock:
            if key in self._warned_once:
                return
            self.has_warned = True
            self._output("warn", msg, clear=clear, timestamp=timestamp)
            self._warned_once.add(key)

    def error(
        self,
        msg: TextLike,
        *,
        clear: bool = False,
        timestamp: bool = False,
        error: object | None = None,
    ) -> None:
        self.has_warned = True
        self._output("error", msg, clear=clear, timestamp=timestamp, error=error)

    def clear_screen(self, type_: LogType) -> None:
        if self._threshold >= rank(type_):
            self._clear()

    def has_error_logged(self, error: object) -> bool:
        return error in self._reported_errors

    # Internal helpers -------------------------------------------------
    def _clear(self) -> None:
        if self._can_clear_screen:
            terminal.clear_screen(self._sinks.stdout)

    def _format(self, type_: LogType, msg: TextLike, timestamp: bool) -> Text:
        if timestamp:
            return Text.assemble(
                terminal.dim(datetime.now().strftime("%X")),
                " ",
                terminal.severity_tag(type_, self._prefix),
                " ",
                msg,
            )
        return msg if isinstance(msg, Text) else Text(msg)

    def _output(
        self,
        type_: LogType,
        msg: TextLike,
        *,
        clear: bool,
        timestamp: bool,
        error: object | None = None,
    ) -> None:
        if error is not None:
            self._reported_errors.add(error)
        if self._threshold < rank(type_):
            return
        sink = self._sinks.for_type(type_)
        with self._lock:
            formatted = self._format(type_, msg, timestamp)
            if not self._can_clear_screen:
                sink.print(formatted)
                return
            key = _plain(msg)
            if type_ == self._last_type and key == self._last_msg:
                self._repeat_count += 1
                self._clear()
                sink.print(formatted, terminal.yellow(f"(x{self._repeat_count + 1})"))
            else:
                self._repeat_count = 0
                self._last_msg = key
                self._last_type = type_
                if clear:
                    self._clear()
                sink.print(formatted)


def _plain(msg: TextLike) -> str:
    return msg.plain if isinstance(msg, Text) else msg


__all__ = ["ConsoleLogger", "ErrorRegistry"]
