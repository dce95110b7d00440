from __future__ import annotations

import json
import logging
import sys
from pathlib import PurePosixPath

import pytest

from src.core.errors import InvalidLogLevelError
from src.logging.config import JsonFormatter, LoggerOptions, configure_logging, create_logger
from src.logging.console_logger import ConsoleLogger


class _CustomLogger:
    has_warned = False

    def info(self, msg, **_):  # pragma: no cover - not used
        raise NotImplementedError


def test_custom_logger_is_returned_as_is() -> None:
    custom = _CustomLogger()

    assert create_logger("verbose-is-not-checked", LoggerOptions(custom_logger=custom)) is custom  # type: ignore[arg-type]


def test_default_level_is_info(pipe_streams) -> None:
    logger = create_logger(options=pipe_streams.options())

    assert isinstance(logger, ConsoleLogger)
    assert logger.threshold == 3


def test_unknown_level_is_rejected(pipe_streams) -> None:
    with pytest.raises(InvalidLogLevelError):
        create_logger("debug", pipe_streams.options())  # type: ignore[arg-type]


def test_clearing_needs_tty_permission_and_no_ci(tty_streams, pipe_streams, monkeypatch) -> None:
    assert create_logger("info", tty_streams.options()).can_clear_screen is True
    assert create_logger("info", pipe_streams.options()).can_clear_screen is False
    assert create_logger("info", tty_streams.options(allow_clear_screen=False)).can_clear_screen is False

    monkeypatch.setenv("CI", "true")
    assert create_logger("info", tty_streams.options()).can_clear_screen is False


def test_clear_capability_is_fixed_at_construction(tty_streams, clear_calls, monkeypatch) -> None:
    logger = create_logger("info", tty_streams.options())
    monkeypatch.setenv("CI", "1")

    logger.clear_screen("info")

    assert clear_calls == [tty_streams.stdout]


def test_json_formatter_includes_context() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="src.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Server bound",
        args=(),
        exc_info=None,
    )
    record.port = 5173

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Server bound"
    assert payload["level"] == "INFO"
    assert payload["context"] == {"port": 5173}


def test_json_formatter_stringifies_objects_and_exceptions() -> None:
    formatter = JsonFormatter()
    try:
        raise OSError("address in use")
    except OSError:
        record = logging.makeLogRecord(
            {"msg": "Bind failed", "levelno": logging.ERROR, "levelname": "ERROR", "exc_info": sys.exc_info()}
        )
    record.path = PurePosixPath("/tmp/dev.sock")

    payload = json.loads(formatter.format(record))

    assert payload["context"] == {"path": "/tmp/dev.sock"}
    assert "OSError: address in use" in payload["exception"]


def test_configure_logging_adds_single_handler() -> None:
    diagnostics = logging.getLogger("src")
    before = list(diagnostics.handlers)
    try:
        configure_logging(level=logging.DEBUG)
        configure_logging(level=logging.DEBUG)
        added = [handler for handler in diagnostics.handlers if handler not in before]
        assert len(added) <= 1
        assert diagnostics.level == logging.DEBUG
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in diagnostics.handlers)
    finally:
        for handler in list(diagnostics.handlers):
            if handler not in before:
                diagnostics.removeHandler(handler)
        diagnostics.setLevel(logging.NOTSET)
