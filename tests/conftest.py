from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Callable, Iterator

import pytest
from rich.console import Console

from src.logging.config import LoggerOptions


@dataclass
class RecordingStreams:
    stdout: Console
    stderr: Console

    @property
    def out(self) -> str:
        return self.stdout.file.getvalue()  # type: ignore[attr-defined]

    @property
    def err(self) -> str:
        return self.stderr.file.getvalue()  # type: ignore[attr-defined]

    def options(self, **overrides: object) -> LoggerOptions:
        return LoggerOptions(stdout=self.stdout, stderr=self.stderr, **overrides)  # type: ignore[arg-type]


def _recording_console(*, terminal: bool) -> Console:
    return Console(
        file=io.StringIO(),
        force_terminal=terminal,
        color_system=None,
        width=200,
        height=10,
        highlight=False,
        soft_wrap=True,
    )


@pytest.fixture(autouse=True)
def _no_ci(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("DEVCONSOLE_DEBUG", raising=False)
    yield


@pytest.fixture
def tty_streams() -> RecordingStreams:
    """Streams that report an interactive terminal, so clearing is allowed."""
    return RecordingStreams(
        stdout=_recording_console(terminal=True),
        stderr=_recording_console(terminal=True),
    )


@pytest.fixture
def pipe_streams() -> RecordingStreams:
    return RecordingStreams(
        stdout=_recording_console(terminal=False),
        stderr=_recording_console(terminal=False),
    )


@pytest.fixture
def clear_calls(monkeypatch: pytest.MonkeyPatch) -> list[Console]:
    calls: list[Console] = []
    monkeypatch.setattr("src.logging.terminal.clear_screen", calls.append)
    return calls


@pytest.fixture
def lines() -> Callable[[str], list[str]]:
    def _split(text: str) -> list[str]:
        return [line for line in text.splitlines() if line.strip()]

    return _split
