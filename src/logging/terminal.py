"""Terminal collaborators for the console logger.

Styling, the severity -> stream table and the screen-clear primitive all
live here so the logger itself only decides *when* to use them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from rich.console import Console
from rich.control import Control
from rich.text import Text

from src.core.levels import LogType

TextLike = str | Text

SEVERITY_STYLE: Mapping[str, str] = {
    "info": "cyan",
    "warn": "yellow",
    "error": "red",
}

SEVERITY_STREAM: Mapping[str, str] = {
    "info": "stdout",
    "warn": "stderr",
    "error": "stderr",
}


def styled(text: TextLike, style: str) -> Text:
    return Text.assemble(text, style=style)


def bold(text: TextLike) -> Text:
    return styled(text, "bold")


def dim(text: TextLike) -> Text:
    return styled(text, "dim")


def cyan(text: TextLike) -> Text:
    return styled(text, "cyan")


def yellow(text: TextLike) -> Text:
    return styled(text, "yellow")


def severity_tag(type_: LogType, prefix: str) -> Text:
    return styled(bold(prefix), SEVERITY_STYLE[type_])


def build_console(*, stderr: bool = False) -> Console:
    return Console(stderr=stderr, highlight=False, soft_wrap=True)


@dataclass(slots=True)
class ConsoleSinks:
    stdout: Console
    stderr: Console

    def for_type(self, type_: LogType) -> Console:
        return self.stdout if SEVERITY_STREAM[type_] == "stdout" else self.stderr


def clear_screen(console: Console) -> None:
    """Push the visible output into scrollback, then wipe the screen.

    Prints ``rows - 2`` blank lines (none when the terminal reports fewer
    rows), moves the cursor home and erases everything below it.
    """
    rows = console.size.height
    blank = rows - 2
    console.print("\n" * blank if blank > 0 else "")
    console.control(Control.home(), Control.clear())


__all__ = [
    "TextLike",
    "SEVERITY_STYLE",
    "SEVERITY_STREAM",
    "styled",
    "bold",
    "dim",
    "cyan",
    "yellow",
    "severity_tag",
    "build_console",
    "ConsoleSinks",
    "clear_screen",
]
