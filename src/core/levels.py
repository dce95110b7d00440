from __future__ import annotations

from typing import Literal, Mapping

from src.core.errors import InvalidLogLevelError

LogType = Literal["error", "warn", "info"]
LogLevel = Literal["silent", "error", "warn", "info"]

LOG_LEVELS: Mapping[str, int] = {
    "silent": 0,
    "error": 1,
    "warn": 2,
    "info": 3,
}


def rank(level: str) -> int:
    """Return the numeric threshold rank for a level name."""
    try:
        return LOG_LEVELS[level]
    except KeyError:
        raise InvalidLogLevelError(
            f"Unknown log level {level!r}.",
            title="Invalid Log Level",
            remediation="Use one of: " + ", ".join(LOG_LEVELS) + ".",
        ) from None


__all__ = ["LogType", "LogLevel", "LOG_LEVELS", "rank"]
