"""Environment helpers for the console logger.

- Detects continuous integration runs (the ``CI`` variable)
- Reads boolean feature flags with safe defaults
"""
from __future__ import annotations

import os


def env_flag(name: str, default: str = "0") -> bool:
    value = (os.getenv(name) or default).strip().lower()
    return value in ("1", "true", "yes", "on")


def is_ci() -> bool:
    """Return True when a CI indicator is present.

    Any non-empty value counts, including ``"false"``; CI systems set the
    variable to arbitrary strings.
    """
    return bool(os.getenv("CI"))


__all__ = ["env_flag", "is_ci"]
