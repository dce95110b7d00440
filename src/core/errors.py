from __future__ import annotations

class UserFacingError(Exception):
    """Base exception carrying user-presentable context."""

    def __init__(self, message: str, *, title: str, remediation: str | None = None) -> None:
        super().__init__(message)
        self.title = title
        self.remediation = remediation or ""


class InvalidLogLevelError(UserFacingError):
    pass


class ServerBindError(UserFacingError):
    pass


__all__ = [
    "UserFacingError",
    "InvalidLogLevelError",
    "ServerBindError",
]
