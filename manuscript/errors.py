from __future__ import annotations

from typing import Optional


class ManuscriptError(Exception):
    """Base class for errors that abort a manuscript command."""


class ConfigError(ManuscriptError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path and self.path not in message:
            return f"{self.path}: {message}"
        return message


class DeviceError(ManuscriptError):
    """No booted simulator, no matching window, or simctl failed."""


class AdapterUnavailableError(ManuscriptError):
    """The accessibility tree cannot be reached at all."""
