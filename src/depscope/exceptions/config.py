"""Configuration errors: unusable source roots and bad settings."""

from pathlib import Path
from typing import Any

from .base import DepscopeError


class ConfigurationError(DepscopeError):
    """Base class for configuration-related errors."""


class InvalidPathError(ConfigurationError):
    """The path given as a source root cannot be scanned."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot scan {path}", details={"reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A setting has a value AnalysisConfig does not accept."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for '{key}': {value!r}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
