"""Root of the depscope error hierarchy."""

from typing import Mapping, Optional


class DepscopeError(Exception):
    """Base exception for all depscope errors.

    ``details`` carries short key/value context (a path, a config key, the
    graph invariant involved). Values are stored as strings and appended to
    the message when the error is printed.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, object]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
