"""Analysis-related exceptions: file access, graph bookkeeping."""

from pathlib import Path
from typing import Dict, Optional

from .base import DepscopeError


class AnalysisError(DepscopeError):
    """Base class for errors raised while scanning or analyzing a tree."""


class FileAccessError(AnalysisError):
    """A source file could not be opened or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot read {filepath}", details={"reason": reason})
        self.filepath = filepath
        self.reason = reason


class GraphInvariantError(AnalysisError):
    """Raised when derived graph structures disagree with each other.

    This always points at a bookkeeping bug in the pipeline, never at bad
    input, so callers should not try to recover from it.
    """

    def __init__(self, invariant: str, reason: str, subject: Optional[str] = None):
        details: Dict[str, str] = {"invariant": invariant}
        if subject is not None:
            details["subject"] = subject

        super().__init__(f"Graph invariant violated: {reason}", details=details)
        self.invariant = invariant
        self.reason = reason
        self.subject = subject
