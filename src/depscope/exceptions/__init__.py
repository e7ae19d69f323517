"""Exception hierarchy for depscope."""

from .analysis import AnalysisError, FileAccessError, GraphInvariantError
from .base import DepscopeError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "DepscopeError",
    "AnalysisError",
    "FileAccessError",
    "GraphInvariantError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
