"""Base formatter interface for depscope report rendering."""

from abc import ABC, abstractmethod

from ..graph.engine import DependencyAnalyzer


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, analyzer: DependencyAnalyzer, keyword: str = "") -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, analyzer: DependencyAnalyzer, keyword: str = "") -> str:
        """Return the report as a string."""
