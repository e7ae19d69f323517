"""Diagram-only formatter: raw Mermaid text, ready to paste or pipe."""

from ..graph.engine import DependencyAnalyzer
from .base import BaseFormatter


class MermaidFormatter(BaseFormatter):
    def render(self, analyzer: DependencyAnalyzer, keyword: str = "") -> None:
        print(self.format(analyzer, keyword), end="")

    def format(self, analyzer: DependencyAnalyzer, keyword: str = "") -> str:
        return analyzer.render_diagram(keyword)
