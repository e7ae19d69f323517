"""JSON formatter for depscope."""

import json

from ..graph.engine import DependencyAnalyzer
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the analysis as JSON, diagram included."""

    def render(self, analyzer: DependencyAnalyzer, keyword: str = "") -> None:
        print(self.format(analyzer, keyword))

    def format(self, analyzer: DependencyAnalyzer, keyword: str = "") -> str:
        data = analyzer.to_dict()
        data["keyword"] = keyword
        data["diagram"] = analyzer.render_diagram(keyword)
        return json.dumps(data, indent=2)
