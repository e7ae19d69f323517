"""Plain-text report: dependency listing, components, layers, diagram."""

from ..graph.engine import DependencyAnalyzer
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Markdown-friendly plain text, suitable for files and CI logs."""

    def render(self, analyzer: DependencyAnalyzer, keyword: str = "") -> None:
        print(self.format(analyzer, keyword), end="")

    def format(self, analyzer: DependencyAnalyzer, keyword: str = "") -> str:
        out: list[str] = []

        out.append("Module Dependencies:\n")
        for module, deps in analyzer.module_dependencies.items():
            out.append(f"{module} depends on:")
            for dep in sorted(deps):
                out.append(f"  {dep}")
        out.append("")

        out.append("Strongly Connected Components:\n")
        for component in analyzer.components:
            members = " ".join(component.members)
            out.append(f"SCC[{component.index}]({component.name}): {members}")
        out.append("")

        out.append("Topological Layers (fewer dependencies on top):\n")
        names = analyzer.component_names
        for depth, nodes in analyzer.layers.items():
            for node in nodes:
                out.append(f"[{depth}]: {names[node]}")
        out.append("")

        out.append("Mermaid Graph Syntax:\n")
        out.append("```mermaid")
        out.append(analyzer.render_diagram(keyword).rstrip("\n"))
        out.append("```")
        out.append("")

        out.append(f"Max Graph Depth: {analyzer.layer_count}")
        unresolved = sum(len(h) for h in analyzer.unresolved_includes.values())
        if unresolved:
            out.append(f"Unresolved includes: {unresolved}")

        return "\n".join(out) + "\n"
