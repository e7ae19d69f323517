"""Rich terminal formatter for depscope."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..graph.engine import DependencyAnalyzer
from .base import BaseFormatter


class RichFormatter(BaseFormatter):
    """Summary panel, component and layer tables, then the diagram."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, analyzer: DependencyAnalyzer, keyword: str = "") -> None:
        self._print_summary(analyzer)
        self._print_cycles(analyzer)
        self._print_layers(analyzer)
        self._print_diagram(analyzer, keyword)

    def format(self, analyzer: DependencyAnalyzer, keyword: str = "") -> str:
        with self.console.capture() as capture:
            self.render(analyzer, keyword)
        return capture.get()

    def _print_summary(self, analyzer: DependencyAnalyzer) -> None:
        edge_count = sum(len(d) for d in analyzer.module_dependencies.values())
        unresolved = sum(len(h) for h in analyzer.unresolved_includes.values())
        cycle_count = len(analyzer.cycles)
        cycles = f"[red]{cycle_count}[/red]" if cycle_count else str(cycle_count)
        lines = [
            f"Files:        [bold]{len(analyzer.records)}[/bold]",
            f"Modules:      [bold]{len(analyzer.module_dependencies)}[/bold]",
            f"Module edges: [bold]{edge_count}[/bold]",
            f"Components:   [bold]{len(analyzer.components)}[/bold]",
            f"Cycles:       [bold]{cycles}[/bold]",
            f"Layers:       [bold]{analyzer.layer_count}[/bold]",
        ]
        if unresolved:
            lines.append(f"Unresolved:   [yellow]{unresolved}[/yellow] includes")
        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]depscope[/bold cyan]", expand=False)
        )

    def _print_cycles(self, analyzer: DependencyAnalyzer) -> None:
        if not analyzer.cycles:
            return
        title = "Circular dependency clusters"
        table = Table(title=title, min_width=len(title) + 4, show_lines=False)
        table.add_column("SCC", justify="right", style="cyan")
        table.add_column("Modules")
        table.add_column("Depth", justify="right")
        for component in analyzer.cycles:
            table.add_row(
                str(component.index),
                escape(", ".join(component.members)),
                str(analyzer.depth_map[component.index]),
            )
        self.console.print(table)

    def _print_layers(self, analyzer: DependencyAnalyzer) -> None:
        if not analyzer.layers:
            self.console.print("[dim]No modules found.[/dim]")
            return
        names = analyzer.component_names
        title = "Layers (leaf layer first)"
        table = Table(title=title, min_width=len(title) + 4)
        table.add_column("Depth", justify="right", style="cyan")
        table.add_column("Components")
        for depth, nodes in analyzer.layers.items():
            table.add_row(str(depth), escape("\n".join(names[n] for n in nodes)))
        self.console.print(table)

    def _print_diagram(self, analyzer: DependencyAnalyzer, keyword: str) -> None:
        title = "Mermaid" if not keyword else f"Mermaid (keyword: {escape(keyword)})"
        self.console.print(
            Panel(
                Syntax(analyzer.render_diagram(keyword), "text", word_wrap=True),
                title=title,
                expand=False,
            )
        )
