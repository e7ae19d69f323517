"""Diagram command: Mermaid text only, optionally scoped by keyword."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..config import DIAGRAM_DIRECTIONS
from ..exceptions import DepscopeError
from . import app
from ._common import analyze_path, console, resolve_config, write_output


@app.command()
def diagram(
    path: Path = typer.Argument(
        Path("."),
        help="Root directory of the C/C++ sources",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    keyword: Optional[str] = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Only draw components whose name contains this, plus what they depend on",
    ),
    direction: Optional[str] = typer.Option(
        None,
        "--direction",
        "-d",
        help="Flowchart direction",
        click_type=click.Choice(DIAGRAM_DIRECTIONS, case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the diagram to this file instead of stdout",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Hide warnings such as unresolved includes"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Print the Mermaid flowchart of the reduced component graph.

    [bold cyan]Examples:[/bold cyan]

      depscope diagram src/ > deps.mmd

      depscope diagram src/ --keyword net --direction TB
    """
    try:
        settings = resolve_config(
            config=config,
            verbose=verbose,
            quiet=quiet,
            keyword=keyword,
            diagram_direction=direction.upper() if direction else None,
        )
        analyzer = analyze_path(path, settings)
        write_output(analyzer.render_diagram(settings.keyword), output)

    except DepscopeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
