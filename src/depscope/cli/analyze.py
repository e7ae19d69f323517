"""Main analysis command: dependency listing, components, layers and diagram."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..exceptions import DepscopeError
from ..formatters import FORMATTERS, RichFormatter, get_formatter
from . import app
from ._common import analyze_path, console, resolve_config, split_list, write_output


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Map include dependencies between modules, collapse circular clusters and
    print a build-order layering with a Mermaid diagram.

    [bold cyan]Examples:[/bold cyan]

      depscope analyze src/

      depscope analyze src/ --format json > deps.json

      depscope diagram src/ --keyword network
    """
    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]depscope[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    typer.echo(ctx.get_help())


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Root directory of the C/C++ sources",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    fmt: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text, rich, json or mermaid",
        click_type=click.Choice(sorted(FORMATTERS), case_sensitive=False),
    ),
    keyword: Optional[str] = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Only diagram components whose name contains this, plus what they depend on",
    ),
    extensions: Optional[str] = typer.Option(
        None,
        "--extensions",
        "-e",
        help="Comma-separated file suffixes to scan (e.g. .cpp,.h)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to this file instead of stdout",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log unresolved includes and pipeline details",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Hide warnings such as unresolved includes",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
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
    Analyze a source tree: module dependencies, circular clusters, layers.

    [bold cyan]Examples:[/bold cyan]

      depscope analyze src/

      depscope analyze . --format rich

      depscope analyze . --keyword parser --output deps.md
    """
    try:
        settings = resolve_config(
            config=config,
            verbose=verbose,
            quiet=quiet,
            log_file=log_file,
            keyword=keyword,
            extensions=split_list(extensions),
        )
        analyzer = analyze_path(path, settings)

        formatter = get_formatter(fmt.lower())
        if output is None and isinstance(formatter, RichFormatter):
            formatter.console = console
            formatter.render(analyzer, settings.keyword)
        else:
            write_output(formatter.format(analyzer, settings.keyword), output)

        if output is not None and settings.verbosity != "quiet":
            console.print(f"[green]Report written to[/green] {output}")

    except DepscopeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
