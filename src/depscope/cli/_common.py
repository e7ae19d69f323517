"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config
from ..graph.engine import DependencyAnalyzer
from ..logging_config import setup_logging
from ..scanning.scanner import IncludeScanner

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    **overrides,
) -> AnalysisConfig:
    """Build configuration from CLI options and configure logging to match.

    Flags only override when set, so ``verbosity`` from a config file or
    ``DEPSCOPE_VERBOSITY`` applies unless ``-v``/``-q`` is given.
    """
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    settings = load_config(config_file=config, **overrides)
    setup_logging(settings.verbosity, log_file=str(log_file) if log_file else None)
    return settings


def analyze_path(path: Path, settings: AnalysisConfig) -> DependencyAnalyzer:
    """Scan ``path`` and run the dependency pipeline over what was found."""
    records = IncludeScanner(str(path), settings).scan()
    return DependencyAnalyzer(records, settings)


def write_output(text: str, output: Optional[Path]) -> None:
    """Write ``text`` to ``output`` if given, else to stdout."""
    if output is None:
        print(text, end="" if text.endswith("\n") else "\n")
        return
    output.write_text(text, encoding="utf-8")


def split_list(value: Optional[str]) -> Optional[List[str]]:
    """Parse a comma-separated CLI value; None stays None."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]
