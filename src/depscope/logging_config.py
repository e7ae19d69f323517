"""
Logging setup for depscope.

Diagnostics (unresolved includes, scan limits, pipeline summaries) go to a
rich handler on stderr. Reports and diagram text own stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "depscope"

# AnalysisConfig.verbosity -> level of the depscope logger
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route depscope logging through rich, at the level ``verbosity`` names.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings) or "verbose"
            (debug, with timestamps and source locations)
        log_file: Optional file that receives the same records as plain text

    Returns:
        The ``depscope`` logger
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.WARNING)
    verbose = level <= logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    # force=True: each CLI invocation replaces the handlers of the previous one
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger inside the ``depscope`` namespace.

    Package modules pass ``__name__``, which is already namespaced; any
    other name is nested under ``depscope.``.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
