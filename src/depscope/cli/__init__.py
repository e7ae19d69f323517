"""CLI entry point, registers all subcommands."""

import typer

app = typer.Typer(
    name="depscope",
    help="depscope - include-graph layering and circular dependency finder for C/C++ trees",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import main as _main_callback  # noqa: F401, E402
from .analyze import analyze as _analyze  # noqa: F401, E402
from .diagram import diagram as _diagram  # noqa: F401, E402
