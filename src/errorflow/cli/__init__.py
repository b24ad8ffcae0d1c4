"""CLI entry point. Registers all subcommands."""

import typer

from .. import __version__

app = typer.Typer(
    name="errorflow",
    help=f"errorflow {__version__} - error flow and interception coverage",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def main() -> None:
    app()


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .trace import trace as _trace  # noqa: F401, E402
from .coverage import coverage as _coverage  # noqa: F401, E402
