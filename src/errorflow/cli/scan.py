"""Per-file command: declarations, raise sites and intercept sites."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import make_formatter, run_analysis


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the codebase directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option("rich", "--format", "-f", help="Output format: rich or json"),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-e", help="Extra glob pattern to exclude (repeatable)"
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
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Parallel workers", min=1, max=32),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    List error declarations, raise sites and intercept sites per file.

    [bold cyan]Examples:[/bold cyan]

      errorflow scan src/

      errorflow scan . --format json > errors.json
    """
    formatter = make_formatter(fmt)
    _, analysis = run_analysis(path, config, workers, exclude, verbose, quiet)

    if fmt == "json":
        typer.echo(formatter.format_files(analysis))
    else:
        formatter.render_files(analysis)
