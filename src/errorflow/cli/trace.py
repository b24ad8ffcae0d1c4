"""Single-error command: where one error is defined, raised and intercepted."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import UnknownTarget
from . import app
from ._common import console, make_formatter, run_analysis


@app.command()
def trace(
    error_name: str = typer.Argument(..., help="Name of the error class to trace"),
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
    Trace one error type through the codebase.

    Exits with code 1 when no file declares or raises the error.

    [bold cyan]Examples:[/bold cyan]

      errorflow trace LoginError

      errorflow trace LoginError src/ --format json
    """
    formatter = make_formatter(fmt)
    engine, analysis = run_analysis(path, config, workers, exclude, verbose, quiet)

    try:
        flow = engine.trace(analysis, error_name)
    except UnknownTarget as e:
        if fmt == "json":
            typer.echo(json.dumps({"error": e.error_name, "found": False}, indent=2))
        else:
            console.print(
                f"[yellow]Not found:[/yellow] no declaration or raise of "
                f"[bold]{escape(e.error_name)}[/bold] in {e.files_scanned} file(s)"
            )
        raise typer.Exit(code=1)

    if fmt == "json":
        typer.echo(formatter.format_flow(flow))
    else:
        formatter.render_flow(flow)
