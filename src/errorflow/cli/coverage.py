"""Coverage command: interception coverage of every declared error type."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import make_formatter, run_analysis


@app.command()
def coverage(
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
    fail_under: Optional[int] = typer.Option(
        None,
        "--fail-under",
        help="Exit with code 2 when overall coverage is below this percentage",
        min=0,
        max=100,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Report how many declared error types are intercepted anywhere.

    [bold cyan]Examples:[/bold cyan]

      errorflow coverage

      errorflow coverage src/ --format json > coverage.json

      errorflow coverage --fail-under 80
    """
    formatter = make_formatter(fmt)
    engine, analysis = run_analysis(path, config, workers, exclude, verbose, quiet)
    report = engine.coverage(analysis)

    if fmt == "json":
        typer.echo(formatter.format_coverage(report))
    else:
        formatter.render_coverage(report)

    if fail_under is not None and report.overall_percentage < fail_under:
        raise typer.Exit(code=2)
