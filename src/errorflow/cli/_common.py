"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..analysis import ErrorAnalysisEngine, ProjectAnalysis
from ..config import AnalysisConfig, load_config
from ..exceptions import ErrorFlowError
from ..file_ops import discover_source_files
from ..formatters import BaseFormatter, RichFormatter, get_formatter
from ..logging_config import setup_logging

console = Console()

FORMATS = ("rich", "json")


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def make_formatter(fmt: str) -> BaseFormatter:
    if fmt == "rich":
        return RichFormatter(console)
    try:
        return get_formatter(fmt)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--format")


def run_analysis(
    path: Path,
    config_file: Optional[Path],
    workers: Optional[int],
    exclude: Optional[list[str]],
    verbose: bool,
    quiet: bool,
) -> tuple[ErrorAnalysisEngine, ProjectAnalysis]:
    """Load config, discover files under ``path`` and analyze them.

    Logging follows ``config.verbosity``, which the --verbose and --quiet
    flags override. Exits with code 1 on configuration or discovery errors.
    """
    try:
        config = resolve_config(config_file, workers, verbose, quiet)
    except ErrorFlowError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    setup_logging(verbose=config.verbosity == "verbose", quiet=config.verbosity == "quiet")
    try:
        files = discover_source_files(path, config, extra_excludes=exclude)
    except ErrorFlowError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    engine = ErrorAnalysisEngine(config)
    return engine, engine.analyze(files, root=path)
