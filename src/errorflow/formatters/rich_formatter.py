"""Rich terminal formatter for errorflow."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.models import CoverageReport, ErrorFlow, FileErrorReport, ProjectAnalysis
from .base import BaseFormatter


def _coverage_style(value: float) -> str:
    if value >= 80:
        return "green"
    elif value >= 50:
        return "yellow"
    else:
        return "red"


class RichFormatter(BaseFormatter):
    """Panels, lists and tables for the terminal."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def format_files(self, analysis: ProjectAnalysis) -> str:
        with self.console.capture() as capture:
            self.render_files(analysis)
        return capture.get()

    def format_flow(self, flow: ErrorFlow) -> str:
        with self.console.capture() as capture:
            self.render_flow(flow)
        return capture.get()

    def format_coverage(self, report: CoverageReport) -> str:
        with self.console.capture() as capture:
            self.render_coverage(report)
        return capture.get()

    # ── files ─────────────────────────────────────────────────────

    def render_files(self, analysis: ProjectAnalysis) -> None:
        out = self.console
        for report in analysis.analyzed:
            if report.is_empty:
                continue
            self._print_file(report)

        if analysis.skipped:
            out.print("[bold yellow]Skipped files[/bold yellow]")
            for report in analysis.skipped:
                out.print(f"  [yellow]![/yellow] {escape(report.path)}: {escape(report.failure or '')}")
            out.print()

        out.print(
            f"[dim]{len(analysis.analyzed)} file(s) analyzed, "
            f"{len(analysis.skipped)} skipped[/dim]"
        )

    def _print_file(self, report: FileErrorReport) -> None:
        table = Table(show_header=True, header_style="bold", expand=False, box=None)
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Kind")
        table.add_column("Name", style="cyan")

        rows = [(d.location.line, "defined", f"{d.name} extends {d.supertype_name}") for d in report.defined]
        rows += [(s.location.line, s.kind.value, s.name) for s in report.raised]
        rows += [(s.location.line, s.kind.value, s.name) for s in report.intercepted]
        for line, kind, name in sorted(rows, key=lambda row: row[0]):
            table.add_row(str(line), kind, escape(name))

        self.console.print(Panel(table, title=f"[bold]{escape(report.path)}[/bold]", expand=False))

    # ── single error ──────────────────────────────────────────────

    def render_flow(self, flow: ErrorFlow) -> None:
        out = self.console
        out.print(f"[bold cyan]Error Flow: {escape(flow.error_name)}[/bold cyan]")
        out.print()
        defined = escape(flow.defined_in) if flow.defined_in else "[dim](not found)[/dim]"
        out.print(f"[bold]Defined in:[/bold] {defined}")
        for path in flow.duplicate_definitions:
            out.print(f"  [yellow]also declared in[/yellow] {escape(path)}")
        out.print()

        if flow.raised_in:
            out.print("[bold]Raised in[/bold]")
            for path in flow.raised_in:
                out.print(f"  • {escape(path)}")
            out.print()

        if flow.intercepted_in:
            out.print("[bold]Intercepted in[/bold]")
            for path in flow.intercepted_in:
                out.print(f"  [green]✓[/green] {escape(path)}")
            out.print()

        if flow.unguarded_in:
            out.print("[bold red]Not intercepted in (risky)[/bold red]")
            for path in flow.unguarded_in:
                out.print(f"  [red]⚠[/red] {escape(path)}")
        else:
            out.print("[green]All raises are intercepted.[/green]")
        out.print()

    # ── coverage ──────────────────────────────────────────────────

    def render_coverage(self, report: CoverageReport) -> None:
        out = self.console
        style = _coverage_style(report.overall_percentage)
        summary = (
            f"Total errors: [bold]{report.total_error_types}[/bold]\n"
            f"Covered: [green]{report.intercepted_error_type_count}[/green]\n"
            f"Uncovered: [red]{report.unintercepted_error_type_count}[/red]\n"
            f"Coverage: [{style}]{report.overall_percentage}%[/{style}]"
        )
        out.print(Panel(summary, title="[bold cyan]Error Coverage Report[/bold cyan]", expand=False))

        if report.per_error_detail:
            table = Table(title="Error Details", show_header=True, header_style="bold")
            table.add_column("Error", style="cyan")
            table.add_column("Coverage", justify="right")
            table.add_column("Risky Files", justify="right")
            for detail in report.per_error_detail:
                detail_style = _coverage_style(detail.coverage_ratio)
                table.add_row(
                    escape(detail.error_name),
                    f"[{detail_style}]{round(detail.coverage_ratio)}%[/{detail_style}]",
                    str(len(detail.risky_files)),
                )
            out.print(table)

        out.print()
        out.print("[bold]Recommendations[/bold]")
        risky = report.risky_errors()
        if risky:
            for detail in risky:
                out.print(
                    f"  [yellow]⚠[/yellow] {escape(detail.error_name)} is not intercepted "
                    f"in {len(detail.risky_files)} file(s)"
                )
        else:
            out.print("  [green]Every raised error type is intercepted where it is raised.[/green]")
        out.print()
