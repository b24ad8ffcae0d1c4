"""Base formatter interface for errorflow output rendering."""

from abc import ABC, abstractmethod

from ..analysis.models import CoverageReport, ErrorFlow, ProjectAnalysis


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    ``format_*`` returns the rendered text; ``render_*`` writes it out.
    """

    @abstractmethod
    def format_files(self, analysis: ProjectAnalysis) -> str:
        """Per-file declarations, raise sites and intercept sites."""

    @abstractmethod
    def format_flow(self, flow: ErrorFlow) -> str:
        """Where one error is defined, raised and intercepted."""

    @abstractmethod
    def format_coverage(self, report: CoverageReport) -> str:
        """Project-wide coverage summary."""

    def render_files(self, analysis: ProjectAnalysis) -> None:
        print(self.format_files(analysis))

    def render_flow(self, flow: ErrorFlow) -> None:
        print(self.format_flow(flow))

    def render_coverage(self, report: CoverageReport) -> None:
        print(self.format_coverage(report))
