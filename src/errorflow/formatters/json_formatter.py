"""JSON formatter for errorflow, used for archival and machine consumers."""

import json

from ..analysis.models import CoverageReport, ErrorFlow, ProjectAnalysis
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render results as indented JSON with stable key order."""

    def format_files(self, analysis: ProjectAnalysis) -> str:
        return json.dumps(analysis.to_dict(), indent=2)

    def format_flow(self, flow: ErrorFlow) -> str:
        return json.dumps(flow.to_dict(), indent=2)

    def format_coverage(self, report: CoverageReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
