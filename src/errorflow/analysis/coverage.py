"""Coverage calculator: reduces error flows to interception coverage.

Per error type:
    coverage_ratio = 100 * |intercepted_in| / |raised_in|, 0 if never raised

Project-wide:
    overall_percentage = round(100 * intercepted types / declared types),
    rounded half-up, 0 when nothing is declared

An error type counts as intercepted when any file intercepts it, wherever
it is raised. The ratio is a proxy for "is this error ever handled", not a
reachability guarantee, and can exceed 100 when more files intercept an
error than raise it.
"""

from __future__ import annotations

import math

from .aggregator import FlowAggregator
from .models import CoverageReport, ErrorCoverageDetail, ErrorFlow


def overall_percentage(intercepted: int, total: int) -> int:
    if total == 0:
        return 0
    return math.floor(100 * intercepted / total + 0.5)


class CoverageCalculator:
    """Builds a CoverageReport from a FlowAggregator."""

    def __init__(self, aggregator: FlowAggregator) -> None:
        self._aggregator = aggregator

    def report(self) -> CoverageReport:
        flows = self._aggregator.flows()
        return self.from_flows(flows)

    @staticmethod
    def from_flows(flows: list[ErrorFlow]) -> CoverageReport:
        total = len(flows)
        intercepted = sum(1 for flow in flows if flow.is_intercepted)

        details = tuple(
            ErrorCoverageDetail(
                error_name=flow.error_name,
                coverage_ratio=flow.coverage_ratio,
                risky_files=flow.unguarded_in,
            )
            for flow in flows
        )

        return CoverageReport(
            total_error_types=total,
            intercepted_error_type_count=intercepted,
            unintercepted_error_type_count=total - intercepted,
            overall_percentage=overall_percentage(intercepted, total),
            per_error_detail=details,
        )
