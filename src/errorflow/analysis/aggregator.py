"""Flow aggregator: joins per-file results into one ErrorFlow per error name.

Matching is by bare name across the whole file set, with no module scoping:
    - raise sites match when their name contains the target
      (``errors.LoginError`` matches ``LoginError``)
    - intercept sites match when their name equals the target
    - the first declaration in file-iteration order defines the type; any
      later declaration of the same name is listed in
      ``duplicate_definitions`` instead of silently discarded
    - unnamed declarations (``export default class extends Error``) stay in
      the per-file reports but are not error types of their own
"""

from __future__ import annotations

from typing import Iterable, Optional

from .classifier import ANONYMOUS_ERROR_NAME
from .models import ErrorFlow, ErrorTypeInfo, FileErrorReport


def _ordered_unique(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class FlowAggregator:
    """Pure, re-derivable view over the per-file reports of one run.

    Reports that carry a failure contribute nothing.
    """

    def __init__(self, reports: Iterable[FileErrorReport]) -> None:
        self._reports = tuple(r for r in reports if r.ok)

    @property
    def reports(self) -> tuple[FileErrorReport, ...]:
        return self._reports

    def declarations(self) -> list[ErrorTypeInfo]:
        """All error declarations in discovery order."""
        return [info for report in self._reports for info in report.defined]

    def declared_names(self) -> list[str]:
        """Named error declarations, de-duplicated, in discovery order."""
        return list(
            _ordered_unique(
                info.name for info in self.declarations() if info.name != ANONYMOUS_ERROR_NAME
            )
        )

    def exists(self, error_name: str) -> bool:
        """True when the name has a declaration or a matching raise site."""
        for report in self._reports:
            if any(info.name == error_name for info in report.defined):
                return True
            if any(error_name in site.name for site in report.raised):
                return True
        return False

    def trace(self, error_name: str) -> ErrorFlow:
        """Build the flow of ``error_name``. Performs no I/O."""
        defining: list[str] = []
        raised_in: list[str] = []
        intercepted_in: list[str] = []

        for report in self._reports:
            if any(info.name == error_name for info in report.defined):
                defining.append(report.path)
            if any(error_name in site.name for site in report.raised):
                raised_in.append(report.path)
            if any(site.name == error_name for site in report.intercepted):
                intercepted_in.append(report.path)

        defining_files = _ordered_unique(defining)
        defined_in: Optional[str] = defining_files[0] if defining_files else None
        raised = _ordered_unique(raised_in)
        intercepted = _ordered_unique(intercepted_in)
        intercepted_set = set(intercepted)

        return ErrorFlow(
            error_name=error_name,
            defined_in=defined_in,
            raised_in=raised,
            intercepted_in=intercepted,
            unguarded_in=tuple(path for path in raised if path not in intercepted_set),
            duplicate_definitions=defining_files[1:],
        )

    def flows(self) -> list[ErrorFlow]:
        """One flow per declared error name, in discovery order."""
        return [self.trace(name) for name in self.declared_names()]
