"""ErrorAnalysisEngine: runs the pipeline over a set of source files.

    SourceIndex -> (ErrorClassifier, SiteCollector) per file, in parallel
                -> join -> FlowAggregator -> CoverageCalculator

Per-file work is independent and runs on a thread pool. Results are
gathered in input order, so aggregation never depends on completion order.
A file that cannot be read or parsed yields a FileErrorReport with
``failure`` set; it never aborts the run.

Usage:
    engine = ErrorAnalysisEngine(config)
    analysis = engine.analyze(paths, root=repo_root)
    flow = engine.trace(analysis, "LoginError")
    report = engine.coverage(analysis)
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from ..config import AnalysisConfig
from ..exceptions import SourceUnavailable, UnknownTarget
from ..scanning.source_index import SourceIndex
from .aggregator import FlowAggregator
from .classifier import ErrorClassifier, matcher_from_config
from .collector import SiteCollector
from .coverage import CoverageCalculator
from .models import CoverageReport, ErrorFlow, FileErrorReport, ProjectAnalysis

logger = logging.getLogger(__name__)

# Default worker count: use CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# Below this many files the pool costs more than it saves
_PARALLEL_THRESHOLD = 10


def _path_key(path: Path) -> Path:
    """Resolved path, or the absolute path when it cannot be resolved."""
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(path))


def display_path(path: Path, root: Optional[Path]) -> str:
    """Path relative to ``root`` in POSIX form, or the path as given."""
    if root is not None:
        try:
            return _path_key(path).relative_to(_path_key(root)).as_posix()
        except ValueError:
            pass
    return Path(path).as_posix()


class ErrorAnalysisEngine:
    """Coordinates parsing, per-file extraction and project-wide aggregation.

    The engine owns one SourceIndex, so repeated runs in the same process
    reuse parsed trees.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        index: Optional[SourceIndex] = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.index = index or SourceIndex(self.config)
        self.classifier = ErrorClassifier(matcher_from_config(self.config))
        self.collector = SiteCollector(
            self.index.parser, implicit_catch_type=self.config.implicit_catch_type
        )
        self._max_workers = self.config.workers or _DEFAULT_WORKERS

    def analyze_file(self, path: Path, root: Optional[Path] = None) -> FileErrorReport:
        """Classify and collect one file. Never raises for file problems."""
        shown = display_path(path, root)
        try:
            parsed = self.index.get(path)
        except SourceUnavailable as e:
            return FileErrorReport.unavailable(shown, e.reason)

        defined = self.classifier.classify(parsed, shown)
        sites = self.collector.collect(parsed, shown)
        return FileErrorReport(
            path=shown,
            defined=tuple(defined),
            raised=tuple(sites.raised),
            intercepted=tuple(sites.intercepted),
            unclassified_raises=sites.unclassified_raises,
        )

    def analyze(
        self,
        paths: Sequence[Path],
        root: Optional[Path] = None,
        parallel: bool = True,
    ) -> ProjectAnalysis:
        """Analyze every path and return per-file results in input order.

        Duplicate paths are analyzed once. Skipped files are logged at
        WARNING and kept in the result with their failure reason.
        """
        unique: list[Path] = []
        seen: set[Path] = set()
        for path in paths:
            key = _path_key(path)
            if key not in seen:
                seen.add(key)
                unique.append(Path(path))

        if not parallel or len(unique) < _PARALLEL_THRESHOLD or self._max_workers == 1:
            reports = [self.analyze_file(p, root) for p in unique]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = [executor.submit(self.analyze_file, p, root) for p in unique]
                # join barrier: every file finishes before aggregation starts
                reports = [future.result() for future in futures]

        analysis = ProjectAnalysis(files=tuple(reports))
        for skipped in analysis.skipped:
            logger.warning(f"Skipped {skipped.path}: {skipped.failure}")
        logger.debug(
            f"Analyzed {len(analysis.analyzed)}/{len(reports)} files "
            f"({self.index.parse_count} parsed, {len(self.index)} cached)"
        )
        return analysis

    def aggregator(self, analysis: ProjectAnalysis) -> FlowAggregator:
        return FlowAggregator(analysis.files)

    def trace(self, analysis: ProjectAnalysis, error_name: str) -> ErrorFlow:
        """Flow of one error name.

        Raises:
            UnknownTarget: If no analyzed file declares or raises the name
        """
        aggregator = self.aggregator(analysis)
        if not aggregator.exists(error_name):
            raise UnknownTarget(error_name, files_scanned=len(aggregator.reports))
        return aggregator.trace(error_name)

    def coverage(self, analysis: ProjectAnalysis) -> CoverageReport:
        """Project-wide coverage of declared error types."""
        return CoverageCalculator(self.aggregator(analysis)).report()
