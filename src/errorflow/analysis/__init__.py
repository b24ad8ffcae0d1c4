"""Error-flow analysis: classification, site collection, aggregation, coverage."""

from .aggregator import FlowAggregator
from .classifier import (
    ErrorClassifier,
    ExactMatcher,
    SubstringMatcher,
    SupertypeMatcher,
)
from .collector import CollectedSites, SiteCollector
from .coverage import CoverageCalculator
from .engine import ErrorAnalysisEngine
from .models import (
    CoverageReport,
    ErrorCoverageDetail,
    ErrorFlow,
    ErrorSite,
    ErrorTypeInfo,
    FileErrorReport,
    ProjectAnalysis,
    SiteKind,
    SourceLocation,
)

__all__ = [
    "ErrorAnalysisEngine",
    "ErrorClassifier",
    "SupertypeMatcher",
    "SubstringMatcher",
    "ExactMatcher",
    "SiteCollector",
    "CollectedSites",
    "FlowAggregator",
    "CoverageCalculator",
    "SourceLocation",
    "ErrorTypeInfo",
    "ErrorSite",
    "SiteKind",
    "FileErrorReport",
    "ErrorFlow",
    "ErrorCoverageDetail",
    "CoverageReport",
    "ProjectAnalysis",
]
