"""
errorflow - error-flow and interception coverage for TypeScript/JavaScript

Finds declared error classes, the places that raise them and the catch
clauses that intercept them, then reports which raised errors are never
intercepted.
"""

__version__ = "0.1.0"

from .analysis import (
    CoverageReport,
    ErrorAnalysisEngine,
    ErrorFlow,
    ErrorSite,
    ErrorTypeInfo,
    FileErrorReport,
    SiteKind,
    SourceLocation,
)
from .config import AnalysisConfig, load_config

__all__ = [
    "ErrorAnalysisEngine",
    "AnalysisConfig",
    "load_config",
    "SourceLocation",
    "ErrorTypeInfo",
    "ErrorSite",
    "SiteKind",
    "FileErrorReport",
    "ErrorFlow",
    "CoverageReport",
]
