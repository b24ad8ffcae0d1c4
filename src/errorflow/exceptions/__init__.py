"""Exception hierarchy for errorflow."""

from .analysis import AnalysisError, SourceUnavailable, UnknownTarget
from .base import ErrorFlowError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "ErrorFlowError",
    "AnalysisError",
    "SourceUnavailable",
    "UnknownTarget",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
