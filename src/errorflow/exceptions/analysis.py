"""Analysis-related exceptions: unavailable sources and unknown targets."""

from pathlib import Path
from typing import Union

from .base import ErrorFlowError


class AnalysisError(ErrorFlowError):
    """Base class for analysis-related errors."""
    pass


class SourceUnavailable(AnalysisError):
    """Raised when a source file cannot be read or parsed.

    Fatal for that one file only. The engine turns it into the file's
    ``failure`` field and keeps going.
    """

    def __init__(self, filepath: Union[Path, str], reason: str):
        super().__init__(
            f"Source unavailable: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class UnknownTarget(AnalysisError):
    """Raised when a traced error name has no declaration and no raise site."""

    def __init__(self, error_name: str, files_scanned: int = 0):
        super().__init__(
            f"Error not found: {error_name}",
            details={"error": error_name, "files_scanned": str(files_scanned)},
        )
        self.error_name = error_name
        self.files_scanned = files_scanned
