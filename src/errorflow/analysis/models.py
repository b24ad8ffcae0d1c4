"""Data models for error-flow analysis.

Per-file values (declarations, raise sites, intercept sites) are produced by
the classifier and collector. ``ErrorFlow`` and ``CoverageReport`` are derived
from them on demand and never stored independently.

Every model is immutable. File collections on derived models are tuples
de-duplicated in file-iteration order, so two runs over the same inputs
produce identical values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class SiteKind(Enum):
    """Classification tag of an error site."""

    RAISED = "raised"  # throw new X()
    RERAISED = "re-raised"  # throw err
    INTERCEPTED = "intercepted"  # catch clause


@dataclass(frozen=True)
class SourceLocation:
    """A single syntactic occurrence: file plus 1-indexed line."""

    file: str
    line: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be positive, got {self.line}")

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line}


@dataclass(frozen=True)
class ErrorTypeInfo:
    """A declared error-like type.

    Attributes:
        name: Declared class name
        supertype_name: Text of the extends target (``CustomError<T>``)
        location: Where the declaration starts
    """

    name: str
    supertype_name: str
    location: SourceLocation

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "supertype": self.supertype_name,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class ErrorSite:
    """A raise statement or an intercept clause.

    ``name`` is best-effort: the constructor for a fresh raise, the bare
    identifier for a re-raise, the tested type (or the caught variable's
    declared type) for an intercept.
    """

    name: str
    kind: SiteKind
    location: SourceLocation

    @property
    def is_raise(self) -> bool:
        return self.kind in (SiteKind.RAISED, SiteKind.RERAISED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class FileErrorReport:
    """Everything found in one file, or why the file was skipped.

    Attributes:
        path: Display path of the file (relative to the analysis root)
        defined: Error declarations, in source order
        raised: Raise sites (``raised`` and ``re-raised``), in source order
        intercepted: Intercept sites, in source order
        unclassified_raises: Raise statements whose expression is neither a
            construction nor a bare identifier (no site emitted)
        failure: Reason the file was unavailable; None on success
    """

    path: str
    defined: tuple[ErrorTypeInfo, ...] = ()
    raised: tuple[ErrorSite, ...] = ()
    intercepted: tuple[ErrorSite, ...] = ()
    unclassified_raises: int = 0
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def is_empty(self) -> bool:
        return not (self.defined or self.raised or self.intercepted)

    @classmethod
    def unavailable(cls, path: str, reason: str) -> FileErrorReport:
        return cls(path=path, failure=reason)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "defined": [d.to_dict() for d in self.defined],
            "raised": [s.to_dict() for s in self.raised],
            "intercepted": [s.to_dict() for s in self.intercepted],
            "unclassified_raises": self.unclassified_raises,
        }
        if self.failure is not None:
            data["failure"] = self.failure
        return data


@dataclass(frozen=True)
class ErrorFlow:
    """Where one error type is defined, raised and intercepted.

    Invariant: ``unguarded_in`` is ``raised_in`` minus ``intercepted_in``
    and therefore a subset of ``raised_in``.

    Attributes:
        error_name: Traced error name
        defined_in: File of the first declaration found, None when the type
            is not declared in the analyzed files
        raised_in: Files raising it
        intercepted_in: Files with an intercept site naming it exactly
        unguarded_in: Raising files that do not intercept it themselves
        duplicate_definitions: Other files declaring the same name
    """

    error_name: str
    defined_in: Optional[str]
    raised_in: tuple[str, ...] = ()
    intercepted_in: tuple[str, ...] = ()
    unguarded_in: tuple[str, ...] = ()
    duplicate_definitions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not set(self.unguarded_in) <= set(self.raised_in):
            raise ValueError("unguarded_in must be a subset of raised_in")

    @property
    def is_intercepted(self) -> bool:
        return bool(self.intercepted_in)

    @property
    def coverage_ratio(self) -> float:
        """Intercepting files per raising file, as a percentage.

        Zero when nothing raises the error.
        """
        if not self.raised_in:
            return 0.0
        return 100.0 * len(self.intercepted_in) / len(self.raised_in)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_name,
            "defined_in": self.defined_in,
            "raised_in": list(self.raised_in),
            "intercepted_in": list(self.intercepted_in),
            "unguarded_in": list(self.unguarded_in),
            "duplicate_definitions": list(self.duplicate_definitions),
        }


@dataclass(frozen=True)
class ErrorCoverageDetail:
    """Coverage of one declared error type."""

    error_name: str
    coverage_ratio: float  # percent, 0 when never raised
    risky_files: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_name,
            "coverage": self.coverage_ratio,
            "risky_files": list(self.risky_files),
        }


@dataclass(frozen=True)
class CoverageReport:
    """Project-wide interception coverage of declared error types.

    ``per_error_detail`` follows declaration-discovery order.
    """

    total_error_types: int
    intercepted_error_type_count: int
    unintercepted_error_type_count: int
    overall_percentage: int
    per_error_detail: tuple[ErrorCoverageDetail, ...] = field(default_factory=tuple)

    def risky_errors(self) -> list[ErrorCoverageDetail]:
        """Details of error types raised somewhere without a local intercept."""
        return [d for d in self.per_error_detail if d.risky_files]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_errors": self.total_error_types,
            "covered_errors": self.intercepted_error_type_count,
            "uncovered_errors": self.unintercepted_error_type_count,
            "percentage": self.overall_percentage,
            "details": [d.to_dict() for d in self.per_error_detail],
        }


@dataclass(frozen=True)
class ProjectAnalysis:
    """Per-file results of one analysis run, in file-iteration order."""

    files: tuple[FileErrorReport, ...] = ()

    @property
    def analyzed(self) -> list[FileErrorReport]:
        return [f for f in self.files if f.ok]

    @property
    def skipped(self) -> list[FileErrorReport]:
        return [f for f in self.files if not f.ok]

    def get(self, path: str) -> Optional[FileErrorReport]:
        for report in self.files:
            if report.path == path:
                return report
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "skipped": [{"path": f.path, "reason": f.failure} for f in self.skipped],
        }
