"""Tests for the formatters package."""

import json

import pytest
from rich.console import Console

from errorflow.analysis.models import (
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
from errorflow.formatters import JsonFormatter, RichFormatter, get_formatter


def _make_analysis():
    return ProjectAnalysis(
        files=(
            FileErrorReport(
                path="a.ts",
                defined=(ErrorTypeInfo("LoginError", "Error", SourceLocation("a.ts", 1)),),
            ),
            FileErrorReport(
                path="b.ts",
                raised=(ErrorSite("LoginError", SiteKind.RAISED, SourceLocation("b.ts", 5)),),
            ),
            FileErrorReport.unavailable("c.txt", "unsupported file type"),
        )
    )


def _make_flow(unguarded=("b.ts",)):
    return ErrorFlow(
        error_name="LoginError",
        defined_in="a.ts",
        raised_in=("b.ts",),
        intercepted_in=("c.ts",),
        unguarded_in=unguarded,
    )


def _make_report():
    return CoverageReport(
        total_error_types=2,
        intercepted_error_type_count=1,
        unintercepted_error_type_count=1,
        overall_percentage=50,
        per_error_detail=(
            ErrorCoverageDetail("LoginError", 100.0, ("b.ts",)),
            ErrorCoverageDetail("QuotaError", 0.0, ()),
        ),
    )


def _recording_formatter():
    console = Console(record=True, width=120, color_system=None)
    return RichFormatter(console), console


class TestGetFormatter:
    def test_known(self):
        assert isinstance(get_formatter("rich"), RichFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_flow(self):
        data = json.loads(JsonFormatter().format_flow(_make_flow()))
        assert data["error"] == "LoginError"
        assert data["unguarded_in"] == ["b.ts"]

    def test_coverage(self):
        data = json.loads(JsonFormatter().format_coverage(_make_report()))
        assert data["percentage"] == 50
        assert [d["error"] for d in data["details"]] == ["LoginError", "QuotaError"]

    def test_files(self):
        data = json.loads(JsonFormatter().format_files(_make_analysis()))
        assert data["skipped"] == [{"path": "c.txt", "reason": "unsupported file type"}]


class TestRichFormatter:
    def test_flow_lists_risky_files(self):
        formatter, console = _recording_formatter()
        formatter.render_flow(_make_flow())
        text = console.export_text()
        assert "Error Flow: LoginError" in text
        assert "Defined in: a.ts" in text
        assert "Not intercepted in (risky)" in text

    def test_flow_fully_intercepted(self):
        formatter, console = _recording_formatter()
        formatter.render_flow(
            ErrorFlow("LoginError", "a.ts", raised_in=("b.ts",), intercepted_in=("b.ts",))
        )
        assert "All raises are intercepted." in console.export_text()

    def test_flow_without_declaration(self):
        formatter, console = _recording_formatter()
        formatter.render_flow(ErrorFlow("HttpError", None, raised_in=("b.ts",), unguarded_in=("b.ts",)))
        assert "(not found)" in console.export_text()

    def test_coverage(self):
        formatter, console = _recording_formatter()
        formatter.render_coverage(_make_report())
        text = console.export_text()
        assert "Error Coverage Report" in text
        assert "Coverage: 50%" in text
        assert "LoginError is not intercepted in 1 file(s)" in text

    def test_files(self):
        formatter, console = _recording_formatter()
        formatter.render_files(_make_analysis())
        text = console.export_text()
        assert "LoginError extends Error" in text
        assert "c.txt: unsupported file type" in text
        assert "2 file(s) analyzed, 1 skipped" in text

    def test_format_returns_string(self):
        formatter, _ = _recording_formatter()
        assert "Error Flow: LoginError" in formatter.format_flow(_make_flow())
