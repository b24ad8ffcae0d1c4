"""Tests for the errorflow exception hierarchy."""

from pathlib import Path

from errorflow.exceptions import (
    AnalysisError,
    ConfigurationError,
    ErrorFlowError,
    InvalidConfigError,
    InvalidPathError,
    SourceUnavailable,
    UnknownTarget,
)


class TestHierarchy:
    """Every error derives from ErrorFlowError."""

    def test_analysis_errors(self):
        assert issubclass(SourceUnavailable, AnalysisError)
        assert issubclass(UnknownTarget, AnalysisError)
        assert issubclass(AnalysisError, ErrorFlowError)

    def test_configuration_errors(self):
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigurationError, ErrorFlowError)


class TestSourceUnavailable:
    def test_carries_path_and_reason(self):
        err = SourceUnavailable(Path("src/a.ts"), "cannot read file")
        assert err.filepath == Path("src/a.ts")
        assert err.reason == "cannot read file"

    def test_str_includes_details(self):
        err = SourceUnavailable("a.ts", "unsupported file type")
        assert str(err) == (
            "Source unavailable: a.ts (filepath=a.ts, reason=unsupported file type)"
        )


class TestUnknownTarget:
    def test_carries_name(self):
        err = UnknownTarget("LoginError", files_scanned=3)
        assert err.error_name == "LoginError"
        assert err.files_scanned == 3
        assert err.message == "Error not found: LoginError"


class TestErrorFlowError:
    def test_without_details(self):
        assert str(ErrorFlowError("boom")) == "boom"
        assert ErrorFlowError("boom").details == {}

    def test_invalid_config_error(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert err.key == "workers"
        assert "reason=must be at least 1" in str(err)
