"""Tests for ErrorClassifier and supertype matching policies."""

import pytest

from errorflow.analysis.classifier import (
    ANONYMOUS_ERROR_NAME,
    ErrorClassifier,
    ExactMatcher,
    SubstringMatcher,
    matcher_from_config,
)
from errorflow.config import AnalysisConfig

SAMPLE_ERRORS = """\
export class LoginError extends Error {
  constructor(message: string) {
    super(message);
  }
}

class RateLimitError extends RangeError {}

export abstract class DomainError<T> extends TypedError<T> {}

export class ApiError extends errors.BaseError {}

class UserService {}

class Repository extends BaseRepository {}

interface ErrorLike extends Error {}
"""


@pytest.fixture
def classify(index, write_sources):
    def _classify(code, filename="a.ts", matcher=None):
        root = write_sources({filename: code})
        parsed = index.get(root / filename)
        return ErrorClassifier(matcher).classify(parsed, filename)

    return _classify


class TestErrorClassifier:
    """Top-level error declarations."""

    def test_finds_error_classes_in_order(self, classify):
        found = classify(SAMPLE_ERRORS)
        assert [e.name for e in found] == ["LoginError", "RateLimitError", "DomainError", "ApiError"]

    def test_records_supertype_text(self, classify):
        found = {e.name: e.supertype_name for e in classify(SAMPLE_ERRORS)}
        assert found["LoginError"] == "Error"
        assert found["RateLimitError"] == "RangeError"
        assert found["DomainError"] == "TypedError<T>"
        assert found["ApiError"] == "errors.BaseError"

    def test_records_location(self, classify):
        found = {e.name: e.location for e in classify(SAMPLE_ERRORS)}
        assert found["LoginError"].file == "a.ts"
        assert found["LoginError"].line == 1
        assert found["RateLimitError"].line == 7

    def test_ignores_non_error_classes(self, classify):
        names = [e.name for e in classify(SAMPLE_ERRORS)]
        assert "UserService" not in names
        assert "Repository" not in names

    def test_ignores_interfaces(self, classify):
        assert "ErrorLike" not in [e.name for e in classify(SAMPLE_ERRORS)]

    def test_implements_only_is_not_an_error(self, classify):
        assert classify("class Handler implements ErrorHandler {}\n") == []

    def test_only_top_level_declarations(self, classify):
        code = "function make() {\n  class Local extends Error {}\n  return Local;\n}\n"
        assert classify(code) == []

    def test_anonymous_default_export(self, classify):
        found = classify("export default class extends Error {}\n")
        assert [e.name for e in found] == [ANONYMOUS_ERROR_NAME]

    def test_javascript_heritage(self, classify):
        found = classify("class NotFound extends Error {}\nmodule.exports = { NotFound };\n", "errors.js")
        assert [(e.name, e.supertype_name) for e in found] == [("NotFound", "Error")]

    def test_empty_file(self, classify):
        assert classify("") == []


class TestMatchers:
    """Substring favours recall, exact favours precision."""

    def test_substring_matches_generic_and_qualified(self):
        matcher = SubstringMatcher()
        assert matcher.is_error_supertype("CustomError<T>")
        assert matcher.is_error_supertype("errors.BaseError")
        assert matcher.is_error_supertype("ErrorBoundary")
        assert not matcher.is_error_supertype("Exception")

    def test_substring_is_case_sensitive(self):
        assert not SubstringMatcher().is_error_supertype("BaseERROR")

    def test_exact_strips_qualifier_and_type_arguments(self):
        matcher = ExactMatcher()
        assert matcher.is_error_supertype("Error")
        assert matcher.is_error_supertype("TypedError<Payload>")
        assert matcher.is_error_supertype("globalThis.TypeError")
        assert not matcher.is_error_supertype("ErrorBoundary")
        assert not matcher.is_error_supertype("CustomError")

    def test_exact_policy_in_classifier(self, classify):
        code = "class A extends Error {}\nclass B extends ErrorBoundary {}\n"
        found = classify(code, matcher=ExactMatcher())
        assert [e.name for e in found] == ["A"]

    def test_custom_supertype_names(self, classify):
        code = "class A extends Exception {}\n"
        assert [e.name for e in classify(code, matcher=SubstringMatcher(["Exception"]))] == ["A"]

    def test_matcher_from_config(self):
        assert isinstance(matcher_from_config(AnalysisConfig()), SubstringMatcher)
        assert isinstance(
            matcher_from_config(AnalysisConfig(supertype_match="exact")), ExactMatcher
        )
