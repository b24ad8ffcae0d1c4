"""Tests for SourceIndex: parsing, caching and failure reporting."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from errorflow.config import AnalysisConfig
from errorflow.exceptions import SourceUnavailable
from errorflow.scanning import SourceIndex


class TestSourceIndexParsing:
    """get() parses supported files."""

    def test_get_returns_parsed_source(self, index, write_sources):
        root = write_sources({"a.ts": "export class A {}\n"})

        parsed = index.get(root / "a.ts")

        assert parsed.language == "typescript"
        assert parsed.root.type == "program"
        assert parsed.source == b"export class A {}\n"
        assert not parsed.has_syntax_errors

    def test_javascript_file(self, index, write_sources):
        root = write_sources({"a.js": "class A extends Error {}\n"})
        assert index.get(root / "a.js").language == "javascript"

    def test_syntax_errors_tolerated_by_default(self, index, write_sources):
        """A partially broken file still yields a tree."""
        root = write_sources({"broken.ts": "class A extends Error {\n  oops(: {\n"})

        parsed = index.get(root / "broken.ts")

        assert parsed.has_syntax_errors


class TestSourceIndexCache:
    """Each path is parsed at most once."""

    def test_repeated_get_does_not_reparse(self, index, write_sources):
        root = write_sources({"a.ts": "const x = 1;\n"})

        first = index.get(root / "a.ts")
        second = index.get(root / "a.ts")

        assert first is second
        assert index.parse_count == 1
        assert len(index) == 1

    def test_equivalent_paths_share_entry(self, index, write_sources):
        root = write_sources({"src/a.ts": "const x = 1;\n"})

        index.get(root / "src" / "a.ts")
        index.get(root / "src" / ".." / "src" / "a.ts")

        assert index.parse_count == 1
        assert (root / "src" / "a.ts") in index

    def test_concurrent_get_parses_once(self, index, write_sources):
        """Concurrent lookups of one path write the cache entry once."""
        root = write_sources({"a.ts": "throw new Error('x');\n"})
        path = root / "a.ts"

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: index.get(path), range(32)))

        assert index.parse_count == 1
        assert all(r is results[0] for r in results)

    def test_clear_drops_entries(self, index, write_sources):
        root = write_sources({"a.ts": "const x = 1;\n"})
        index.get(root / "a.ts")

        index.clear()
        index.get(root / "a.ts")

        assert index.parse_count == 2


class TestSourceUnavailable:
    """Unreadable or unparseable files raise SourceUnavailable."""

    def test_missing_file(self, index, tmp_path):
        with pytest.raises(SourceUnavailable) as exc_info:
            index.get(tmp_path / "missing.ts")
        assert "cannot stat" in exc_info.value.reason

    def test_unsupported_extension(self, index, write_sources):
        root = write_sources({"main.py": "print('hi')\n"})
        with pytest.raises(SourceUnavailable) as exc_info:
            index.get(root / "main.py")
        assert "unsupported" in exc_info.value.reason

    def test_file_too_large(self, write_sources):
        root = write_sources({"big.ts": "// x\n" * 1000})
        index = SourceIndex(AnalysisConfig(max_file_size_mb=0.001))

        with pytest.raises(SourceUnavailable) as exc_info:
            index.get(root / "big.ts")
        assert "limit" in exc_info.value.reason

    def test_strict_parse_rejects_syntax_errors(self, write_sources):
        root = write_sources({"broken.ts": "class A extends Error {\n  oops(: {\n"})
        index = SourceIndex(AnalysisConfig(strict_parse=True))

        with pytest.raises(SourceUnavailable) as exc_info:
            index.get(root / "broken.ts")
        assert "syntax" in exc_info.value.reason

    def test_symlink_loop(self, index, tmp_path):
        loop = tmp_path / "loop.ts"
        loop.symlink_to(loop)

        with pytest.raises(SourceUnavailable):
            index.get(loop)
        assert loop not in index

    def test_failures_are_not_cached(self, index, tmp_path):
        with pytest.raises(SourceUnavailable):
            index.get(tmp_path / "later.ts")

        (tmp_path / "later.ts").write_text("const x = 1;\n")

        assert index.get(tmp_path / "later.ts").language == "typescript"
