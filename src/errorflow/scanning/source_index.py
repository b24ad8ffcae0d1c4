"""SourceIndex: parses source files into tree-sitter trees, once per path.

The index is the only component that touches the filesystem. Everything
downstream works on ``ParsedSource`` values and is a pure function of them.

Usage:
    index = SourceIndex(config)
    parsed = index.get(Path("src/auth.ts"))
    parsed.tree.root_node
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tree_sitter

from ..config import AnalysisConfig
from ..exceptions import SourceUnavailable
from .languages import detect_language
from .treesitter_parser import TreeSitterParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedSource:
    """A parsed source file.

    Attributes:
        path: Resolved path of the file
        language: Grammar used to parse it
        source: Raw file bytes the tree was built from
        tree: tree-sitter syntax tree
    """

    path: Path
    language: str
    source: bytes
    tree: tree_sitter.Tree

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def has_syntax_errors(self) -> bool:
        return self.tree.root_node.has_error


class SourceIndex:
    """Per-process cache of parsed source files.

    Each cache entry is written at most once: concurrent ``get()`` calls for
    the same path serialize on a per-path lock, and only the first parses.
    Calls for different paths proceed in parallel.

    Attributes:
        parse_count: Number of files actually parsed (cache misses)
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        parser: Optional[TreeSitterParser] = None,
    ) -> None:
        self._config = config or AnalysisConfig()
        self._parser = parser or TreeSitterParser()
        self._trees: dict[Path, ParsedSource] = {}
        self._key_locks: dict[Path, threading.Lock] = {}
        self._lock = threading.Lock()
        self.parse_count = 0

    @property
    def parser(self) -> TreeSitterParser:
        return self._parser

    def get(self, path: Path) -> ParsedSource:
        """Return the parsed tree for ``path``, parsing it on first use.

        Raises:
            SourceUnavailable: If the file is missing, unreadable, too large,
                in an unsupported language, or (with ``strict_parse``)
                contains syntax errors
        """
        try:
            key = Path(path).resolve()
        except (OSError, RuntimeError) as e:
            # symlink loops raise RuntimeError before Python 3.13
            raise SourceUnavailable(path, f"cannot resolve path: {e}")

        cached = self._trees.get(key)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            cached = self._trees.get(key)
            if cached is not None:
                return cached

            parsed = self._parse(key)
            self._trees[key] = parsed
            with self._lock:
                self.parse_count += 1
            return parsed

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        try:
            return Path(path).resolve() in self._trees
        except (OSError, RuntimeError):
            return False

    def __len__(self) -> int:
        return len(self._trees)

    def clear(self) -> None:
        """Drop every cached tree."""
        with self._lock:
            self._trees.clear()
            self._key_locks.clear()

    def _parse(self, path: Path) -> ParsedSource:
        language = detect_language(path)
        if not self._parser.is_language_supported(language):
            raise SourceUnavailable(path, f"unsupported file type '{path.suffix}'")

        try:
            size = path.stat().st_size
        except OSError as e:
            raise SourceUnavailable(path, f"cannot stat file: {e.strerror or e}")
        if size > self._config.max_file_size_bytes:
            raise SourceUnavailable(
                path,
                f"file is {size} bytes, limit is {self._config.max_file_size_bytes}",
            )

        try:
            source = path.read_bytes()
        except OSError as e:
            raise SourceUnavailable(path, f"cannot read file: {e.strerror or e}")

        tree = self._parser.parse(source, language)
        if tree is None:
            raise SourceUnavailable(path, f"no parser for language '{language}'")

        if tree.root_node.has_error:
            if self._config.strict_parse:
                raise SourceUnavailable(path, "syntax errors in file")
            logger.debug(f"{path}: syntax errors, continuing with partial tree")

        return ParsedSource(path=path, language=language, source=source, tree=tree)
