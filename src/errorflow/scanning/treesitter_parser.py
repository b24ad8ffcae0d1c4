"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across the TypeScript,
TSX and JavaScript grammars.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
    captures = parser.query(tree, query_str, "typescript")
"""

from __future__ import annotations

import threading
from typing import Any

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

# Language name -> (grammar module, factory function name)
_GRAMMARS: dict[str, tuple[Any, str]] = {
    "typescript": (tree_sitter_typescript, "language_typescript"),
    "tsx": (tree_sitter_typescript, "language_tsx"),
    "javascript": (tree_sitter_javascript, "language"),
}

Capture = tuple[tree_sitter.Node, str]


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-language parsing.

    A tree-sitter ``Parser`` must not be driven by two threads at once, so
    each language parser is guarded by its own lock. Trees returned by
    ``parse()`` are never mutated afterwards and may be queried from any
    thread.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, tree_sitter.Parser] = {}
        self._languages: dict[str, tree_sitter.Language] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._queries: dict[tuple[str, str], tree_sitter.Query] = {}

        for lang_name, (module, factory) in _GRAMMARS.items():
            lang_obj = tree_sitter.Language(getattr(module, factory)())
            self._languages[lang_name] = lang_obj
            self._parsers[lang_name] = tree_sitter.Parser(lang_obj)
            self._locks[lang_name] = threading.Lock()

    def parse(self, code: bytes, language: str) -> tree_sitter.Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name (e.g., "typescript")

        Returns:
            Tree object, or None if the language is not supported
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None

        with self._locks[language]:
            return parser.parse(code)

    def query(self, tree: tree_sitter.Tree | None, query_str: str, language: str) -> list[Capture]:
        """Run a query on a syntax tree.

        Args:
            tree: Syntax tree from parse()
            query_str: S-expression query string
            language: Language name

        Returns:
            List of (node, capture_name) tuples in source order
        """
        if tree is None:
            return []
        return self.query_node(tree.root_node, query_str, language)

    def query_node(self, node: tree_sitter.Node, query_str: str, language: str) -> list[Capture]:
        """Run a query restricted to the subtree rooted at ``node``."""
        query = self._compiled(query_str, language)
        if query is None:
            return []

        # tree-sitter 0.25+: use QueryCursor for execution
        cursor = tree_sitter.QueryCursor(query)
        result: list[Capture] = []
        for _pattern_id, captures_dict in cursor.matches(node):
            for capture_name, nodes in captures_dict.items():
                for captured in nodes:
                    result.append((captured, capture_name))
        result.sort(key=lambda capture: capture[0].start_byte)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers

    def _compiled(self, query_str: str, language: str) -> tree_sitter.Query | None:
        key = (language, query_str)
        query = self._queries.get(key)
        if query is None:
            lang = self._languages.get(language)
            if lang is None:
                return None
            query = tree_sitter.Query(lang, query_str)
            self._queries[key] = query
        return query


def node_text(node: tree_sitter.Node | None) -> str:
    """Decoded source text of a node ("" for None)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")
